"""Cache module memoizing the most recent evaluation."""

from typing import Any

import structlog
from pydantic import PrivateAttr

from .base import Evaluation, Modifier

logger = structlog.get_logger()


class Cache(Modifier, frozen=False, validate_assignment=True):
    """Remembers the source value for the last requested coordinate.

    Repeated requests for exactly the same (x, y, z) return the stored value
    without sampling the source again. Useful when one subtree feeds several
    parents that sample the same point.

    Unlike every other module, Cache allows reassigning ``source``; doing so
    discards the stored value.
    """

    _last_x: float = PrivateAttr(default=0.0)
    _last_y: float = PrivateAttr(default=0.0)
    _last_z: float = PrivateAttr(default=0.0)
    _value: float = PrivateAttr(default=0.0)
    _populated: bool = PrivateAttr(default=False)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if name == "source":
            self.invalidate()
            logger.debug("cache_invalidated", source=type(value).__name__)

    @property
    def populated(self) -> bool:
        """Whether a value is currently stored."""
        return self._populated

    def invalidate(self) -> None:
        """Discard the stored value."""
        self._populated = False

    def evaluate(self, x: float, y: float, z: float) -> Evaluation:
        if not (
            self._populated
            and x == self._last_x
            and y == self._last_y
            and z == self._last_z
        ):
            self._value = yield self.source, x, y, z
            self._last_x = x
            self._last_y = y
            self._last_z = z
            self._populated = True
        return self._value
