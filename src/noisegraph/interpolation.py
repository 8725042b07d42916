"""Interpolation and numeric primitives shared by the noise kernels and modules."""

import math


def s_curve3(a: float) -> float:
    """Cubic S-curve, 3a^2 - 2a^3.

    First derivative is zero at a = 0 and a = 1.
    """
    return a * a * (3.0 - 2.0 * a)


def s_curve5(a: float) -> float:
    """Quintic S-curve, 6a^5 - 15a^4 + 10a^3.

    First and second derivatives are zero at a = 0 and a = 1.
    """
    a3 = a * a * a
    a4 = a3 * a
    a5 = a4 * a
    return (6.0 * a5) - (15.0 * a4) + (10.0 * a3)


def linear_interp(n0: float, n1: float, a: float) -> float:
    """Linear interpolation between n0 (a = 0) and n1 (a = 1)."""
    return ((1.0 - a) * n0) + (a * n1)


def cubic_interp(n0: float, n1: float, n2: float, n3: float, a: float) -> float:
    """Cubic interpolation between n1 (a = 0) and n2 (a = 1).

    Args:
        n0: Value before n1.
        n1: Value at a = 0.
        n2: Value at a = 1.
        n3: Value after n2.
        a: Interpolant in [0, 1].

    Returns:
        Interpolated value.
    """
    p = (n3 - n2) - (n0 - n1)
    q = (n0 - n1) - p
    r = n2 - n0
    s = n1
    return p * a * a * a + q * a * a + r * a + s


def clamp(value: int, lower: int, upper: int) -> int:
    """Clamp an integer index into [lower, upper]."""
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def real_pow(base: float, exponent: float) -> float:
    """``base ** exponent`` as a real number, without raising.

    Zero raised to a negative power is inf. A result too large for a float
    is inf carrying the sign of the exact result. A negative base with a
    fractional exponent has no real result and is NaN.
    """
    try:
        result = base ** exponent
    except ZeroDivisionError:
        return math.inf
    except OverflowError:
        if base < 0.0 and exponent % 2.0 == 1.0:
            return -math.inf
        return math.inf
    if isinstance(result, complex):
        return math.nan
    return result
