"""Typed math operations for the tool-invocation path.

Operations: factorial, log, power, sqrt, gcd, is_prime, trigonometry.
Arguments arrive already typed, so there is no free-text parsing here;
each function checks its own domain and raises from mathrelay.errors.
"""

import math

from ..errors import DomainError, FactorialOverflowError, InvalidArgumentError, OperandTypeError

# Largest n whose factorial still fits in an IEEE double
MAX_FACTORIAL = 170

TRIG_FUNCTIONS = ("sin", "cos", "tan", "asin", "acos", "atan")


def _as_int(value, name: str) -> int:
    """Accept ints and integral floats (JSON numbers often arrive as 4.0)."""
    if isinstance(value, bool):
        raise OperandTypeError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise OperandTypeError(f"{name} must be an integer, got {value!r}")


def factorial(n) -> int:
    n = _as_int(n, "n")
    if n < 0:
        raise DomainError("Factorial is not defined for negative numbers")
    if n > MAX_FACTORIAL:
        raise FactorialOverflowError(f"Factorial of {n} is too large (max {MAX_FACTORIAL})")
    return math.factorial(n)


def log(n: float, base: float = None) -> float:
    """Natural log of n, or log of n in the given base."""
    if n <= 0:
        raise DomainError("Logarithm is only defined for positive numbers")
    if base is None:
        return math.log(n)
    if base <= 0 or base == 1:
        raise DomainError("Logarithm base must be positive and not equal to 1")
    if base == 2:
        return math.log2(n)
    if base == 10:
        return math.log10(n)
    return math.log(n, base)


def power(base: float, exponent: float) -> float:
    """base ** exponent. Never rejects: overflow gives ±inf, undefined reals give nan."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        odd = float(exponent).is_integer() and int(exponent) % 2 == 1
        return -math.inf if base < 0 and odd else math.inf
    except ValueError:
        if base == 0 and exponent < 0:
            return math.inf
        return math.nan


def sqrt(n: float) -> float:
    if n < 0:
        raise DomainError("Cannot take the square root of a negative number")
    return math.sqrt(n)


def gcd(a, b) -> int:
    """Greatest common divisor by the iterative Euclidean algorithm."""
    a = abs(_as_int(a, "a"))
    b = abs(_as_int(b, "b"))
    while b:
        a, b = b, a % b
    return a


def is_prime(n) -> bool:
    n = _as_int(n, "n")
    if n < 2:
        return False
    if n == 2:
        return True
    if n % 2 == 0:
        return False
    for d in range(3, math.isqrt(n) + 1, 2):
        if n % d == 0:
            return False
    return True


def trigonometry(angle: float, function: str) -> float:
    """Apply sin/cos/tan or their inverses. Angles are in radians."""
    if function not in TRIG_FUNCTIONS:
        raise InvalidArgumentError(
            f"Unknown function '{function}'. Use: {', '.join(TRIG_FUNCTIONS)}")
    if function in ("asin", "acos") and not -1 <= angle <= 1:
        raise DomainError(f"{function} is only defined for values in [-1, 1], got {angle}")
    return getattr(math, function)(angle)
