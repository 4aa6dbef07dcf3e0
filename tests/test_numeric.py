"""Unit tests for the typed math operations.

Run:  uv run pytest tests/test_numeric.py
"""

import math

import pytest

from mathrelay.errors import (
    DomainError, FactorialOverflowError, InvalidArgumentError, OperandTypeError,
)
from mathrelay.tools import numeric


# ── Factorial ──────────────────────────────────────────

def test_factorial():
    assert numeric.factorial(0) == 1
    assert numeric.factorial(1) == 1
    assert numeric.factorial(5) == 120
    assert numeric.factorial(170) == math.factorial(170)


def test_factorial_errors():
    with pytest.raises(FactorialOverflowError):
        numeric.factorial(171)
    with pytest.raises(DomainError):
        numeric.factorial(-1)
    with pytest.raises(OperandTypeError):
        numeric.factorial(2.5)


def test_errors_keep_builtin_bases():
    with pytest.raises(OverflowError):
        numeric.factorial(171)
    with pytest.raises(ValueError):
        numeric.sqrt(-1)
    with pytest.raises(TypeError):
        numeric.gcd(1.5, 2)


# ── Log / power / sqrt ─────────────────────────────────

def test_log():
    assert numeric.log(1) == 0
    assert numeric.log(math.e) == pytest.approx(1)
    assert numeric.log(8, 2) == pytest.approx(3)
    for bad in (0, -3):
        with pytest.raises(DomainError):
            numeric.log(bad)
    with pytest.raises(DomainError):
        numeric.log(8, 1)


def test_power():
    assert numeric.power(2, 10) == 1024
    assert numeric.power(4, 0.5) == 2
    assert numeric.power(10, 400) == math.inf
    assert numeric.power(-10, 401) == -math.inf
    assert math.isnan(numeric.power(-8, 1 / 3))
    assert numeric.power(0, -1) == math.inf


def test_sqrt():
    assert numeric.sqrt(4) == 2
    assert numeric.sqrt(0) == 0
    with pytest.raises(DomainError):
        numeric.sqrt(-1)


# ── Number theory ──────────────────────────────────────

@pytest.mark.parametrize("a, b, expected", [(12, 18, 6), (-12, 18, 6), (7, 13, 1), (0, 0, 0), (48.0, 36, 12)])
def test_gcd(a, b, expected):
    assert numeric.gcd(a, b) == expected


def test_gcd_properties():
    for a in range(-30, 31):
        assert numeric.gcd(a, 0) == abs(a)
        for b in (-9, 1, 4, 15, 28):
            assert numeric.gcd(a, b) == numeric.gcd(b, a) == math.gcd(a, b)


def test_gcd_rejects_non_integers():
    with pytest.raises(OperandTypeError):
        numeric.gcd(1.5, 3)
    with pytest.raises(OperandTypeError):
        numeric.gcd(True, 3)


def _slow_prime(n):
    return n >= 2 and all(n % d for d in range(2, n))


def test_is_prime_matches_ground_truth():
    for n in range(-10, 1001):
        assert numeric.is_prime(n) == _slow_prime(n), n


def test_is_prime_edges():
    assert numeric.is_prime(2) is True
    assert numeric.is_prime(1) is False
    assert numeric.is_prime(7919) is True
    with pytest.raises(OperandTypeError):
        numeric.is_prime(7.5)


# ── Trigonometry ───────────────────────────────────────

def test_trigonometry():
    assert numeric.trigonometry(0, "sin") == 0
    assert numeric.trigonometry(0, "cos") == 1
    assert numeric.trigonometry(1, "asin") == pytest.approx(math.pi / 2)
    assert numeric.trigonometry(1, "atan") == pytest.approx(math.pi / 4)


def test_trigonometry_errors():
    with pytest.raises(DomainError):
        numeric.trigonometry(2, "asin")
    with pytest.raises(DomainError):
        numeric.trigonometry(-1.5, "acos")
    with pytest.raises(InvalidArgumentError):
        numeric.trigonometry(0, "sec")
