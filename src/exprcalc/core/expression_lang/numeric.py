"""
IEEE-754 arithmetic for the evaluator.

Python floats are IEEE doubles, but Python raises where IEEE arithmetic
produces special values: ``1.0 / 0.0`` raises ZeroDivisionError and
``math.pow(-8, 1/3)`` raises ValueError. These helpers return ``inf`` and
``nan`` instead, so floating-point domain problems never surface as
exceptions from the engine.
"""

from __future__ import annotations

import math
from collections.abc import Callable

INF = math.inf
NAN = math.nan

# Largest n for which n! is a finite double
_MAX_FACTORIAL = 170


def divide(left: float, right: float) -> float:
    """``left / right`` with IEEE semantics for a zero divisor."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return NAN
        return math.copysign(INF, left) * math.copysign(1.0, right)


def power(base: float, exponent: float) -> float:
    """``base ^ exponent`` following C ``pow`` for special cases."""
    try:
        return math.pow(base, exponent)
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -INF
        return INF
    except ValueError:
        if base == 0 and exponent < 0:
            # pow(±0, y) for y < 0: ±inf for odd integer y, +inf otherwise
            if _is_odd_integer(exponent):
                return math.copysign(INF, base)
            return INF
        return NAN


def modulo(left: float, right: float) -> float:
    """Euclidean remainder: the result lies in ``[0, |right|)``."""
    if right == 0 or math.isinf(left) or math.isnan(left) or math.isnan(right):
        return NAN
    return left % abs(right)


def factorial(value: float) -> float:
    """``value!`` for non-negative integers; nan otherwise, inf on overflow."""
    if math.isnan(value) or value < 0 or not value.is_integer():
        return NAN
    if value > _MAX_FACTORIAL:
        return INF
    return float(math.factorial(int(value)))


def safe_math(func: Callable[..., float]) -> Callable[..., float]:
    """Wrap a ``math`` function so domain and range errors yield nan/inf.

    ``math.log(0)`` raises ValueError where IEEE gives ``-inf``; every other
    domain error maps to ``nan``.
    """

    def wrapper(*args: float) -> float:
        try:
            return float(func(*args))
        except OverflowError:
            return INF
        except ValueError:
            if func in (math.log, math.log10, math.log2) and args and args[0] == 0:
                return -INF
            return NAN

    wrapper.__name__ = getattr(func, "__name__", "wrapper")
    wrapper.__doc__ = getattr(func, "__doc__", None)
    return wrapper


def _is_odd_integer(value: float) -> bool:
    return value.is_integer() and int(value) % 2 == 1
