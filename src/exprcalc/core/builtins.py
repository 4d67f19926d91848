"""
Built-in constants and functions available to every expression by default.

Functions follow IEEE conventions rather than raising: ``sqrt(-1)`` is nan,
``ln(0)`` is -inf and ``exp(1000)`` is inf.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Callable, Mapping
from typing import Any

from exprcalc.core.environment import Environment, Function, MappingEnvironment
from exprcalc.core.expression_lang.numeric import NAN, safe_math

BUILTIN_CONSTANTS: dict[str, float] = {
    "pi": math.pi,
    "e": math.e,
    "tau": math.tau,
    "inf": math.inf,
    "nan": math.nan,
}


def _min(*args: float) -> float:
    return min(args) if args else NAN


def _max(*args: float) -> float:
    return max(args) if args else NAN


def _integral(func: Callable[[float], int]) -> Callable[[float], float]:
    """Adapt floor/ceil/round, which raise on inf and nan, to pass them through."""

    def wrapper(x: float) -> float:
        if math.isinf(x) or math.isnan(x):
            return x
        return float(func(x))

    wrapper.__name__ = func.__name__
    return wrapper


def _unary(name: str, func: Callable[[float], Any]) -> Function:
    return Function(name=name, impl=safe_math(func), arity=1)


BUILTIN_FUNCTIONS: dict[str, Function] = {
    f.name: f
    for f in (
        # Trigonometry
        _unary("sin", math.sin),
        _unary("cos", math.cos),
        _unary("tan", math.tan),
        _unary("asin", math.asin),
        _unary("acos", math.acos),
        _unary("atan", math.atan),
        Function(name="atan2", impl=safe_math(math.atan2), arity=2),
        Function(name="hypot", impl=safe_math(math.hypot), arity=2),
        # Angle conversion
        _unary("deg", math.degrees),
        _unary("rad", math.radians),
        # Exponentials and logarithms
        _unary("exp", math.exp),
        _unary("ln", math.log),
        _unary("log", math.log10),
        _unary("sqrt", math.sqrt),
        # Rounding
        _unary("abs", math.fabs),
        Function(name="floor", impl=_integral(math.floor), arity=1),
        Function(name="ceil", impl=_integral(math.ceil), arity=1),
        Function(name="round", impl=_integral(round), arity=1),
        # Variadic
        Function(name="min", impl=_min, min_args=0),
        Function(name="max", impl=_max, min_args=0),
    )
}


def build_environment(
    constants: Mapping[str, float] | None = None,
    functions: Mapping[str, Callable[..., Any]] | None = None,
    include_builtins: bool = True,
) -> Environment:
    """Build an environment of user names, layered over the built-ins.

    User names shadow built-ins of the same name.
    """
    parent = default_environment() if include_builtins else None
    return MappingEnvironment(constants=constants, functions=functions, parent=parent)


@functools.cache
def default_environment() -> Environment:
    """The shared, read-only built-in environment."""
    return MappingEnvironment(constants=BUILTIN_CONSTANTS, functions=BUILTIN_FUNCTIONS)
