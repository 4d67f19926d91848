"""
Symbol environment for expression evaluation.

The evaluator resolves variables and function calls through an
:class:`Environment`: a read-only capability supplied by the caller. The
engine only ever queries single names; it never enumerates or mutates the
environment, so one environment can be shared across threads.

Usage:
    from exprcalc.core.environment import MappingEnvironment, as_environment

    env = MappingEnvironment(constants={"rate": 0.2}, functions={"double": lambda x: 2 * x})
    env = as_environment({"rate": 0.2, "double": lambda x: 2 * x})  # same thing
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class Function(BaseModel):
    """A named numeric function and the argument counts it accepts.

    ``arity`` is an exact argument count. Otherwise ``min_args`` and
    ``max_args`` give a range, with a ``max_args`` of None meaning any number
    of further arguments. When all three are None the signature is unknown
    and the function itself decides whether to accept the call.
    """

    name: str = Field(description="Name the function is called by")
    impl: Callable[..., float] = Field(description="The callable invoked with float arguments")
    arity: int | None = Field(default=None, ge=0, description="Fixed argument count, or None")
    min_args: int | None = Field(default=None, ge=0, description="Fewest arguments accepted")
    max_args: int | None = Field(default=None, ge=0, description="Most arguments accepted")

    model_config = ConfigDict(frozen=True)

    def __call__(self, *args: float) -> float:
        return float(self.impl(*args))

    @property
    def signature_known(self) -> bool:
        return self.arity is not None or self.min_args is not None

    @property
    def expected_arity(self) -> int | tuple[int, int | None] | None:
        """The exact count, the ``(min, max)`` range, or None if unknown."""
        if self.arity is not None:
            return self.arity
        if self.min_args is not None:
            return (self.min_args, self.max_args)
        return None

    def accepts(self, count: int) -> bool:
        """Whether a call with *count* arguments fits the known signature."""
        if self.arity is not None:
            return count == self.arity
        if self.min_args is not None and count < self.min_args:
            return False
        return self.max_args is None or count <= self.max_args

    @classmethod
    def wrap(cls, name: str, impl: Callable[..., Any], arity: int | None = None) -> Function:
        """Build a Function, inferring its accepted argument counts from *impl*."""
        if isinstance(impl, Function):
            return impl
        if arity is not None:
            return cls(name=name, impl=impl, arity=arity)

        bounds = arity_bounds(impl)
        if bounds is None:
            return cls(name=name, impl=impl)
        low, high = bounds
        if low == high:
            return cls(name=name, impl=impl, arity=low)
        return cls(name=name, impl=impl, min_args=low, max_args=high)


def arity_bounds(impl: Callable[..., Any]) -> tuple[int, int | None] | None:
    """Return the ``(min, max)`` positional argument counts of *impl*.

    Parameters with defaults widen the range and ``*args`` removes the
    upper bound. Returns None when the signature cannot be inspected (many
    C builtins such as :func:`max`) or when a keyword-only parameter is
    required, since such a callable cannot be called positionally.
    """
    try:
        sig = inspect.signature(impl)
    except (TypeError, ValueError):
        return None

    low = 0
    high: int | None = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            high = None
        elif param.kind == inspect.Parameter.KEYWORD_ONLY:
            if param.default is inspect.Parameter.empty:
                return None
        elif param.kind != inspect.Parameter.VAR_KEYWORD:
            if param.default is inspect.Parameter.empty:
                low += 1
            if high is not None:
                high += 1
    return low, high


@runtime_checkable
class Environment(Protocol):
    """Read-only lookup of named constants and functions."""

    def get_constant(self, name: str) -> float | None: ...

    def get_function(self, name: str) -> Function | None: ...


class MappingEnvironment:
    """Environment backed by two mappings, with an optional parent.

    Names missing here are looked up in *parent*, so user definitions can be
    layered over the built-ins without copying them.
    """

    __slots__ = ("_constants", "_functions", "_parent")

    def __init__(
        self,
        constants: Mapping[str, float] | None = None,
        functions: Mapping[str, Callable[..., Any]] | None = None,
        parent: Environment | None = None,
    ) -> None:
        self._constants: Mapping[str, float] = MappingProxyType(
            {name: float(value) for name, value in (constants or {}).items()}
        )
        self._functions: Mapping[str, Function] = MappingProxyType(
            {name: Function.wrap(name, impl) for name, impl in (functions or {}).items()}
        )
        self._parent = parent

    def __repr__(self) -> str:
        return (
            f"MappingEnvironment(constants={sorted(self._constants)}, "
            f"functions={sorted(self._functions)}, parent={self._parent!r})"
        )

    def get_constant(self, name: str) -> float | None:
        value = self._constants.get(name)
        if value is None and self._parent is not None:
            return self._parent.get_constant(name)
        return value

    def get_function(self, name: str) -> Function | None:
        func = self._functions.get(name)
        if func is None and self._parent is not None:
            return self._parent.get_function(name)
        return func


EnvironmentLike = Environment | Mapping[str, Any] | None


def as_environment(env: EnvironmentLike) -> Environment:
    """Coerce *env* into an :class:`Environment`.

    - None gives the default built-in environment.
    - An Environment is returned unchanged.
    - A plain mapping is split into constants (numbers) and functions
      (callables); the built-ins are not included.
    """
    if env is None:
        from exprcalc.core.builtins import default_environment

        return default_environment()

    if isinstance(env, Environment):
        return env

    if isinstance(env, Mapping):
        constants: dict[str, float] = {}
        functions: dict[str, Callable[..., Any]] = {}
        for name, value in env.items():
            if callable(value):
                functions[name] = value
            elif isinstance(value, (int, float)) and not isinstance(value, bool):
                constants[name] = float(value)
            else:
                raise TypeError(
                    f"Environment entry {name!r} must be a number or callable, "
                    f"got {type(value).__name__}"
                )
        return MappingEnvironment(constants=constants, functions=functions)

    raise TypeError(f"Cannot use {type(env).__name__} as an environment")
