"""Tests for error formatting and the error hierarchy."""

from __future__ import annotations

import pytest

from exprcalc.core.errors import (
    ArityMismatchError,
    EngineError,
    EvalError,
    ExpressionTooDeepError,
    FunctionCallError,
    LexError,
    MalformedNumberError,
    NestingTooDeepError,
    ParseError,
    UnexpectedCharacterError,
    UnknownVariableError,
)
from exprcalc.core.expression_lang import eval_expr, parse_expr


def test_format_without_source() -> None:
    error = UnknownVariableError("x")
    assert error.format() == "error: Unknown variable: x"
    assert error.format("x + 1") == "error: Unknown variable: x"


def test_format_with_caret() -> None:
    error = UnexpectedCharacterError("#", 4)
    assert error.format("1 + # 2") == "error: Unexpected character '#' at offset 4\n  1 + # 2\n      ^"


def test_format_multiline_source() -> None:
    source = "1 +\n2 $ 3"
    with pytest.raises(LexError) as exc_info:
        parse_expr(source)
    assert exc_info.value.format(source).splitlines()[1:] == ["  2 $ 3", "    ^"]


def test_format_at_end_of_input() -> None:
    with pytest.raises(ParseError) as exc_info:
        parse_expr("1 +")
    assert exc_info.value.format("1 +").endswith("  1 +\n     ^")


def test_hierarchy() -> None:
    assert issubclass(MalformedNumberError, LexError)
    assert issubclass(ArityMismatchError, EvalError)
    assert issubclass(NestingTooDeepError, ParseError)
    assert issubclass(FunctionCallError, EvalError)
    assert issubclass(ExpressionTooDeepError, EvalError)
    for cls in (LexError, ParseError, EvalError):
        assert issubclass(cls, EngineError)


def test_arity_message() -> None:
    assert str(ArityMismatchError("f", 1, 0)) == "f() takes exactly 1 argument (0 given)"
    assert str(ArityMismatchError("g", 2, 3)) == "g() takes exactly 2 arguments (3 given)"


def test_engine_error_catches_every_stage() -> None:
    for source in ["1 # 2", "(1", "y"]:
        with pytest.raises(EngineError):
            eval_expr(source, {})


def test_arity_range_messages() -> None:
    assert str(ArityMismatchError("f", (1, 2), 3)) == "f() takes from 1 to 2 arguments (3 given)"
    assert str(ArityMismatchError("g", (1, None), 0)) == "g() takes at least 1 argument (0 given)"
    assert str(ArityMismatchError("h", None, 0)) == "h() does not accept 0 arguments"


def test_nesting_error_caret() -> None:
    error = NestingTooDeepError(3, 3)
    assert error.format("((((1))))") == (
        "error: Expression nested too deeply at offset 3 (limit 3)\n  ((((1))))\n     ^"
    )
