"""
Error types for exprcalc tokenizing, parsing, and evaluation.

Every stage raises a subclass of :class:`EngineError`. Errors carry the
character offset of the offending input where one exists, so callers can
point at it with :meth:`EngineError.format`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from exprcalc.core.expression_lang.tokenizer import Token


class EngineError(Exception):
    """Base exception for all expression engine errors."""

    def __init__(self, message: str, pos: int | None = None) -> None:
        self.message = message
        self.pos = pos
        super().__init__(message)

    def format(self, source: str | None = None) -> str:
        """
        Format the error as a human-readable message.

        When *source* is given and the error has a position, the source line
        is echoed with a caret marker under the offending character:

            error: Unexpected character '@' at offset 2
              1 @ 2
                ^
        """
        header = f"error: {self.message}"
        if source is None or self.pos is None:
            return header
        return f"{header}\n{_format_snippet(source, self.pos)}"


def _format_snippet(source: str, pos: int) -> str:
    """Echo the line containing *pos* with a ``^`` marker below it."""
    line_start = source.rfind("\n", 0, pos) + 1
    line_end = source.find("\n", pos)
    if line_end == -1:
        line_end = len(source)
    line = source[line_start:line_end]
    column = pos - line_start
    return f"  {line}\n  {' ' * column}^"


# ---------------------------------------------------------------------------
# Lexical errors
# ---------------------------------------------------------------------------


class LexError(EngineError):
    """
    Raised when the tokenizer cannot classify the input.

    Examples:
    - Characters outside the recognized alphabet (``@``, ``#``)
    - Malformed numeric literals (``1.2.3``, ``1e``)
    """

    pos: int


class UnexpectedCharacterError(LexError):
    """A character that starts no token."""

    def __init__(self, char: str, pos: int) -> None:
        self.char = char
        super().__init__(f"Unexpected character {char!r} at offset {pos}", pos)


class MalformedNumberError(LexError):
    """A digit/decimal-point run that is not a valid number."""

    def __init__(self, text: str, pos: int) -> None:
        self.text = text
        super().__init__(f"Malformed number {text!r} at offset {pos}", pos)


# ---------------------------------------------------------------------------
# Parse errors
# ---------------------------------------------------------------------------


class ParseError(EngineError):
    """
    Raised when a token stream does not form an expression.

    Examples:
    - A token that cannot start a term (``* 2``)
    - Input ending mid-expression (``1 +``)
    - Unbalanced parentheses (``(1 + 2``)
    - Tokens left over after a complete expression (``1 2``)
    """


class UnexpectedTokenError(ParseError):
    """A token that cannot appear where it was found."""

    def __init__(self, token: Token) -> None:
        self.token = token
        super().__init__(f"Unexpected token {token.text!r} at offset {token.pos}", token.pos)


class UnexpectedEndError(ParseError):
    """Input ended where a term was required."""

    def __init__(self, pos: int) -> None:
        super().__init__("Unexpected end of expression", pos)


class UnclosedParenError(ParseError):
    """An opening parenthesis with no matching closing one."""

    def __init__(self, pos: int) -> None:
        super().__init__(f"Unclosed '(' at offset {pos}", pos)


class TrailingInputError(ParseError):
    """Extra tokens after a complete expression."""

    def __init__(self, token: Token) -> None:
        self.token = token
        super().__init__(
            f"Unexpected input after expression: {token.text!r} at offset {token.pos}",
            token.pos,
        )


class NestingTooDeepError(ParseError):
    """Parentheses, calls, prefix operators or ``^`` chains nested past the limit."""

    def __init__(self, pos: int, limit: int | None = None) -> None:
        self.limit = limit
        detail = f" (limit {limit})" if limit is not None else ""
        super().__init__(f"Expression nested too deeply at offset {pos}{detail}", pos)


# ---------------------------------------------------------------------------
# Evaluation errors
# ---------------------------------------------------------------------------


class EvalError(EngineError):
    """
    Raised when a well-formed expression cannot be evaluated.

    Floating-point domain problems (division by zero, ``sqrt(-1)``) are not
    evaluation errors; they produce ``inf`` or ``nan``.
    """


class UnknownVariableError(EvalError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown variable: {name}")


class UnknownFunctionError(EvalError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown function: {name}()")


class ArityMismatchError(EvalError):
    """
    A call with an argument count the function does not accept.

    *expected* is an exact count, a ``(minimum, maximum)`` range where a
    maximum of None means unbounded, or None when the function has no
    inspectable signature and rejected the call itself.
    """

    def __init__(self, name: str, expected: int | tuple[int, int | None] | None, got: int) -> None:
        self.name = name
        self.expected = expected
        self.got = got
        if expected is None:
            super().__init__(f"{name}() does not accept {got} {_arguments(got)}")
            return
        if isinstance(expected, int):
            takes = f"exactly {expected} {_arguments(expected)}"
        elif expected[1] is None:
            takes = f"at least {expected[0]} {_arguments(expected[0])}"
        else:
            takes = f"from {expected[0]} to {expected[1]} arguments"
        super().__init__(f"{name}() takes {takes} ({got} given)")


class FunctionCallError(EvalError):
    """An environment function raised instead of returning a number."""

    def __init__(self, name: str, error: Exception) -> None:
        self.name = name
        self.error = error
        super().__init__(f"{name}() failed: {error}")


class ExpressionTooDeepError(EvalError):
    """An expression tree too deep to walk on the Python stack."""

    def __init__(self) -> None:
        super().__init__("Expression nested too deeply to evaluate")


def _arguments(count: int) -> str:
    return "argument" if count == 1 else "arguments"


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when an exprcalc configuration file cannot be loaded."""
