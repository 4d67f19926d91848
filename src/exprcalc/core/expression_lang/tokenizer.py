"""
Tokenizer for the exprcalc expression language.

Converts an expression string into a lazy stream of typed tokens.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from enum import StrEnum, auto

from exprcalc.core.errors import MalformedNumberError, UnexpectedCharacterError


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    IDENT = auto()
    OPERATOR = auto()

    # Punctuation
    LPAREN = auto()
    RPAREN = auto()
    COMMA = auto()

    # End of input
    END = auto()


class Token:
    """A single token from the expression tokenizer.

    ``text`` is the lexeme as written in the source. ``value`` holds the
    parsed float for NUMBER tokens and is None otherwise.
    """

    __slots__ = ("kind", "text", "pos", "value")

    def __init__(self, kind: TokenKind, text: str, pos: int, value: float | None = None) -> None:
        self.kind = kind
        self.text = text
        self.pos = pos
        self.value = value

    def __repr__(self) -> str:
        if self.kind == TokenKind.NUMBER:
            return f"Token({self.kind}, {self.value!r}, pos={self.pos})"
        return f"Token({self.kind}, {self.text!r}, pos={self.pos})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (self.kind, self.text, self.pos, self.value) == (
            other.kind,
            other.text,
            other.pos,
            other.value,
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.text, self.pos))


OPERATOR_CHARS = frozenset("+-*/%^!")

_PUNCTUATION: dict[str, TokenKind] = {
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    ",": TokenKind.COMMA,
}

# Maximal digit/decimal-point run; validated separately so "1.2.3" is reported
# as a malformed number rather than split into two tokens.
_MANTISSA_RE = re.compile(r"[0-9.]+")
_EXPONENT_RE = re.compile(r"[eE][+-]?[0-9]*")
_VALID_MANTISSA_RE = re.compile(r"(\d+\.?\d*|\.\d+)")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

_WHITESPACE = " \t\n\r"
_NUMBER_START = frozenset("0123456789.")


def tokenize(source: str) -> Iterator[Token]:
    """Tokenize an expression string.

    Yields tokens lazily and finishes with exactly one END token positioned
    at ``len(source)``.

    Raises:
        UnexpectedCharacterError: On a character outside the alphabet.
        MalformedNumberError: On a numeric literal that is not a float.
    """
    i = 0
    n = len(source)

    while i < n:
        c = source[i]

        if c in _WHITESPACE:
            i += 1
            continue

        if c in _NUMBER_START:
            i, tok = _read_number(source, i)
            yield tok
            continue

        if c.isalpha() or c == "_":
            m = _IDENT_RE.match(source, i)
            if m is None:
                # isalpha() accepts non-ASCII letters the identifier pattern does not
                raise UnexpectedCharacterError(c, i)
            yield Token(TokenKind.IDENT, m.group(0), i)
            i = m.end()
            continue

        if c in OPERATOR_CHARS:
            yield Token(TokenKind.OPERATOR, c, i)
            i += 1
            continue

        if c in _PUNCTUATION:
            yield Token(_PUNCTUATION[c], c, i)
            i += 1
            continue

        raise UnexpectedCharacterError(c, i)

    yield Token(TokenKind.END, "", n)


def _read_number(source: str, start: int) -> tuple[int, Token]:
    """Read a numeric literal with an optional exponent suffix."""
    m = _MANTISSA_RE.match(source, start)
    assert m is not None
    mantissa = m.group(0)
    end = m.end()

    if not _VALID_MANTISSA_RE.fullmatch(mantissa):
        raise MalformedNumberError(mantissa, start)

    # An "e" directly after the mantissa always starts an exponent, so "2e"
    # and "2e+" are malformed rather than a number followed by a name.
    exp_m = _EXPONENT_RE.match(source, end)
    if exp_m is not None:
        exponent = exp_m.group(0)
        if not exponent.lstrip("eE+-"):
            raise MalformedNumberError(source[start : exp_m.end()], start)
        end = exp_m.end()

    text = source[start:end]
    return end, Token(TokenKind.NUMBER, text, start, float(text))
