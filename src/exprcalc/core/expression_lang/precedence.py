"""
Operator precedence table for the Pratt parser.

Each operator symbol has at most one entry per fixity. Binding powers are
arbitrary integers; only their ordering matters. Associativity is encoded
in the gap between left and right binding power:

- left-associative entries use ``right_bp == left_bp`` so ``1 - 2 - 3``
  nests leftward as ``(1 - 2) - 3``;
- right-associative entries use ``right_bp < left_bp`` so ``2 ^ 3 ^ 2``
  nests rightward as ``2 ^ (3 ^ 2)``.

Prefix ``-`` sits below ``^`` so ``-2 ^ 2`` reads as ``-(2 ^ 2)``.
"""

from __future__ import annotations

from enum import StrEnum
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class Associativity(StrEnum):
    LEFT = "left"
    RIGHT = "right"


class Fixity(StrEnum):
    PREFIX = "prefix"
    INFIX = "infix"
    POSTFIX = "postfix"


class PrecedenceEntry(BaseModel):
    """Binding powers for one operator in one fixity."""

    symbol: str = Field(description="Operator symbol as written in source")
    left_bp: int = Field(description="Binding power towards the left operand")
    right_bp: int = Field(description="Binding power used to parse the right operand")
    associativity: Associativity = Associativity.LEFT
    fixity: Fixity = Fixity.INFIX

    model_config = ConfigDict(frozen=True)


def _left(symbol: str, bp: int, fixity: Fixity = Fixity.INFIX) -> PrecedenceEntry:
    return PrecedenceEntry(
        symbol=symbol,
        left_bp=bp,
        right_bp=bp,
        associativity=Associativity.LEFT,
        fixity=fixity,
    )


def _right(symbol: str, bp: int, fixity: Fixity = Fixity.INFIX) -> PrecedenceEntry:
    return PrecedenceEntry(
        symbol=symbol,
        left_bp=bp,
        right_bp=bp - 1,
        associativity=Associativity.RIGHT,
        fixity=fixity,
    )


# Prefix operators have no left operand; left_bp is unused and right_bp is
# what the operand is parsed with.
_PREFIX_BP = 25

_ENTRIES: tuple[PrecedenceEntry, ...] = (
    _left("+", 10),
    _left("-", 10),
    _left("*", 20),
    _left("/", 20),
    _left("%", 22),
    PrecedenceEntry(
        symbol="+",
        left_bp=_PREFIX_BP,
        right_bp=_PREFIX_BP,
        associativity=Associativity.RIGHT,
        fixity=Fixity.PREFIX,
    ),
    PrecedenceEntry(
        symbol="-",
        left_bp=_PREFIX_BP,
        right_bp=_PREFIX_BP,
        associativity=Associativity.RIGHT,
        fixity=Fixity.PREFIX,
    ),
    _right("^", 30),
    _left("!", 40, Fixity.POSTFIX),
)


def _build_table(
    entries: tuple[PrecedenceEntry, ...],
) -> MappingProxyType[tuple[str, Fixity], PrecedenceEntry]:
    table: dict[tuple[str, Fixity], PrecedenceEntry] = {}
    for entry in entries:
        key = (entry.symbol, entry.fixity)
        if key in table:
            raise ValueError(f"Duplicate {entry.fixity} entry for operator {entry.symbol!r}")
        table[key] = entry
    return MappingProxyType(table)


PRECEDENCE_TABLE = _build_table(_ENTRIES)


def prefix(symbol: str) -> PrecedenceEntry | None:
    """Entry for *symbol* used as a prefix operator, if any."""
    return PRECEDENCE_TABLE.get((symbol, Fixity.PREFIX))


def infix(symbol: str) -> PrecedenceEntry | None:
    """Entry for *symbol* used as an infix operator, if any."""
    return PRECEDENCE_TABLE.get((symbol, Fixity.INFIX))


def postfix(symbol: str) -> PrecedenceEntry | None:
    """Entry for *symbol* used as a postfix operator, if any."""
    return PRECEDENCE_TABLE.get((symbol, Fixity.POSTFIX))
