"""
Expression AST for exprcalc.

A closed set of immutable node types produced by the parser and consumed by
the evaluator:

- Literal: 1, 2.5, 1.5e-3
- Variable: pi, x, rate_2
- Unary operations: -x, +x, x!
- Binary operations: +, -, *, /, %, ^
- Function calls: sqrt(2), max(1, 2, 3), rand()

``str(node)`` renders a canonical fully parenthesized form that parses back
to an equivalent tree.
"""

from __future__ import annotations

import math
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOperator(StrEnum):
    """Infix operators."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"


class UnaryOperator(StrEnum):
    """Prefix and postfix operators."""

    NEG = "-"
    POS = "+"
    FACTORIAL = "!"

    @property
    def is_postfix(self) -> bool:
        return self is UnaryOperator.FACTORIAL


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A numeric literal."""

    value: float = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if math.isinf(self.value):
            # "1e999" re-tokenizes to inf; "inf" would read as a variable
            return "1e999" if self.value > 0 else "(-1e999)"
        if self.value < 0:
            return f"(-{-self.value!r})"
        return repr(self.value)


class Variable(BaseModel):
    """Reference to a named constant in the environment."""

    name: str = Field(description="Identifier")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class UnaryOp(BaseModel):
    """Unary operation: op operand (prefix) or operand op (postfix)."""

    op: UnaryOperator
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.op.is_postfix:
            return f"({self.operand}{self.op.value})"
        return f"({self.op.value}{self.operand})"


class BinaryOp(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOperator
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        # Long left-nested chains (1 + 2 + ... + n) are rendered in a loop
        spine: list[BinaryOp] = [self]
        node = self.left
        while isinstance(node, BinaryOp):
            spine.append(node)
            node = node.left

        text = str(node)
        for op_node in reversed(spine):
            text = f"({text} {op_node.op.value} {op_node.right})"
        return text


class Call(BaseModel):
    """
    Function call: name(arg1, arg2, ...).

    The function is resolved against the environment at evaluation time,
    so the parser accepts any identifier followed by an argument list.
    """

    name: str = Field(description="Function name")
    args: tuple[Expr, ...] = Field(default=(), description="Arguments, in call order")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        args_str = ", ".join(str(a) for a in self.args)
        return f"{self.name}({args_str})"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | Variable | UnaryOp | BinaryOp | Call

# Rebuild models for recursive forward references
UnaryOp.model_rebuild()
BinaryOp.model_rebuild()
Call.model_rebuild()
