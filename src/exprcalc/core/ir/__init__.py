"""
exprcalc intermediate representation (IR) types.

All AST node types are re-exported from this package.
"""

from .expressions import (
    BinaryOp,
    BinaryOperator,
    Call,
    Expr,
    Literal,
    UnaryOp,
    UnaryOperator,
    Variable,
)

__all__ = [
    "BinaryOp",
    "BinaryOperator",
    "Call",
    "Expr",
    "Literal",
    "UnaryOp",
    "UnaryOperator",
    "Variable",
]
