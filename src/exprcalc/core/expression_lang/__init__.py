"""
exprcalc expression language.

Tokenizer, Pratt parser, and evaluator for arithmetic expressions.

Usage:
    from exprcalc.core.expression_lang import eval_expr, evaluate, parse

    expr = parse("2 ^ 3 ^ 2")
    evaluate(expr)
    # 512.0

    eval_expr("max(a, b) * 2", {"a": 1, "b": 4, "max": max})
    # 8.0
"""

from exprcalc.core.environment import EnvironmentLike
from exprcalc.core.expression_lang.evaluator import evaluate
from exprcalc.core.expression_lang.parser import parse_expr, parse_tokens
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize

parse = parse_expr


def eval_expr(source: str, env: EnvironmentLike = None) -> float:
    """Parse and evaluate *source* in one step.

    Raises:
        EngineError: The first lexing, parsing, or evaluation error.
    """
    return evaluate(parse_expr(source), env)


__all__ = [
    "Token",
    "TokenKind",
    "eval_expr",
    "evaluate",
    "parse",
    "parse_expr",
    "parse_tokens",
    "tokenize",
]
