"""
exprcalc - arithmetic expression engine.

A tokenizer, Pratt parser, and tree-walking evaluator for arithmetic
expressions, usable as a library and from the ``exprcalc`` command line.

Usage:
    import exprcalc

    exprcalc.eval_expr("1 + 2 * 3")
    # 7.0

    ast = exprcalc.parse("(1 + 2) * x")
    exprcalc.evaluate(ast, {"x": 3})
    # 9.0
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.builtins import build_environment, default_environment
from .core.environment import Environment, Function, MappingEnvironment
from .core.errors import EngineError, EvalError, LexError, ParseError
from .core.expression_lang import eval_expr, evaluate, parse, tokenize

__version__ = get_version()

__all__ = [
    "__version__",
    "Environment",
    "EngineError",
    "EvalError",
    "Function",
    "LexError",
    "MappingEnvironment",
    "ParseError",
    "build_environment",
    "default_environment",
    "eval_expr",
    "evaluate",
    "ir",
    "parse",
    "tokenize",
]
