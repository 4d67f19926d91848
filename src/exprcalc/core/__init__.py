"""Core exprcalc functionality: IR, tokenizer, parser, evaluator, environments, configuration."""

from . import ir
from .environment import Environment, Function, MappingEnvironment, as_environment
from .errors import (
    ArityMismatchError,
    ConfigError,
    EngineError,
    EvalError,
    ExpressionTooDeepError,
    FunctionCallError,
    LexError,
    MalformedNumberError,
    NestingTooDeepError,
    ParseError,
    TrailingInputError,
    UnclosedParenError,
    UnexpectedCharacterError,
    UnexpectedEndError,
    UnexpectedTokenError,
    UnknownFunctionError,
    UnknownVariableError,
)

__all__ = [
    "ArityMismatchError",
    "ConfigError",
    "EngineError",
    "Environment",
    "EvalError",
    "ExpressionTooDeepError",
    "Function",
    "FunctionCallError",
    "LexError",
    "MalformedNumberError",
    "MappingEnvironment",
    "NestingTooDeepError",
    "ParseError",
    "TrailingInputError",
    "UnclosedParenError",
    "UnexpectedCharacterError",
    "UnexpectedEndError",
    "UnexpectedTokenError",
    "UnknownFunctionError",
    "UnknownVariableError",
    "as_environment",
    "ir",
]
