"""
Expression evaluator for the exprcalc expression language.

Evaluates expression AST nodes against a read-only environment. Pure
evaluation: no I/O, no side effects, no module-level mutable state, and
no use of Python's eval(). Evaluating the same tree against the same
environment always gives the same float.
"""

from __future__ import annotations

import logging

from exprcalc.core.environment import Environment, EnvironmentLike, as_environment
from exprcalc.core.errors import (
    ArityMismatchError,
    EngineError,
    EvalError,
    ExpressionTooDeepError,
    FunctionCallError,
    UnknownFunctionError,
    UnknownVariableError,
)
from exprcalc.core.expression_lang import numeric
from exprcalc.core.ir.expressions import (
    BinaryOp,
    BinaryOperator,
    Call,
    Expr,
    Literal,
    UnaryOp,
    UnaryOperator,
    Variable,
)

logger = logging.getLogger(__name__)


def evaluate(expr: Expr, env: EnvironmentLike = None) -> float:
    """Evaluate an expression against an environment.

    This is a safe tree-walking interpreter. Only the closed set of AST
    node types is handled.

    Args:
        expr: Parsed expression AST.
        env: Environment, plain mapping of names to numbers and callables,
            or None for the built-in environment.

    Returns:
        The computed value. Division by zero and other floating-point
        domain problems give inf or nan rather than raising.

    Raises:
        EvalError: If a name cannot be resolved, a call has the wrong
            number of arguments, a function raises, or the tree is too deep
            to walk.
    """
    environment = as_environment(env)
    try:
        result = _interpret(expr, environment)
    except RecursionError:
        raise ExpressionTooDeepError() from None
    logger.debug("Evaluated %s = %r", expr, result)
    return result


def _interpret(expr: Expr, env: Environment) -> float:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Literal):
        return expr.value

    if isinstance(expr, Variable):
        return _interpret_variable(expr, env)

    if isinstance(expr, BinaryOp):
        return _interpret_binary(expr, env)

    if isinstance(expr, UnaryOp):
        return _interpret_unary(expr, env)

    if isinstance(expr, Call):
        return _interpret_call(expr, env)

    raise EvalError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_variable(expr: Variable, env: Environment) -> float:
    value = env.get_constant(expr.name)
    if value is None:
        logger.debug("No constant named %r", expr.name)
        raise UnknownVariableError(expr.name)
    return value


def _interpret_binary(expr: BinaryOp, env: Environment) -> float:
    """Evaluate a binary expression. Both sides are always evaluated, left first.

    Left-associative chains such as ``1 + 2 + 3`` nest down the left operand,
    so the left spine is folded in a loop rather than one call per operator.
    """
    spine: list[BinaryOp] = []
    node: Expr = expr
    while isinstance(node, BinaryOp):
        spine.append(node)
        node = node.left

    result = _interpret(node, env)
    for op_node in reversed(spine):
        right = _interpret(op_node.right, env)
        result = _apply_binary(op_node.op, result, right)
    return result


def _apply_binary(op: BinaryOperator, left: float, right: float) -> float:
    if op == BinaryOperator.ADD:
        return left + right
    if op == BinaryOperator.SUB:
        return left - right
    if op == BinaryOperator.MUL:
        return left * right
    if op == BinaryOperator.DIV:
        return numeric.divide(left, right)
    if op == BinaryOperator.MOD:
        return numeric.modulo(left, right)
    if op == BinaryOperator.POW:
        return numeric.power(left, right)

    raise EvalError(f"Unknown binary op: {op}")


def _interpret_unary(expr: UnaryOp, env: Environment) -> float:
    val = _interpret(expr.operand, env)
    if expr.op == UnaryOperator.NEG:
        return -val
    if expr.op == UnaryOperator.POS:
        return val
    if expr.op == UnaryOperator.FACTORIAL:
        return numeric.factorial(val)
    raise EvalError(f"Unknown unary op: {expr.op}")


def _interpret_call(expr: Call, env: Environment) -> float:
    """Evaluate arguments left to right, then invoke the named function."""
    args = [_interpret(a, env) for a in expr.args]

    func = env.get_function(expr.name)
    if func is None:
        logger.debug("No function named %r", expr.name)
        raise UnknownFunctionError(expr.name)

    if not func.accepts(len(args)):
        raise ArityMismatchError(expr.name, func.expected_arity, len(args))

    try:
        return func(*args)
    except (EngineError, RecursionError):
        raise
    except TypeError as e:
        if func.signature_known:
            raise FunctionCallError(expr.name, e) from e
        # No inspectable signature: the callable's own TypeError is the arity check
        raise ArityMismatchError(expr.name, None, len(args)) from e
    except Exception as e:
        raise FunctionCallError(expr.name, e) from e
