"""
Pratt (operator-precedence) parser for the exprcalc expression language.

Grammar, with precedence and associativity taken from the precedence table
rather than one rule per level:

    expr      → term (infix_op expr | postfix_op)*
    term      → NUMBER
              | IDENT
              | IDENT "(" (expr ("," expr)*)? ")"
              | "(" expr ")"
              | prefix_op expr
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from exprcalc.core.errors import (
    NestingTooDeepError,
    TrailingInputError,
    UnclosedParenError,
    UnexpectedEndError,
    UnexpectedTokenError,
)
from exprcalc.core.expression_lang import precedence
from exprcalc.core.expression_lang.tokenizer import Token, TokenKind, tokenize
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

# Deepest chain of nested sub-expressions (parentheses, call arguments,
# prefix operators, right-associative operands) the parser accepts.
MAX_NESTING_DEPTH = 100


class _Parser:
    """Precedence-climbing parser over a lazy token stream."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: Iterator[Token] = iter(tokens)
        self._last: Token | None = None
        self._depth = 0
        self.current = self._pull()

    def _pull(self) -> Token:
        tok = next(self._tokens, None)
        if tok is None:
            # A hand-built stream may omit END; synthesize one after the last token
            pos = self._last.pos + len(self._last.text) if self._last is not None else 0
            tok = Token(TokenKind.END, "", pos)
        self._last = tok
        return tok

    def advance(self) -> Token:
        tok = self.current
        if tok.kind != TokenKind.END:
            self.current = self._pull()
        return tok

    def match(self, kind: TokenKind) -> Token | None:
        if self.current.kind == kind:
            return self.advance()
        return None

    # -- Grammar rules --

    def parse_expr(self, min_bp: int = 0) -> Expr:
        """Parse an expression whose operators all bind tighter than *min_bp*."""
        if self._depth >= MAX_NESTING_DEPTH:
            raise NestingTooDeepError(self.current.pos, MAX_NESTING_DEPTH)
        self._depth += 1
        try:
            return self._parse_operators(min_bp)
        finally:
            self._depth -= 1

    def _parse_operators(self, min_bp: int) -> Expr:
        left = self.parse_term()

        while True:
            tok = self.current
            if tok.kind != TokenKind.OPERATOR:
                break

            post = precedence.postfix(tok.text)
            if post is not None:
                if post.left_bp <= min_bp:
                    break
                self.advance()
                left = UnaryOp(op=UnaryOperator(tok.text), operand=left)
                continue

            entry = precedence.infix(tok.text)
            if entry is None or entry.left_bp <= min_bp:
                break
            self.advance()
            right = self.parse_expr(entry.right_bp)
            left = BinaryOp(op=BinaryOperator(tok.text), left=left, right=right)

        return left

    def parse_term(self) -> Expr:
        """NUMBER | IDENT | call | '(' expr ')' | prefix_op expr"""
        tok = self.current

        if tok.kind == TokenKind.NUMBER:
            if tok.value is None:
                raise UnexpectedTokenError(tok)
            self.advance()
            return Literal(value=tok.value)

        if tok.kind == TokenKind.IDENT:
            self.advance()
            if self.current.kind == TokenKind.LPAREN:
                return self._parse_call(tok)
            return Variable(name=tok.text)

        if tok.kind == TokenKind.LPAREN:
            self.advance()
            expr = self.parse_expr(0)
            self._expect_close(tok)
            return expr

        if tok.kind == TokenKind.OPERATOR:
            entry = precedence.prefix(tok.text)
            if entry is not None:
                self.advance()
                operand = self.parse_expr(entry.right_bp)
                return UnaryOp(op=UnaryOperator(tok.text), operand=operand)

        if tok.kind == TokenKind.END:
            raise UnexpectedEndError(tok.pos)

        raise UnexpectedTokenError(tok)

    def _parse_call(self, name_tok: Token) -> Call:
        """IDENT '(' (expr (',' expr)*)? ')'"""
        open_tok = self.advance()

        args: list[Expr] = []
        if self.current.kind != TokenKind.RPAREN:
            args.append(self.parse_expr(0))
            while self.match(TokenKind.COMMA):
                args.append(self.parse_expr(0))

        self._expect_close(open_tok)
        return Call(name=name_tok.text, args=tuple(args))

    def _expect_close(self, open_tok: Token) -> None:
        if self.match(TokenKind.RPAREN) is None:
            raise UnclosedParenError(open_tok.pos)


def parse_tokens(tokens: Iterable[Token]) -> Expr:
    """Parse a token stream into an AST.

    The whole stream must form exactly one expression.

    Raises:
        ParseError: If the tokens do not form an expression, or nest more
            than ``MAX_NESTING_DEPTH`` levels deep.
        LexError: If *tokens* is a lazy tokenizer that fails mid-stream.
    """
    parser = _Parser(tokens)
    try:
        expr = parser.parse_expr(0)
    except RecursionError:
        # Only reachable when the caller is already deep in its own stack
        raise NestingTooDeepError(parser.current.pos) from None

    # Ensure all tokens consumed
    if parser.current.kind != TokenKind.END:
        raise TrailingInputError(parser.current)

    return expr


def parse_expr(source: str) -> Expr:
    """Parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "1 + 2 * sqrt(x)")

    Returns:
        Parsed expression AST.

    Raises:
        LexError: If tokenization fails.
        ParseError: If the expression is invalid.
    """
    expr = parse_tokens(tokenize(source))
    logger.debug("Parsed %r as %s", source, expr)
    return expr
