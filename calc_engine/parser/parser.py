"""Recursive-descent parser for calculator expressions.

Grammar, lowest to highest precedence:

    expr    := term (('+' | '-') term)*
    term    := signed (('*' | '/' | '%') signed)*
    signed  := ('+' | '-') signed | power
    power   := unary ('^' INTEGER | '²')?
    unary   := NAME '(' args ')' | '√' signed | '(' expr ')' | NUMBER | 'π'
    args    := (expr (',' expr)*)?

NAME is one of sqrt, pow2, mod and PI, taking 1, 1, 2 and 0 arguments.
"""
import logging
import math
from contextlib import contextmanager
from typing import List, Optional

from calc_engine.config import MAX_NESTING_DEPTH
from calc_engine.parser.errors import ExpressionSyntaxError
from calc_engine.parser.lexer import FUNCTIONS, LexKind, Token, tokenize
from calc_engine.parser.nodes import BinaryOp, Literal, Negate, Node, Power, UnaryFunc

logger = logging.getLogger(__name__)

ADDITIVE_OPS = ("+", "-")
MULTIPLICATIVE_OPS = ("*", "/", "%")

# Below the smallest int-string conversion limit Python allows (640 digits)
MAX_EXPONENT_DIGITS = 600


class _Parser:
    def __init__(self, tokens: List[Token], max_depth: int):
        self.tokens = tokens
        self.index = 0
        self.depth = 0
        self.max_depth = max_depth

    def peek(self) -> Token:
        return self.tokens[self.index]

    def advance(self) -> Token:
        token = self.tokens[self.index]
        if token.kind != LexKind.END:
            self.index += 1
        return token

    def _at_operator(self, ops) -> bool:
        token = self.peek()
        return token.kind == LexKind.OPERATOR and token.text in ops

    @contextmanager
    def nested(self, opener: Token):
        self.depth += 1
        if self.depth > self.max_depth:
            raise ExpressionSyntaxError(
                f"nesting deeper than {self.max_depth} levels", opener.position)
        try:
            yield
        finally:
            self.depth -= 1

    def fail(self, token: Token):
        if token.kind == LexKind.END:
            raise ExpressionSyntaxError("unexpected end of expression", token.position)
        if token.kind == LexKind.RPAREN:
            raise ExpressionSyntaxError("unmatched ')'", token.position)
        raise ExpressionSyntaxError(f"unexpected '{token.text}'", token.position)

    def close(self, opener: Token):
        token = self.peek()
        if token.kind == LexKind.RPAREN:
            self.advance()
            return
        if token.kind == LexKind.END:
            raise ExpressionSyntaxError(f"unmatched '{opener.text}'", opener.position)
        self.fail(token)

    def parse(self) -> Node:
        node = self.expr()
        token = self.peek()
        if token.kind != LexKind.END:
            self.fail(token)
        return node

    def expr(self) -> Node:
        node = self.term()
        while self._at_operator(ADDITIVE_OPS):
            op = self.advance().text
            node = BinaryOp(op, node, self.term())
        return node

    def term(self) -> Node:
        node = self.signed()
        while self._at_operator(MULTIPLICATIVE_OPS):
            op = self.advance().text
            node = BinaryOp(op, node, self.signed())
        return node

    def signed(self) -> Node:
        if self._at_operator(ADDITIVE_OPS):
            sign = self.advance()
            with self.nested(sign):
                operand = self.signed()
            return Negate(operand) if sign.text == "-" else operand
        return self.power()

    def power(self) -> Node:
        base = self.unary()
        token = self.peek()
        if token.kind == LexKind.SQUARE:
            self.advance()
            return Power(base, 2)
        if token.kind == LexKind.POWER:
            self.advance()
            exponent = self.peek()
            if exponent.kind != LexKind.NUMBER:
                self.fail(exponent)
            if "." in exponent.text:
                raise ExpressionSyntaxError(
                    "exponent must be an integer", exponent.position)
            digits = exponent.text.lstrip("0") or "0"
            if len(digits) > MAX_EXPONENT_DIGITS:
                raise ExpressionSyntaxError("exponent too large", exponent.position)
            self.advance()
            return Power(base, int(digits))
        return base

    def call(self, opener: Token) -> Node:
        name = opener.text[:-1]
        arity = FUNCTIONS[name]
        args: List[Node] = []
        with self.nested(opener):
            if self.peek().kind not in (LexKind.RPAREN, LexKind.END):
                args.append(self.expr())
                while self.peek().kind == LexKind.COMMA:
                    self.advance()
                    args.append(self.expr())
        if self.peek().kind == LexKind.RPAREN and len(args) != arity:
            raise ExpressionSyntaxError(
                f"{name} takes {arity} argument(s), got {len(args)}", opener.position)
        self.close(opener)

        if name == "PI":
            return Literal(math.pi)
        if name == "pow2":
            return Power(args[0], 2)
        if name == "mod":
            return BinaryOp("%", args[0], args[1])
        return UnaryFunc(name, args[0])

    def unary(self) -> Node:
        token = self.peek()
        if token.kind == LexKind.NUMBER:
            self.advance()
            return Literal(token.value)
        if token.kind == LexKind.CONSTANT:
            self.advance()
            return Literal(math.pi)
        if token.kind == LexKind.FUNCTION:
            self.advance()
            return self.call(token)
        if token.kind == LexKind.ROOT:
            self.advance()
            with self.nested(token):
                operand = self.signed()
            return UnaryFunc("sqrt", operand)
        if token.kind == LexKind.LPAREN:
            self.advance()
            with self.nested(token):
                node = self.expr()
            self.close(token)
            return node
        self.fail(token)


def parse(text: str, max_depth: Optional[int] = None) -> Node:
    """
    Parse expression text into a tree.

    Args:
        text: Expression such as "2+sqrt(9)*π"
        max_depth: Nesting limit for parentheses, functions and signs.
            Defaults to MAX_NESTING_DEPTH.

    Raises:
        ExpressionSyntaxError: with the offending character position
    """
    tokens = tokenize(text)
    parser = _Parser(tokens, max_depth if max_depth is not None else MAX_NESTING_DEPTH)
    node = parser.parse()
    logger.debug(f"Parsed '{text}' into {len(tokens) - 1} tokens")
    return node
