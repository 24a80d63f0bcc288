"""Precedence-climbing evaluator.

Parsing and evaluation are interleaved: there is no syntax tree. The
evaluator pulls tokens from a Scanner on demand through a one-token
lookahead buffer and folds each operator into an integer as soon as both
operands are known.

Grammar:
    expr(min_prec) := atom { op atom }*   -- op taken only if prec(op) >= min_prec
    atom           := NUMBER | '(' expr(1) ')'

Usage:
    evaluate("2 ^ 3 ^ 2")        # 512
    try_evaluate("1 / 0").error  # DivisionByZeroError
"""

from __future__ import annotations

import logging
from typing import Optional

from evalexpr.config import DEFAULT_LIMITS, Limits
from evalexpr.errors import (
    DivisionByZeroError,
    EvalError,
    IntegerOverflowError,
    InvalidOperationError,
    NestingTooDeepError,
    ParseError,
)
from evalexpr.models import OPERATORS, EvalOutcome, Token, TokenKind, min_precedence_after
from evalexpr.scanner import Scanner

logger = logging.getLogger(__name__)


def _divide(left: int, right: int) -> int:
    """Integer division truncating toward zero."""
    if right == 0:
        raise DivisionByZeroError()
    quotient = abs(left) // abs(right)
    return -quotient if (left < 0) != (right < 0) else quotient


def _power(left: int, right: int, limits: Limits) -> int:
    if right < 0:
        raise InvalidOperationError("negative exponent")
    if left in (0, 1, -1):
        # 0 ^ 0 == 1
        if left == 0:
            return 1 if right == 0 else 0
        return -1 if left == -1 and right % 2 else 1
    # Each factor of |left| adds at least bit_length - 1 bits to the result
    if (abs(left).bit_length() - 1) * right >= limits.int_bits:
        raise IntegerOverflowError(f"{left} ^ {right}", limits.int_bits)
    return left ** right


def compute(op: TokenKind, left: int, right: int, limits: Optional[Limits] = None) -> int:
    """Apply a binary operator to two integers.

    Args:
        op: One of the five operator kinds.
        left: Left operand.
        right: Right operand.
        limits: Integer range to enforce on the result.

    Returns:
        The operator's result, guaranteed to be within ``limits``.

    Raises:
        DivisionByZeroError: ``/`` with a zero right operand.
        InvalidOperationError: ``^`` with a negative exponent, or ``op`` is
            not a binary operator.
        IntegerOverflowError: the result does not fit in ``limits``.
    """
    limits = limits or DEFAULT_LIMITS
    if op is TokenKind.PLUS:
        result = left + right
    elif op is TokenKind.MINUS:
        result = left - right
    elif op is TokenKind.MULTIPLY:
        result = left * right
    elif op is TokenKind.DIVIDE:
        result = _divide(left, right)
    elif op is TokenKind.POWER:
        result = _power(left, right, limits)
    else:
        raise InvalidOperationError(f"{op.value!r} is not a binary operator")

    limits.check(result)
    logger.debug("Computed %d %s %d = %d", left, op.value, right, result)
    return result


class Evaluator:
    """One-shot evaluator for a single expression string.

    Owns its Scanner and a single-token lookahead buffer. Build a fresh
    instance per expression; nothing carries over between instances.
    """

    __slots__ = ("_scanner", "_lookahead", "_peeked", "_limits")

    def __init__(self, text: str, *, limits: Optional[Limits] = None) -> None:
        self._limits = limits or DEFAULT_LIMITS
        self._scanner = Scanner(text, limits=self._limits)
        self._lookahead: Optional[Token] = None
        self._peeked = False

    def peek(self) -> Optional[Token]:
        """Next token without consuming it (None at end of input)."""
        if not self._peeked:
            self._lookahead = self._scanner.next_token()
            self._peeked = True
        return self._lookahead

    def advance(self) -> Optional[Token]:
        """Consume and return the next token."""
        token = self.peek()
        self._peeked = False
        self._lookahead = None
        return token

    def evaluate_expression(self) -> int:
        """Evaluate the whole input, rejecting anything left over."""
        try:
            result = self._expr(1, 0)
        except RecursionError:
            # max_depth set above what the interpreter stack allows
            raise NestingTooDeepError(self._limits.max_depth) from None
        if self.peek() is not None:
            raise ParseError("unexpected trailing input")
        return result

    def _expr(self, min_prec: int, depth: int) -> int:
        if depth > self._limits.max_depth:
            raise NestingTooDeepError(self._limits.max_depth)

        lhs = self._atom(depth)
        while True:
            token = self.peek()
            if token is None or not token.is_operator:
                break
            if OPERATORS[token.kind].precedence < min_prec:
                break
            self.advance()
            rhs = self._expr(min_precedence_after(token.kind), depth + 1)
            lhs = compute(token.kind, lhs, rhs, self._limits)
        return lhs

    def _atom(self, depth: int) -> int:
        token = self.peek()
        if token is not None and token.kind is TokenKind.NUMBER:
            self.advance()
            return token.value
        if token is not None and token.kind is TokenKind.LPAREN:
            self.advance()
            value = self._expr(1, depth + 1)
            closing = self.advance()
            if closing is None or closing.kind is not TokenKind.RPAREN:
                raise ParseError("expected closing parenthesis")
            return value
        raise ParseError("expected number or parenthesis")


def evaluate(text: str, *, limits: Optional[Limits] = None) -> int:
    """Evaluate an integer expression.

    Raises:
        EvalError: one of the subclasses in evalexpr.errors.
    """
    try:
        return Evaluator(text, limits=limits).evaluate_expression()
    except EvalError as e:
        logger.debug("Evaluation of %r failed: %s", text, e)
        raise


def try_evaluate(text: str, *, limits: Optional[Limits] = None) -> EvalOutcome:
    """Like evaluate(), but returns the error instead of raising it."""
    try:
        return EvalOutcome(expression=text, value=evaluate(text, limits=limits))
    except EvalError as e:
        return EvalOutcome(expression=text, error=e)
