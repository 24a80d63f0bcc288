"""Data models for evalexpr.

TokenKind, Token, the operator tables and EvalOutcome: the typed
structures that flow through scanner → evaluator → CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from evalexpr.errors import EvalError


class TokenKind(str, Enum):
    """Lexical token kinds. Values are the source symbols."""

    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    LPAREN = "("
    RPAREN = ")"


class Associativity(str, Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OperatorInfo:
    """Binding strength of a binary operator."""

    precedence: int
    associativity: Associativity


# Higher precedence binds tighter.
OPERATORS: Mapping[TokenKind, OperatorInfo] = MappingProxyType({
    TokenKind.PLUS: OperatorInfo(1, Associativity.LEFT),
    TokenKind.MINUS: OperatorInfo(1, Associativity.LEFT),
    TokenKind.MULTIPLY: OperatorInfo(2, Associativity.LEFT),
    TokenKind.DIVIDE: OperatorInfo(2, Associativity.LEFT),
    TokenKind.POWER: OperatorInfo(3, Associativity.RIGHT),
})

# Single-character tokens, keyed by their source symbol.
SYMBOLS: Mapping[str, TokenKind] = MappingProxyType({
    kind.value: kind for kind in TokenKind if kind is not TokenKind.NUMBER
})


def min_precedence_after(kind: TokenKind) -> int:
    """Minimum precedence for the right-hand side of ``kind``.

    Left-associative operators bump the threshold so an equal-precedence
    operator closes the current subtree; right-associative ones keep it so
    the subtree keeps extending to the right.
    """
    info = OPERATORS[kind]
    if info.associativity is Associativity.LEFT:
        return info.precedence + 1
    return info.precedence


@dataclass(frozen=True)
class Token:
    """A single lexical unit. Only NUMBER tokens carry a value."""

    kind: TokenKind
    value: Optional[int] = None

    @classmethod
    def number(cls, value: int) -> Token:
        return cls(TokenKind.NUMBER, value)

    @property
    def is_operator(self) -> bool:
        return self.kind in OPERATORS

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMBER:
            return str(self.value)
        return self.kind.value


@dataclass
class EvalOutcome:
    """Result of one non-raising evaluation."""

    expression: str
    value: Optional[int] = None
    error: Optional[EvalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def describe(self) -> str:
        """Human-readable value or error message."""
        if self.error is not None:
            return str(self.error)
        return str(self.value)
