"""evalexpr: integer arithmetic expression evaluator.

Text in, integer or structured error out. Supports + - * / ^ with
conventional precedence, right-associative ^, and parentheses. Evaluation
is a single pass: a lazy scanner feeds a precedence-climbing evaluator that
computes as it parses.

Usage:
    python -m evalexpr eval "2 ^ 3 ^ 2"      # 512
    python -m evalexpr tokens "(1 + 2) * 3"  # Show the token stream
    python -m evalexpr batch cases.txt       # Check expectations from a file
    python -m evalexpr repl                  # Interactive loop
"""

from evalexpr.config import DEFAULT_LIMITS, Limits
from evalexpr.errors import (
    DivisionByZeroError,
    ErrorKind,
    EvalError,
    IntegerOverflowError,
    InvalidOperationError,
    NestingTooDeepError,
    ParseError,
)
from evalexpr.evaluator import Evaluator, compute, evaluate, try_evaluate
from evalexpr.models import EvalOutcome, Token, TokenKind
from evalexpr.scanner import Scanner, tokenize

__all__ = [
    "DEFAULT_LIMITS", "Limits",
    "DivisionByZeroError", "ErrorKind", "EvalError", "IntegerOverflowError",
    "InvalidOperationError", "NestingTooDeepError", "ParseError",
    "Evaluator", "compute", "evaluate", "try_evaluate",
    "EvalOutcome", "Token", "TokenKind",
    "Scanner", "tokenize",
]
