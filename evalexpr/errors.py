"""Error taxonomy for evalexpr.

A closed set of failure kinds. Every error is terminal for the evaluation
that raised it: the scanner and evaluator never recover, they raise and let
the caller decide what to print.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Failure kinds an evaluation can end with."""

    PARSE = "parse"
    DIVISION_BY_ZERO = "division_by_zero"
    INVALID_OPERATION = "invalid_operation"
    OVERFLOW = "overflow"
    NESTING_TOO_DEEP = "nesting_too_deep"


class EvalError(Exception):
    """Base class for every evaluation failure."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ParseError(EvalError):
    """Malformed input: unknown character, missing operand or paren, stray tokens."""

    kind = ErrorKind.PARSE

    def __init__(self, detail: str, char: Optional[str] = None) -> None:
        super().__init__(f"Parse error: {detail}")
        self.detail = detail
        self.char = char


class DivisionByZeroError(EvalError):
    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self) -> None:
        super().__init__("Division by zero")


class InvalidOperationError(EvalError):
    """Operator application with no defined integer result."""

    kind = ErrorKind.INVALID_OPERATION

    def __init__(self, detail: str) -> None:
        super().__init__(f"Invalid operation: {detail}")
        self.detail = detail


class IntegerOverflowError(EvalError):
    kind = ErrorKind.OVERFLOW

    def __init__(self, value_desc: str, bits: int) -> None:
        super().__init__(f"Integer overflow: {value_desc} does not fit in {bits} bits")
        self.bits = bits


class NestingTooDeepError(EvalError):
    kind = ErrorKind.NESTING_TOO_DEEP

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Expression nesting exceeds maximum depth of {max_depth}")
        self.max_depth = max_depth
