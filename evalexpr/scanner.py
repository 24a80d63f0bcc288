"""Lexical scanner: text in, lazy stream of Tokens out.

The scanner owns a cursor over the input and produces one token per call.
It never looks more than one character ahead and never backs up, so once a
token has been handed out it cannot be scanned again without building a new
Scanner over the original text.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from evalexpr.config import DEFAULT_LIMITS, Limits
from evalexpr.errors import IntegerOverflowError, ParseError
from evalexpr.models import SYMBOLS, Token

logger = logging.getLogger(__name__)

# str.isdigit() and str.isspace() accept non-ASCII characters; only ASCII counts.
_DIGITS = "0123456789"
_WHITESPACE = " \t\n\r\f\v"


class Scanner:
    """Single-pass tokenizer over an expression string."""

    __slots__ = ("_text", "_pos", "_limits")

    def __init__(self, text: str, *, limits: Optional[Limits] = None) -> None:
        self._text = text
        self._pos = 0
        self._limits = limits or DEFAULT_LIMITS

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def next_token(self) -> Optional[Token]:
        """Produce the next token, or None at end of input.

        Raises:
            ParseError: on any character that is not a digit, operator,
                parenthesis or whitespace.
            IntegerOverflowError: if a number literal exceeds the limits.
        """
        self._skip_whitespace()
        if self._pos >= len(self._text):
            return None

        char = self._text[self._pos]
        if char in _DIGITS:
            token = self._scan_number()
        elif char in SYMBOLS:
            self._pos += 1
            token = Token(SYMBOLS[char])
        else:
            logger.debug("Rejecting character %r at offset %d", char, self._pos)
            raise ParseError(f"unexpected character {char!r}", char=char)

        logger.debug("Scanned token %s", token)
        return token

    def _skip_whitespace(self) -> None:
        text = self._text
        while self._pos < len(text) and text[self._pos] in _WHITESPACE:
            self._pos += 1

    def _scan_number(self) -> Token:
        text = self._text
        limit = self._limits.max_value
        value = 0
        start = self._pos
        while self._pos < len(text) and text[self._pos] in _DIGITS:
            value = value * 10 + (ord(text[self._pos]) - ord("0"))
            self._pos += 1
            if value > limit:
                # Consume the rest of the literal so the message shows all of it
                while self._pos < len(text) and text[self._pos] in _DIGITS:
                    self._pos += 1
                raise IntegerOverflowError(text[start:self._pos], self._limits.int_bits)
        return Token.number(value)


def tokenize(text: str, *, limits: Optional[Limits] = None) -> list[Token]:
    """Drain a fresh Scanner into a list.

    Debugging and display helper; the evaluator pulls tokens lazily instead.
    """
    return list(Scanner(text, limits=limits))
