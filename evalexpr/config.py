"""Evaluation limits and environment configuration.

All knobs come from environment variables with an EVALEXPR_ prefix:
    EVALEXPR_INT_BITS    signed integer width (default 64)
    EVALEXPR_MAX_DEPTH   maximum parenthesis/operator nesting (default 200)
    EVALEXPR_LOG_LEVEL   CLI log level (default WARNING)

CLI flags override the environment; library callers pass a Limits instance.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from evalexpr.errors import IntegerOverflowError

_ENV_PREFIX = "EVALEXPR_"

DEFAULT_INT_BITS = 64
DEFAULT_MAX_DEPTH = 200
MAX_INT_BITS = 4096
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Limits:
    """Integer range and nesting depth enforced during one evaluation."""

    int_bits: int = DEFAULT_INT_BITS
    max_depth: int = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not 2 <= self.int_bits <= MAX_INT_BITS:
            raise ValueError(f"int_bits must be between 2 and {MAX_INT_BITS}, got {self.int_bits}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

    @property
    def min_value(self) -> int:
        return -(1 << (self.int_bits - 1))

    @property
    def max_value(self) -> int:
        return (1 << (self.int_bits - 1)) - 1

    def check(self, value: int) -> int:
        """Return ``value`` unchanged, or raise if it is out of range."""
        if not self.min_value <= value <= self.max_value:
            raise IntegerOverflowError(str(value), self.int_bits)
        return value

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> Limits:
        """Build limits from EVALEXPR_* variables, falling back to defaults."""
        env = os.environ if env is None else env
        int_bits = _int_var(env, "INT_BITS", DEFAULT_INT_BITS)
        max_depth = _int_var(env, "MAX_DEPTH", DEFAULT_MAX_DEPTH)
        try:
            return cls(int_bits=int_bits, max_depth=max_depth)
        except ValueError as e:
            raise ValueError(f"Invalid {_ENV_PREFIX}* configuration: {e}") from e

    def replace(self, int_bits: Optional[int] = None, max_depth: Optional[int] = None) -> Limits:
        """Copy with any non-None overrides applied (used for CLI flags)."""
        return Limits(
            int_bits=self.int_bits if int_bits is None else int_bits,
            max_depth=self.max_depth if max_depth is None else max_depth,
        )


DEFAULT_LIMITS = Limits()


def _int_var(env: Mapping[str, str], name: str, default: int) -> int:
    key = _ENV_PREFIX + name
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def log_level_from_env(env: Optional[Mapping[str, str]] = None) -> str:
    """Log level name for the CLI, upper-cased."""
    env = os.environ if env is None else env
    return env.get(_ENV_PREFIX + "LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
