"""Tests for Limits and environment configuration."""

import pytest

from evalexpr.config import DEFAULT_LIMITS, Limits, log_level_from_env
from evalexpr.errors import IntegerOverflowError


def test_defaults():
    assert DEFAULT_LIMITS.int_bits == 64
    assert DEFAULT_LIMITS.max_value == 2 ** 63 - 1
    assert DEFAULT_LIMITS.min_value == -(2 ** 63)


def test_check_range():
    limits = Limits(int_bits=8)
    assert limits.check(127) == 127
    assert limits.check(-128) == -128
    with pytest.raises(IntegerOverflowError):
        limits.check(128)
    with pytest.raises(IntegerOverflowError):
        limits.check(-129)


@pytest.mark.parametrize("kwargs", [{"int_bits": 1}, {"max_depth": 0}])
def test_rejects_nonsense_limits(kwargs):
    with pytest.raises(ValueError):
        Limits(**kwargs)


# --- Environment ---

def test_from_env_empty_uses_defaults():
    assert Limits.from_env({}) == Limits()


def test_from_env_reads_variables():
    env = {"EVALEXPR_INT_BITS": "32", "EVALEXPR_MAX_DEPTH": " 10 "}
    assert Limits.from_env(env) == Limits(int_bits=32, max_depth=10)


def test_from_env_rejects_non_integer():
    with pytest.raises(ValueError, match="EVALEXPR_INT_BITS"):
        Limits.from_env({"EVALEXPR_INT_BITS": "lots"})


def test_from_env_rejects_out_of_range():
    with pytest.raises(ValueError, match="max_depth"):
        Limits.from_env({"EVALEXPR_MAX_DEPTH": "0"})


def test_from_env_defaults_to_process_environment(monkeypatch):
    monkeypatch.setenv("EVALEXPR_INT_BITS", "16")
    monkeypatch.delenv("EVALEXPR_MAX_DEPTH", raising=False)
    assert Limits.from_env().int_bits == 16


def test_replace_applies_only_given_overrides():
    base = Limits(int_bits=32, max_depth=50)
    assert base.replace(max_depth=5) == Limits(int_bits=32, max_depth=5)
    assert base.replace() == base


def test_log_level():
    assert log_level_from_env({}) == "WARNING"
    assert log_level_from_env({"EVALEXPR_LOG_LEVEL": "debug"}) == "DEBUG"


def test_int_bits_upper_bound():
    assert Limits(int_bits=4096).max_value == 2 ** 4095 - 1
    with pytest.raises(ValueError, match="4096"):
        Limits(int_bits=4097)
    with pytest.raises(ValueError):
        Limits.from_env({"EVALEXPR_INT_BITS": "1000000000"})
