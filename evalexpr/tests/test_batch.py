"""Tests for case-file parsing, batch runs and report rendering."""

import io

import pytest
from rich.console import Console

from evalexpr.batch import BatchCase, BatchReport, load_cases, parse_cases, render_report, run_cases
from evalexpr.errors import ErrorKind

CASES = """\
# precedence
1 + 2 * 3 => 7
2 ^ 3 ^ 2 => 512

1 / 0 => division_by_zero
(2 + 3 => parse      # unbalanced
2 ^ 10
"""


# --- Parsing ---

def test_parse_cases():
    cases = parse_cases(CASES)
    assert [c.expression for c in cases] == ["1 + 2 * 3", "2 ^ 3 ^ 2", "1 / 0", "(2 + 3", "2 ^ 10"]
    assert [c.expected for c in cases] == [7, 512, ErrorKind.DIVISION_BY_ZERO, ErrorKind.PARSE, None]
    assert [c.line for c in cases] == [2, 3, 5, 6, 7]


def test_parse_negative_expectation():
    (case,) = parse_cases("1 - 5 => -4")
    assert case.expected == -4


def test_parse_bad_expectation_names_line():
    with pytest.raises(ValueError, match="line 2"):
        parse_cases("1 => 1\n2 => two")


def test_load_cases(tmp_path):
    p = tmp_path / "cases.txt"
    p.write_text(CASES, encoding="utf-8")
    assert len(load_cases(p)) == 5


# --- Running ---

def test_run_cases_all_pass():
    report = run_cases(parse_cases(CASES))
    assert [r.verdict for r in report.results] == ["pass", "pass", "pass", "pass", "n/a"]
    assert report.passed == 4
    assert report.total == 4
    assert report.verdict == "pass"


def test_run_cases_with_failures():
    report = run_cases([
        BatchCase("1 + 1", 2, 1),
        BatchCase("1 + 1", 3, 2),
        BatchCase("1 + 1", ErrorKind.PARSE, 3),
    ])
    assert report.passed == 1
    assert report.failed == 2
    assert report.verdict == "partial"


def test_error_kind_must_match():
    report = run_cases([BatchCase("1 / 0", ErrorKind.OVERFLOW, 1)])
    assert report.verdict == "fail"


def test_no_expectations():
    report = run_cases([BatchCase("1", None, 1)])
    assert report.verdict == "no-cases"
    assert BatchReport().verdict == "no-cases"


# --- Rendering ---

def _render(report):
    buf = io.StringIO()
    render_report(report, Console(file=buf, width=120))
    return buf.getvalue()


def test_render_report_lists_cases():
    out = _render(run_cases(parse_cases(CASES)))
    assert "Batch results" in out
    assert "division_by_zero" in out
    assert "4/4 expectations met" in out


def test_render_empty_report():
    assert "No cases found" in _render(BatchReport())
