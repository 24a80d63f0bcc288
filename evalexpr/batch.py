"""Batch runner: evaluate a case file and compare against expectations.

Case file format, one case per line:
    1 + 2 * 3 => 7          # expect a value
    1 / 0 => division_by_zero   # expect an error kind
    2 ^ 10                  # no expectation, just evaluate
Blank lines and lines starting with '#' are ignored.

Results render as a Rich table, one row per case, with an overall verdict.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from evalexpr.config import Limits
from evalexpr.errors import ErrorKind
from evalexpr.evaluator import try_evaluate
from evalexpr.models import EvalOutcome

logger = logging.getLogger(__name__)

_EXPECT_SEP = "=>"
_INT_RE = re.compile(r"^-?\d+$")

Expectation = Union[int, ErrorKind, None]


@dataclass
class BatchCase:
    """One line of a case file."""

    expression: str
    expected: Expectation = None
    line: int = 0


@dataclass
class CaseResult:
    case: BatchCase
    outcome: EvalOutcome

    @property
    def verdict(self) -> str:
        expected = self.case.expected
        if expected is None:
            return "n/a"
        if isinstance(expected, ErrorKind):
            matched = self.outcome.error is not None and self.outcome.error.kind is expected
        else:
            matched = self.outcome.ok and self.outcome.value == expected
        return "pass" if matched else "fail"


@dataclass
class BatchReport:
    """All case results from one batch run."""

    results: list[CaseResult] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.verdict == "pass")

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.verdict == "fail")

    @property
    def total(self) -> int:
        """Cases that carry an expectation."""
        return self.passed + self.failed

    @property
    def verdict(self) -> str:
        if self.total == 0:
            return "no-cases"
        if self.passed == self.total:
            return "pass"
        if self.passed > 0:
            return "partial"
        return "fail"


def _parse_expectation(raw: str, line: int) -> Expectation:
    raw = raw.strip()
    if _INT_RE.match(raw):
        return int(raw)
    try:
        return ErrorKind(raw.lower())
    except ValueError:
        kinds = ", ".join(k.value for k in ErrorKind)
        raise ValueError(
            f"line {line}: expected an integer or one of ({kinds}), got {raw!r}"
        ) from None


def parse_cases(text: str) -> list[BatchCase]:
    """Parse case-file text into BatchCases.

    Raises:
        ValueError: if an expectation is neither an integer nor an error kind.
    """
    cases: list[BatchCase] = []
    for lineno, line in enumerate(text.splitlines(), 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if _EXPECT_SEP in stripped:
            expr, raw = stripped.rsplit(_EXPECT_SEP, 1)
            # Trailing comments after the expectation
            raw = raw.split("#", 1)[0]
            cases.append(BatchCase(expr.strip(), _parse_expectation(raw, lineno), lineno))
        else:
            cases.append(BatchCase(stripped.split("#", 1)[0].strip(), None, lineno))
    return cases


def load_cases(path: Path) -> list[BatchCase]:
    """Read and parse a case file."""
    return parse_cases(path.read_text(encoding="utf-8"))


def run_cases(cases: Iterable[BatchCase], limits: Optional[Limits] = None) -> BatchReport:
    """Evaluate every case with a fresh evaluator and collect the results."""
    report = BatchReport()
    for case in cases:
        outcome = try_evaluate(case.expression, limits=limits)
        result = CaseResult(case=case, outcome=outcome)
        logger.debug("Case line %d: %s -> %s", case.line, case.expression, result.verdict)
        report.results.append(result)
    return report


def _fmt_expected(expected: Expectation) -> str:
    if expected is None:
        return "--"
    if isinstance(expected, ErrorKind):
        return expected.value
    return str(expected)


def render_report(report: BatchReport, console: Console) -> None:
    """Render a Rich table of case results plus a summary line."""
    if not report.results:
        console.print("[yellow]No cases found.[/yellow]")
        return

    table = Table(title="Batch results", show_header=True, header_style="bold")
    table.add_column("Line", style="dim", justify="right")
    table.add_column("Expression", min_width=20)
    table.add_column("Expected", justify="right")
    table.add_column("Actual", justify="right")
    table.add_column("Verdict", justify="center")

    for r in report.results:
        outcome = r.outcome
        actual = str(outcome.value) if outcome.ok else f"[red]{outcome.error.kind.value}[/red]"
        color = {"pass": "green", "fail": "red"}.get(r.verdict, "dim")
        table.add_row(
            str(r.case.line),
            escape(r.case.expression),
            _fmt_expected(r.case.expected),
            actual,
            f"[{color}]{r.verdict}[/{color}]",
        )

    console.print()
    console.print(table)
    color = {"pass": "green", "partial": "yellow", "fail": "red"}.get(report.verdict, "white")
    console.print(
        f"[{color}]{report.verdict}[/{color}]: {report.passed}/{report.total} expectations met"
    )
    console.print()
