"""CLI for the evalexpr expression evaluator.

Usage:
    python -m evalexpr eval "1 + 2 * 3"         # Print 7
    python -m evalexpr eval "2 ^ 70" --bits 128 # Widen the integer range
    python -m evalexpr tokens "(2 + 3) * 4"     # Show the token stream
    python -m evalexpr batch cases.txt          # Check a case file
    python -m evalexpr repl                     # Evaluate lines until EOF

Results go to stdout; diagnostics, tables and logs go to stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from evalexpr.batch import load_cases, render_report, run_cases
from evalexpr.config import Limits, log_level_from_env
from evalexpr.errors import EvalError
from evalexpr.evaluator import evaluate, try_evaluate
from evalexpr.scanner import tokenize

app = typer.Typer(
    name="evalexpr",
    help="Integer arithmetic expression evaluator",
    no_args_is_help=True,
)
console = Console(stderr=True)

_EXIT_WORDS = ("quit", "exit")


def _build_limits(bits: Optional[int], max_depth: Optional[int]) -> Limits:
    """Environment limits with CLI overrides applied."""
    try:
        return Limits.from_env().replace(int_bits=bits, max_depth=max_depth)
    except ValueError as e:
        console.print(f"[red]{escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(2)


def _print_error(error: EvalError) -> None:
    console.print(f"[red]{escape(str(error))}[/red]", soft_wrap=True)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Log level (default: $EVALEXPR_LOG_LEVEL or WARNING)"),
) -> None:
    """Evaluate integer expressions with + - * / ^ and parentheses."""
    level = (log_level or log_level_from_env()).upper()
    if not isinstance(logging.getLevelName(level), int):
        console.print(f"[red]Invalid log level: {escape(level)}[/red]")
        raise typer.Exit(2)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command("eval")
def cmd_eval(
    expression: str = typer.Argument(help="Expression to evaluate, e.g. '(2 + 3) * 4'"),
    bits: Optional[int] = typer.Option(None, "--bits", "-b", help="Signed integer width (default: $EVALEXPR_INT_BITS or 64)"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Maximum nesting depth (default: $EVALEXPR_MAX_DEPTH or 200)"),
) -> None:
    """Evaluate a single expression and print the result."""
    limits = _build_limits(bits, max_depth)
    try:
        value = evaluate(expression, limits=limits)
    except EvalError as e:
        _print_error(e)
        raise typer.Exit(1)
    typer.echo(value)


@app.command("tokens")
def cmd_tokens(
    expression: str = typer.Argument(help="Expression to scan"),
    bits: Optional[int] = typer.Option(None, "--bits", "-b", help="Signed integer width for number literals"),
) -> None:
    """Show the token stream the scanner produces for an expression."""
    limits = _build_limits(bits, None)
    try:
        tokens = tokenize(expression, limits=limits)
    except EvalError as e:
        _print_error(e)
        raise typer.Exit(1)

    table = Table(title="Tokens", show_header=True, header_style="bold")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Kind", style="green")
    table.add_column("Text", justify="right")
    for i, token in enumerate(tokens, 1):
        table.add_row(str(i), token.kind.name, escape(str(token)))

    console.print()
    console.print(table)
    console.print()


@app.command("batch")
def cmd_batch(
    path: Path = typer.Argument(help="Case file: one expression per line, optional '=> expected'"),
    bits: Optional[int] = typer.Option(None, "--bits", "-b", help="Signed integer width"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Maximum nesting depth"),
) -> None:
    """Evaluate every case in a file and check expectations."""
    limits = _build_limits(bits, max_depth)
    try:
        cases = load_cases(path)
    except OSError as e:
        console.print(f"[red]Cannot read {escape(str(path))}: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(2)
    except ValueError as e:
        console.print(f"[red]{escape(str(path))}: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(2)

    report = run_cases(cases, limits=limits)
    render_report(report, console)
    if report.failed:
        raise typer.Exit(1)


@app.command("repl")
def cmd_repl(
    bits: Optional[int] = typer.Option(None, "--bits", "-b", help="Signed integer width"),
    max_depth: Optional[int] = typer.Option(None, "--max-depth", help="Maximum nesting depth"),
) -> None:
    """Read expressions line by line until EOF, 'quit' or 'exit'."""
    limits = _build_limits(bits, max_depth)
    while True:
        try:
            line = console.input("[bold]>[/bold] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        line = line.strip()
        if not line:
            continue
        if line.lower() in _EXIT_WORDS:
            break

        outcome = try_evaluate(line, limits=limits)
        if outcome.ok:
            typer.echo(outcome.describe())
        else:
            console.print(f"[red]{escape(outcome.describe())}[/red]", soft_wrap=True)


if __name__ == "__main__":
    app()
