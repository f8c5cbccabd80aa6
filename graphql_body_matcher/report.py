"""Output formatting and reporting."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import utils
from .matcher import MatchReport

console = Console()


def report_dict(report: MatchReport) -> dict:
    """Plain-data view of a match report."""
    return {
        "verdict": report.verdict.value,
        "query_matches": report.query_matches,
        "variables_match": report.variables_match,
        "request_query": report.request_canonical,
        "expected_query": report.expected_canonical,
        "request_variables": report.request_variables,
        "expected_variables": report.expected_variables,
    }


def _mark(ok: bool) -> str:
    return "[green]✓[/green]" if ok else "[red]✖[/red]"


def emit(report: MatchReport, fmt: str) -> None:
    """
    Output a match report.

    Args:
        report: Match results
        fmt: Output format ("json" or "console")
    """
    if fmt == "json":
        print(utils.to_json(report_dict(report)))
        return

    console.print("\n[bold cyan]GraphQL Body Match[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Check", style="cyan")
    table.add_column("Result")
    table.add_column("Request", style="dim")
    table.add_column("Expected", style="dim")

    table.add_row(
        "Query", _mark(report.query_matches), escape(report.request_canonical), escape(report.expected_canonical)
    )
    table.add_row(
        "Variables",
        _mark(report.variables_match),
        escape(utils.compact_json(report.request_variables)),
        escape(utils.compact_json(report.expected_variables)),
    )
    console.print(table)

    if report.verdict.is_exact_match:
        console.print("\n[green]✓ Exact match[/green]\n")
    else:
        console.print("\n[red]✖ No match[/red]\n")


def emit_stub_results(results: dict[str, bool], fmt: str) -> None:
    """
    Output which configured stubs match a request body.

    Args:
        results: Stub name -> matched
        fmt: Output format ("json" or "console")
    """
    if fmt == "json":
        print(utils.to_json({"matches": [name for name, ok in results.items() if ok], "stubs": results}))
        return

    table = Table(title="Stubs", box=None)
    table.add_column("Stub", style="cyan")
    table.add_column("Match")
    for name, ok in results.items():
        table.add_row(escape(name), _mark(ok))

    console.print()
    console.print(table)
    console.print()


def print_kv(title: str, data: dict) -> None:
    """
    Print key-value pairs.

    Args:
        title: Section title
        data: Key-value data
    """
    console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="yellow")

    for k, v in data.items():
        table.add_row(k, str(v))

    console.print(table)
    console.print()
