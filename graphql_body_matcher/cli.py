"""CLI for graphql-body-matcher."""

import logging
import sys
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import config, utils
from .canonical import canonicalize
from .exceptions import GraphqlMatcherError
from .matcher import GraphqlBodyMatcher
from .parser import parse_query
from .report import emit, emit_stub_results, print_kv

app = typer.Typer(help="Semantic matching of GraphQL request bodies")

console = Console()

# Exit codes
EXIT_MATCH = 0
EXIT_NO_MATCH = 1
EXIT_INVALID = 2


def setup_logging(level: str) -> None:
    """Route log records through rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(e: Exception) -> NoReturn:
    console.print(f"[red]Error: {escape(str(e))}[/red]")
    if "--debug" in sys.argv:
        raise e
    raise typer.Exit(EXIT_INVALID)


@app.command("match")
def match_cmd(
    expected: str = typer.Argument(..., help="File with the expected JSON payload"),
    body: str = typer.Argument(..., help="File with the request body"),
    output: Optional[str] = typer.Option(None, help="Output format (console|json)"),
    log_level: Optional[str] = typer.Option(None, help="Log level"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Config file path"),
):
    """Check whether a request body matches an expected GraphQL payload."""
    try:
        cfg = config.load(config_path)
        setup_logging(log_level or cfg.log_level)
        matcher = GraphqlBodyMatcher.with_request_json(utils.read_text(expected))
        report = matcher.explain(utils.read_text(body))
    except (GraphqlMatcherError, OSError, ValueError) as e:
        _fail(e)

    emit(report, output or cfg.output)
    raise typer.Exit(EXIT_MATCH if report.verdict.is_exact_match else EXIT_NO_MATCH)


@app.command("canonical")
def canonical_cmd(
    query_file: str = typer.Argument(..., help="GraphQL query file"),
):
    """Print the canonical form of a GraphQL query."""
    try:
        doc = parse_query(utils.read_text(query_file))
    except (GraphqlMatcherError, OSError) as e:
        _fail(e)

    print(canonicalize(doc))


@app.command("stubs")
def stubs_cmd(
    body: str = typer.Argument(..., help="File with the request body"),
    config_path: Optional[str] = typer.Option(None, "--config", help="Config file path"),
    output: Optional[str] = typer.Option(None, help="Output format (console|json)"),
    log_level: Optional[str] = typer.Option(None, help="Log level"),
):
    """Report which configured stubs match a request body."""
    try:
        cfg = config.load(config_path)
        setup_logging(log_level or cfg.log_level)
        matchers = config.build_matchers(cfg)
        request_body = utils.read_text(body)
        results = {name: m.match(request_body).is_exact_match for name, m in matchers.items()}
    except (GraphqlMatcherError, OSError, ValueError) as e:
        _fail(e)

    fmt = output or cfg.output
    if not results and fmt != "json":
        console.print("[yellow]No stubs configured[/yellow]")

    emit_stub_results(results, fmt)
    raise typer.Exit(EXIT_MATCH if any(results.values()) else EXIT_NO_MATCH)


@app.command("init-config")
def init_config_cmd(
    path: Optional[str] = typer.Option(None, help="Config file path"),
):
    """Write an example config file."""
    path = path or config.get_default_config_path()
    if utils.exists(path):
        console.print(f"[yellow]Config already exists: {escape(path)}[/yellow]")
        raise typer.Exit(EXIT_INVALID)

    config.create_example_config(path)
    print_kv("Config created", {"path": path})


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
