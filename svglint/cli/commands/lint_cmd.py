"""SVG linting command for the svglint CLI."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from svglint.kernel.config import ConfigLoader, SVGLintConfig
from svglint.kernel.exceptions import ConfigurationError
from svglint.kernel.linting import SVGLint, get_default_registry
from svglint.kernel.linting.formatting import render_excerpt, report_to_dict
from svglint.kernel.linting.models import Diagnostic, RunReport
from svglint.kernel.logging import configure_logging

console = Console()

_CLI_NAME = "lint"
_CLI_HELP = "Lint SVG files"

_STDIN_NAME = "<stdin>"
_KIND_STYLE = {"exception": "magenta", "error": "red", "warning": "yellow", "log": "blue"}


def lint(
    files: Annotated[
        list[str] | None,
        typer.Argument(help="SVG files to lint", show_default=False),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Config file (kind: Config YAML or pyproject.toml)"),
    ] = None,
    stdin: Annotated[
        bool,
        typer.Option("--stdin", help="Also lint an SVG read from standard input"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (text, json)"),
    ] = "text",
    ci: Annotated[
        bool,
        typer.Option("--ci", "-C", help="Plain output without colors"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print files that fail"),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", "-d", help="Enable debug logging"),
    ] = False,
    list_rules: Annotated[
        bool,
        typer.Option("--list-rules", help="List available rules and exit"),
    ] = False,
) -> None:
    """Lint SVG files against the configured rules.

    Exits with code 1 if any file fails and 2 on usage or configuration errors.

    Examples
    --------
    svglint icon.svg logo.svg
    svglint --config .svglintrc.yaml icons/*.svg
    cat icon.svg | svglint --stdin --format json
    """
    out = Console(no_color=True, highlight=False) if ci else console

    if list_rules:
        for name in get_default_registry().names():
            out.print(name)
        return

    if output_format not in ("text", "json"):
        out.print(f"[red]Invalid format '{escape(output_format)}'.[/red] Choose from: text, json")
        raise typer.Exit(2)

    try:
        config = ConfigLoader().load(config_path)
    except ConfigurationError as e:
        out.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(2) from e

    _configure_logging(config, debug)

    sources: list[tuple[str, str | None]] = [(file, None) for file in files or []]
    if stdin:
        sources.append((sys.stdin.read(), _STDIN_NAME))
    if not sources:
        out.print("[red]No input given.[/red] Pass one or more files or use --stdin.")
        raise typer.Exit(2)

    reports = asyncio.run(_run_all(SVGLint(config), sources))

    if output_format == "json":
        typer.echo(json.dumps([report_to_dict(r) for r in reports], indent=2))
    else:
        _print_text(out, reports, quiet=quiet)

    if not all(report.passed for report in reports):
        raise typer.Exit(1)


def _configure_logging(config: SVGLintConfig, debug: bool) -> None:
    settings = config.logging
    configure_logging(
        level="DEBUG" if debug else settings.level,
        format=settings.format,
        output_file=settings.output_file,
        use_color=settings.use_color,
        include_timestamp=settings.include_timestamp,
    )


async def _run_all(linter: SVGLint, sources: list[tuple[str, str | None]]) -> list[RunReport]:
    """Lint every source concurrently; each run is independent."""
    return list(
        await asyncio.gather(*(linter.run(source, source_name=name) for source, name in sources))
    )


def _print_text(out: Console, reports: list[RunReport], *, quiet: bool) -> None:
    """Print lint results as rich text."""
    failed = 0
    for report in reports:
        if not report.passed:
            failed += 1
        elif quiet:
            continue

        status = "[green]✓[/green]" if report.passed else "[red]✗[/red]"
        out.print(f"{status} [bold]{escape(report.source_name)}[/bold]")
        for diagnostic in report.diagnostics:
            if quiet and diagnostic.kind in ("warning", "log"):
                continue
            _print_diagnostic(out, diagnostic)

    if not quiet or failed:
        passed = len(reports) - failed
        out.print()
        out.print(
            f"[bold]{len(reports)} file(s) linted:[/bold] "
            f"[green]{passed} passed[/green], [red]{failed} failed[/red]"
        )


def _print_diagnostic(out: Console, diagnostic: Diagnostic) -> None:
    style = _KIND_STYLE.get(diagnostic.kind, "white")
    out.print(f"  [{style}]{diagnostic.kind}[/{style}] {escape(diagnostic.message)}")
    excerpt = render_excerpt(diagnostic)
    if excerpt:
        for line in excerpt.splitlines():
            out.print(f"    [dim]{escape(line)}[/dim]")
