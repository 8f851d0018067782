"""svglint CLI - Main entrypoint."""

import sys

try:
    import typer
except ImportError:
    print("Error: CLI dependencies not installed.")
    print("Please install with:")
    print("  pip install svglint")
    sys.exit(1)

from svglint.cli.commands import lint_cmd

app = typer.Typer(
    name="svglint",
    help="Lint SVG files against a configurable set of rules.",
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)

# A single registered command runs without a subcommand name: `svglint icon.svg`
app.command(name=lint_cmd._CLI_NAME, help=lint_cmd._CLI_HELP)(lint_cmd.lint)


def main() -> None:
    """Main CLI entrypoint."""
    app()


if __name__ == "__main__":
    main()
