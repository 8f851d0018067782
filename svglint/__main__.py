"""Entry point for ``python -m svglint``."""

from __future__ import annotations


def main() -> None:
    """Run the svglint CLI."""
    from svglint.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
