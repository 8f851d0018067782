#!/usr/bin/env python3
"""Entry point for the svglint CLI when run as python -m svglint.cli."""

if __name__ == "__main__":
    from svglint.cli.main import main

    main()
