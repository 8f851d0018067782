"""Centralized logging configuration for svglint using Loguru.

Operational notices (unknown rules, unreadable config, listener failures)
go through these loggers. Lint diagnostics never do: they are collected by
reporters and returned to the caller.

Examples
--------
Basic usage:

>>> from svglint.kernel.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.warning("Unknown rule {rule}", rule="foo")

Configure logging globally::

    from svglint.kernel.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

import os
import sys
from contextlib import suppress
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from loguru import Logger

from loguru import logger
from rich.logging import RichHandler

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []
_LOGURU_DEFAULT_HANDLER_ID = 0

_DEFAULT_LEVEL = "WARNING"
_DEFAULT_FORMAT = "structured"


def configure_logging(
    level: LogLevel = "WARNING",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Configure global logging for svglint.

    Calling it again with the same settings is a no-op, so the CLI and
    library callers can both call it safely.

    Parameters
    ----------
    level : LogLevel, default="WARNING"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": plain single-line output
        - "json": serialized records for log aggregation
        - "structured": colored Loguru format with module and line
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file to write JSON logs to, in addition to stderr
    use_color : bool, default=True
        Use ANSI colors in structured format (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output
    force_reconfigure : bool, default=False
        Reconfigure even if the settings did not change
    """
    global _CURRENT_CONFIG

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # Loguru's import-time stderr sink logs everything at DEBUG
    if _CURRENT_CONFIG is None:
        with suppress(ValueError):
            logger.remove(_LOGURU_DEFAULT_HANDLER_ID)

    # Only remove handlers we added, pytest and host apps may own others
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=include_timestamp,
            show_level=True,
            show_path=True,
        )
        handler_id = logger.add(sink=rich_handler, level=level, format="{message}")

    elif format == "json":
        handler_id = logger.add(sink=sys.stderr, level=level, serialize=True)

    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        colorize = use_color and sys.stderr.isatty()
        color_level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{extra[module]}</cyan> | <level>{message}</level>"
        )
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=structured_format,
            colorize=colorize,
        )

    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=f"{timestamp_fmt}{{level: <8}} | {{extra[module]}} | {{message}}",
            colorize=False,
        )
    _HANDLER_IDS.append(handler_id)

    if output_file:
        output_path = Path(output_file)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        handler_id = logger.add(sink=output_path, level=level, serialize=True)
        _HANDLER_IDS.append(handler_id)

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=256)
def get_logger(name: str) -> "Logger":
    """Get a logger bound to ``name`` (cached).

    If configure_logging() has not been called yet, defaults are read from
    ``SVGLINT_LOG_LEVEL`` and ``SVGLINT_LOG_FORMAT``.
    """
    _ensure_configured()
    return logger.bind(module=name)


@lru_cache(maxsize=128)
def get_logger_for_component(component_type: str, component_name: str) -> "Logger":
    """Get a logger for a component instance, e.g. ``svglint.reporter.attr``.

    Examples
    --------
    >>> logger = get_logger_for_component("reporter", "elm")
    >>> logger.debug("Error reported: {message}", message="...")
    """
    _ensure_configured()
    logger_name = f"svglint.{component_type}.{component_name}"
    return logger.bind(
        module=logger_name, component_type=component_type, component_name=component_name
    )


def _ensure_configured() -> None:
    """Apply the environment-derived default configuration once."""
    if _CURRENT_CONFIG is None:
        level = os.getenv("SVGLINT_LOG_LEVEL", _DEFAULT_LEVEL).upper()
        format_type = os.getenv("SVGLINT_LOG_FORMAT", _DEFAULT_FORMAT).lower()
        configure_logging(level=level, format=format_type)  # type: ignore[arg-type]
