"""Configuration data models for svglint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration for svglint.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    YAML configuration:

    ```yaml
    kind: Config
    spec:
      logging:
        level: DEBUG
        format: rich
    ```

    Environment variable overrides:

    ```bash
    export SVGLINT_LOG_LEVEL=DEBUG
    export SVGLINT_LOG_FORMAT=rich
    ```
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class SVGLintConfig:
    """Complete svglint configuration.

    Attributes
    ----------
    rules : dict[str, Any]
        Rule name to ``False``, a config value, or a list of config values.
    logging : LoggingConfig
        Logging settings applied by the CLI.
    source : str | None
        File the configuration was loaded from, if any.
    """

    rules: dict[str, Any] = field(default_factory=dict)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    source: str | None = None
