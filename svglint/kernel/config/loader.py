"""Configuration loader for svglint.

Supports two config sources:

1. **kind: Config YAML**: ``.svglintrc.yaml``, ``.svglintrc.yml`` or
   ``svglint.yaml``, or any file passed explicitly / via ``SVGLINT_CONFIG_PATH``.
2. **pyproject.toml [tool.svglint]**: the standard Python convention.

Example ``.svglintrc.yaml``::

    kind: Config
    spec:
      rules:
        elm:
          svg: 1
          g: false
        attr:
          - role: img
            rule::selector: svg
      logging:
        level: INFO
"""

from __future__ import annotations

import os
import re
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from svglint.kernel.config.models import LoggingConfig, SVGLintConfig
from svglint.kernel.exceptions import ConfigurationError
from svglint.kernel.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAMES = (".svglintrc.yaml", ".svglintrc.yml", "svglint.yaml")
CONFIG_PATH_ENV = "SVGLINT_CONFIG_PATH"


class _LoggingSection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


class _ConfigSpec(BaseModel):
    """Validated shape of a config ``spec`` / ``[tool.svglint]`` table."""

    model_config = ConfigDict(extra="forbid")

    rules: dict[str, Any] = Field(default_factory=dict)
    logging: _LoggingSection = Field(default_factory=_LoggingSection)


@lru_cache(maxsize=32)
def _load_and_parse_cached(path_str: str) -> SVGLintConfig:
    """Cached configuration loader."""
    return ConfigLoader()._load_and_parse(Path(path_str))


def clear_config_cache() -> None:
    """Forget previously loaded configuration files."""
    _load_and_parse_cached.cache_clear()


class ConfigLoader:
    """Finds, reads and validates svglint configuration files."""

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")

    def load(self, path: str | Path | None = None) -> SVGLintConfig:
        """Load configuration, falling back to defaults when nothing is found.

        Parameters
        ----------
        path : str | Path | None
            Explicit config file. If None, uses discovery order.

        Raises
        ------
        ConfigurationError
            If an explicit path does not exist or a file is invalid.
        """
        config_path = self._find_config_file(path)
        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            return SVGLintConfig()
        return _load_and_parse_cached(str(config_path.absolute()))

    def _load_and_parse(self, config_path: Path) -> SVGLintConfig:
        logger.info("Loading configuration from {path}", path=config_path)
        try:
            if config_path.suffix in (".yaml", ".yml"):
                data = self._load_yaml(config_path)
            else:
                data = self._load_toml(config_path)
        except (OSError, yaml.YAMLError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(config_path.name, str(e)) from e

        return self._parse_config(self._substitute_env_vars(data), source=str(config_path))

    def _load_yaml(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(
                config_path.name, f"expected a mapping, got {type(data).__name__}"
            )
        kind = data.get("kind")
        if kind != "Config":
            raise ConfigurationError(
                config_path.name, f"must use the 'kind: Config' manifest format (got {kind!r})"
            )
        spec = data.get("spec") or {}
        if not isinstance(spec, dict):
            raise ConfigurationError(config_path.name, "'spec' must be a mapping")
        return spec

    def _load_toml(self, config_path: Path) -> dict[str, Any]:
        with config_path.open("rb") as f:
            data = tomllib.load(f)

        section = data.get("tool", {}).get("svglint")
        if section is None:
            if config_path.name == "pyproject.toml":
                logger.warning("No [tool.svglint] section found in pyproject.toml, using defaults")
                return {}
            section = data
        return section

    def _find_config_file(self, path: str | Path | None) -> Path | None:
        """Find the configuration file.

        Discovery order:
        1. Explicit path argument
        2. ``SVGLINT_CONFIG_PATH`` env var
        3. ``.svglintrc.yaml`` / ``.svglintrc.yml`` / ``svglint.yaml`` in CWD or a parent
        4. ``pyproject.toml`` with ``[tool.svglint]`` in CWD or a parent
        """
        if path:
            config_path = Path(path)
            if not config_path.is_file():
                raise ConfigurationError(str(config_path), "configuration file not found")
            return config_path

        if env_path := os.getenv(CONFIG_PATH_ENV):
            config_path = Path(env_path)
            if config_path.is_file():
                logger.debug("Using config from {env}: {path}", env=CONFIG_PATH_ENV, path=config_path)
                return config_path
            logger.warning("{env} set but file not found: {path}", env=CONFIG_PATH_ENV, path=config_path)

        current = Path.cwd()
        for directory in (current, *current.parents):
            for name in CONFIG_FILE_NAMES:
                candidate = directory / name
                if candidate.is_file():
                    return candidate
            pyproject = directory / "pyproject.toml"
            if pyproject.is_file() and self._has_svglint_table(pyproject):
                return pyproject
        return None

    @staticmethod
    def _has_svglint_table(pyproject: Path) -> bool:
        try:
            with pyproject.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return False
        return "svglint" in data.get("tool", {})

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` and ``${VAR:default}`` in string values."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                var_name, default = match.group(1), match.group(2)
                value = os.environ.get(var_name)
                if value is not None:
                    return value
                if default is not None:
                    return default
                logger.debug("Environment variable {name} not found, keeping placeholder", name=var_name)
                return match.group(0)

            return self.ENV_VAR_PATTERN.sub(replacer, data)

        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}

        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]

        return data

    def _parse_config(self, data: dict[str, Any], source: str | None = None) -> SVGLintConfig:
        try:
            spec = _ConfigSpec.model_validate(data)
        except PydanticValidationError as e:
            raise ConfigurationError(source or "config", str(e)) from e

        logger.debug("Loaded {count} rule entries", count=len(spec.rules))
        return SVGLintConfig(
            rules=spec.rules,
            logging=LoggingConfig(**spec.logging.model_dump()),
            source=source,
        )


def load_config(path: str | Path | None = None) -> SVGLintConfig:
    """Load svglint configuration; see :meth:`ConfigLoader.load`."""
    return ConfigLoader().load(path)
