"""Configuration models and loading."""

from svglint.kernel.config.loader import ConfigLoader, clear_config_cache, load_config
from svglint.kernel.config.models import LoggingConfig, SVGLintConfig

__all__ = ["ConfigLoader", "LoggingConfig", "SVGLintConfig", "clear_config_cache", "load_config"]
