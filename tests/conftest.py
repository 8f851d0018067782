"""Configuration file for pytest containing fixtures and configuration.

This module provides fixtures that can be used across multiple test files:
- icon_svg: a small well-formed SVG document
- registry: a fresh rule registry holding only the built-in rules
- clean_config_env: isolates config discovery from the developer's machine
"""

import pytest

from svglint.kernel.config import clear_config_cache
from svglint.kernel.linting.registry import RuleRegistry
from svglint.stdlib.rules import BUILTIN_RULES

ICON_SVG = """<svg xmlns="http://www.w3.org/2000/svg" role="img" viewBox="0 0 24 24">
  <title>Icon</title>
  <g id="layer" class="main shape">
    <path d="M0 0h24v24H0z"/>
    <circle cx="12" cy="12" r="4"/>
  </g>
</svg>
"""


@pytest.fixture
def icon_svg() -> str:
    """A small well-formed SVG document."""
    return ICON_SVG


@pytest.fixture
def registry() -> RuleRegistry:
    """A registry with only the built-in rules (no plugins)."""
    return RuleRegistry(BUILTIN_RULES)


@pytest.fixture
def clean_config_env(tmp_path, monkeypatch):
    """Run in an empty directory with no config env var and an empty config cache."""
    monkeypatch.delenv("SVGLINT_CONFIG_PATH", raising=False)
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield tmp_path
    clear_config_cache()
