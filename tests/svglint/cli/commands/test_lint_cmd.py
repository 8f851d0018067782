"""Tests for svglint.cli.commands.lint_cmd module."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from svglint.cli.main import app

CONFIG = """\
kind: Config
spec:
  rules:
    elm:
      g: false
    attr:
      rule::selector: svg
      role: true
"""


@pytest.fixture
def runner():
    """Fixture providing a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def mock_configure_logging():
    """Keep CLI runs from replacing the process-wide log sinks."""
    with patch("svglint.cli.commands.lint_cmd.configure_logging") as mock:
        yield mock


@pytest.fixture
def workspace(clean_config_env: Path) -> Path:
    """A directory with a config file, one passing and one failing SVG."""
    (clean_config_env / ".svglintrc.yaml").write_text(CONFIG, encoding="utf-8")
    (clean_config_env / "good.svg").write_text('<svg role="img"><path/></svg>', encoding="utf-8")
    (clean_config_env / "bad.svg").write_text("<svg>\n  <g/>\n</svg>", encoding="utf-8")
    return clean_config_env


class TestLintCommand:
    """Test the lint command."""

    def test_passing_file(self, runner, workspace):
        result = runner.invoke(app, ["good.svg"])

        assert result.exit_code == 0
        assert "good.svg" in result.output
        assert "1 passed" in result.output

    def test_failing_file(self, runner, workspace):
        result = runner.invoke(app, ["good.svg", "bad.svg"])

        assert result.exit_code == 1
        assert "elm: Element disallowed by 'g': <g>" in result.output
        assert "attr: Expected attribute 'role' on <svg>" in result.output
        assert "1 passed" in result.output
        assert "1 failed" in result.output

    def test_failing_file_shows_excerpt(self, runner, workspace):
        result = runner.invoke(app, ["bad.svg"])

        assert "> 2 |   <g/>" in result.output

    def test_json_output(self, runner, workspace):
        result = runner.invoke(app, ["good.svg", "bad.svg", "--format", "json"])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert [entry["passed"] for entry in data] == [True, False]
        assert data[1]["source"] == "bad.svg"
        assert [error["rule"] for error in data[1]["errors"]] == ["elm", "attr"]
        assert data[1]["errors"][0]["node"]["line"] == 2

    def test_stdin(self, runner, workspace):
        result = runner.invoke(app, ["--stdin"], input="<svg><g/></svg>")

        assert result.exit_code == 1
        assert "<stdin>" in result.output

    def test_malformed_file(self, runner, workspace):
        (workspace / "broken.svg").write_text("<svg><g></svg>", encoding="utf-8")

        result = runner.invoke(app, ["broken.svg"])

        assert result.exit_code == 1
        assert "SVG parsing error" in result.output

    def test_explicit_config(self, runner, workspace):
        config = workspace / "strict.yaml"
        config.write_text("kind: Config\nspec:\n  rules:\n    elm:\n      path: false\n")

        result = runner.invoke(app, ["--config", str(config), "good.svg"])

        assert result.exit_code == 1
        assert "elm: Element disallowed by 'path'" in result.output

    def test_invalid_config_exits_2(self, runner, workspace):
        config = workspace / "invalid.yaml"
        config.write_text("rules: {}\n")

        result = runner.invoke(app, ["--config", str(config), "good.svg"])

        assert result.exit_code == 2
        assert "Configuration error" in result.output

    def test_no_input_exits_2(self, runner, workspace):
        result = runner.invoke(app, [])

        assert result.exit_code == 2
        assert "No input given" in result.output

    def test_invalid_format_exits_2(self, runner, workspace):
        result = runner.invoke(app, ["good.svg", "--format", "xml"])

        assert result.exit_code == 2

    def test_quiet_hides_passing_files(self, runner, workspace):
        result = runner.invoke(app, ["good.svg", "bad.svg", "--quiet"])

        assert result.exit_code == 1
        assert "good.svg" not in result.output
        assert "bad.svg" in result.output

    def test_quiet_all_passing_prints_nothing(self, runner, workspace):
        result = runner.invoke(app, ["good.svg", "-q"])

        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_ci_output(self, runner, workspace):
        result = runner.invoke(app, ["bad.svg", "--ci"])

        assert result.exit_code == 1
        assert "\x1b[" not in result.output

    def test_debug_enables_debug_logging(self, runner, workspace, mock_configure_logging):
        runner.invoke(app, ["good.svg", "--debug"])

        assert mock_configure_logging.call_args.kwargs["level"] == "DEBUG"

    def test_logging_follows_config(self, runner, workspace, mock_configure_logging):
        runner.invoke(app, ["good.svg"])

        assert mock_configure_logging.call_args.kwargs["level"] == "WARNING"

    def test_list_rules(self, runner, clean_config_env):
        result = runner.invoke(app, ["--list-rules"])

        assert result.exit_code == 0
        for name in ("attr", "custom", "elm", "valid"):
            assert name in result.output.split()
