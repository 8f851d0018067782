"""Core exception hierarchy for svglint.

All svglint-specific exceptions inherit from SVGLintError so callers can
catch every engine failure with a single ``except`` clause.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svglint.kernel.linting.models import Diagnostic

# ============================================================================
# Base Exception
# ============================================================================


class SVGLintError(Exception):
    """Base exception for all svglint errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(SVGLintError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError(".svglintrc.yaml", "'rules' must be a mapping")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class TypeMismatchError(SVGLintError):
    """Raised when a value has an unexpected type.

    Examples
    --------
    Example usage::

        raise TypeMismatchError("event_types", "Event subclass", "str")
    """

    def __init__(self, field: str, expected: type | str, actual: type | str) -> None:
        exp_str = expected.__name__ if isinstance(expected, type) else str(expected)
        act_str = actual.__name__ if isinstance(actual, type) else str(actual)
        super().__init__(f"Type mismatch for '{field}': expected {exp_str}, got {act_str}")
        self.field = field
        self.expected = expected
        self.actual = actual


# ============================================================================
# Document Errors
# ============================================================================


class ParseError(SVGLintError):
    """Raised when a document cannot be parsed into a tree.

    Examples
    --------
    Example usage::

        raise ParseError("mismatched tag: line 1, column 10")
    """

    def __init__(self, message: str, source_name: str | None = None) -> None:
        super().__init__(message)
        self.source_name = source_name


# ============================================================================
# Rule Errors
# ============================================================================


class RuleResolutionError(SVGLintError):
    """Raised when a rule name cannot be resolved to a rule callable."""

    def __init__(self, rule_name: str, reason: str) -> None:
        self.rule_name = rule_name
        self.reason = reason
        super().__init__(f"Cannot resolve rule '{rule_name}': {reason}")


class RuleExecutionError(SVGLintError):
    """Exception recorded when a rule instance raises or its completion fails."""

    def __init__(self, rule_name: str, original_error: BaseException) -> None:
        self.rule_name = rule_name
        self.original_error = original_error
        super().__init__(f"Rule '{rule_name}' failed: {original_error}")


# ============================================================================
# Run Outcome
# ============================================================================


class LintFailed(SVGLintError):
    """Raised by ``SVGLint.lint`` when a run does not pass.

    ``results`` is always a list, even when the failure is a single parse error.
    """

    def __init__(self, results: list[Diagnostic]) -> None:
        self.results = list(results)
        count = len(self.results)
        super().__init__(f"Linting failed with {count} problem{'s' if count != 1 else ''}")
