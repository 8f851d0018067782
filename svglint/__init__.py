"""svglint - lint SVG files against a configurable set of rules.

Examples
--------
Example usage::

    import asyncio
    from svglint import SVGLint, LintFailed

    linter = SVGLint({"rules": {"elm": {"g": 0}, "attr": {"role": True}}})
    try:
        asyncio.run(linter.lint("icon.svg"))
    except LintFailed as failure:
        for diagnostic in failure.results:
            print(diagnostic.message)
"""

try:
    from importlib.metadata import version

    __version__ = version("svglint")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for source checkouts

from svglint.kernel.config import SVGLintConfig, load_config
from svglint.kernel.domain import DocumentTree, Node, parse_document
from svglint.kernel.exceptions import (
    ConfigurationError,
    LintFailed,
    ParseError,
    RuleExecutionError,
    RuleResolutionError,
    SVGLintError,
)
from svglint.kernel.linting import (
    Diagnostic,
    ObserverRegistry,
    Reporter,
    RuleContext,
    RuleRegistry,
    RunReport,
    SVGLint,
    lint,
    merge_rule_configs,
    register_rule,
)

__all__ = [
    "ConfigurationError",
    "Diagnostic",
    "DocumentTree",
    "LintFailed",
    "Node",
    "ObserverRegistry",
    "ParseError",
    "Reporter",
    "RuleContext",
    "RuleExecutionError",
    "RuleRegistry",
    "RuleResolutionError",
    "RunReport",
    "SVGLint",
    "SVGLintConfig",
    "SVGLintError",
    "__version__",
    "lint",
    "load_config",
    "merge_rule_configs",
    "parse_document",
    "register_rule",
]
