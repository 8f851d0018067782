"""Rule-based linting engine."""

from svglint.kernel.linting.events import ObserverRegistry
from svglint.kernel.linting.executor import Deferred, Immediate, RuleExecutor
from svglint.kernel.linting.linter import SVGLint, display_name, lint
from svglint.kernel.linting.models import Diagnostic, RuleContext, RunReport
from svglint.kernel.linting.registry import (
    RuleRegistry,
    get_default_registry,
    register_rule,
)
from svglint.kernel.linting.reporter import Reporter
from svglint.kernel.linting.rule_config import (
    RuleInstance,
    merge_rule_configs,
    normalize_rules,
)

__all__ = [
    "Deferred",
    "Diagnostic",
    "Immediate",
    "ObserverRegistry",
    "Reporter",
    "RuleContext",
    "RuleExecutor",
    "RuleInstance",
    "RuleRegistry",
    "RunReport",
    "SVGLint",
    "display_name",
    "get_default_registry",
    "lint",
    "merge_rule_configs",
    "normalize_rules",
    "register_rule",
]
