"""``custom`` rule: the config value is itself the rule callable.

Example::

    def no_empty_groups(reporter, tree, context):
        for group in tree.select("g"):
            if not group.children:
                reporter.warn("Empty group", group, tree)

    SVGLint({"rules": {"custom": [no_empty_groups]}})

The callable may be a coroutine function; the engine awaits it.
"""

from __future__ import annotations

from typing import Any

from svglint.kernel.exceptions import RuleResolutionError
from svglint.kernel.linting.registry import RuleFn


def custom(config: Any) -> RuleFn:
    """Use ``config`` as the rule implementation."""
    if not callable(config):
        raise RuleResolutionError("custom", f"config must be callable, got {type(config).__name__}")
    return config
