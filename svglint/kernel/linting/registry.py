"""Rule registry: resolves rule names to rule callables.

A rule module provides a *factory*: given one configuration value it returns
a callable ``(reporter, tree, context)`` that inspects the tree. The default
registry is populated with the built-in rules and with plugin rules
published under the ``svglint.rules`` entry-point group.

Plugins register rules via pyproject.toml::

    [project.entry-points."svglint.rules"]
    "no-text" = "my_plugin.rules:no_text"
"""

from __future__ import annotations

from collections.abc import Callable
from importlib.metadata import entry_points
from typing import TYPE_CHECKING, Any, TypeVar

from svglint.kernel.exceptions import RuleResolutionError
from svglint.kernel.logging import get_logger

if TYPE_CHECKING:
    from svglint.kernel.domain.document import DocumentTree
    from svglint.kernel.linting.models import RuleContext
    from svglint.kernel.linting.reporter import Reporter

logger = get_logger(__name__)

RuleFn = Callable[["Reporter", "DocumentTree", "RuleContext"], Any]
RuleFactory = Callable[[Any], RuleFn]
TFactory = TypeVar("TFactory", bound=RuleFactory)

ENTRY_POINT_GROUP = "svglint.rules"


class RuleRegistry:
    """Mapping from rule name to rule factory.

    Lookups are read-only once the registry is populated, so concurrent
    resolution from many rule instances is safe.
    """

    def __init__(self, factories: dict[str, RuleFactory] | None = None) -> None:
        self._factories: dict[str, RuleFactory] = dict(factories or {})

    def register(self, name: str, factory: RuleFactory, *, replace: bool = False) -> None:
        """Register ``factory`` under ``name``.

        Raises
        ------
        ValueError
            If ``name`` is already registered and ``replace`` is False.
        """
        if not name:
            raise ValueError("Rule name cannot be empty")
        if name in self._factories and not replace:
            raise ValueError(f"Rule '{name}' is already registered")
        self._factories[name] = factory

    def unregister(self, name: str) -> bool:
        """Remove a rule; returns False if it was not registered."""
        return self._factories.pop(name, None) is not None

    def names(self) -> list[str]:
        """Registered rule names, sorted."""
        return sorted(self._factories)

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __len__(self) -> int:
        return len(self._factories)

    def resolve(self, name: str, config: Any) -> RuleFn:
        """Bind the rule ``name`` to one configuration value.

        Raises
        ------
        RuleResolutionError
            If the name is unknown, the factory raises, or it returns a non-callable.
        """
        factory = self._factories.get(name)
        if factory is None:
            raise RuleResolutionError(name, "unknown rule")
        try:
            rule = factory(config)
        except RuleResolutionError:
            raise
        except Exception as e:
            raise RuleResolutionError(name, f"factory failed: {e}") from e
        if not callable(rule):
            raise RuleResolutionError(
                name, f"factory returned {type(rule).__name__}, expected a callable"
            )
        return rule


def load_plugin_rules(registry: RuleRegistry) -> None:
    """Register factories published under the ``svglint.rules`` entry-point group.

    Built-in names win; broken entry points are logged and skipped.
    """
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        if ep.name in registry:
            logger.warning(
                "Plugin rule {name} from {value} shadows an existing rule, ignoring",
                name=ep.name,
                value=ep.value,
            )
            continue
        try:
            factory = ep.load()
        except Exception as e:
            logger.warning("Failed to load plugin rule {name}: {error}", name=ep.name, error=e)
            continue
        registry.register(ep.name, factory)


_default_registry: RuleRegistry | None = None


def get_default_registry() -> RuleRegistry:
    """Return the process-wide registry, bootstrapping built-ins and plugins on first use."""
    global _default_registry
    if _default_registry is None:
        from svglint.stdlib.rules import BUILTIN_RULES  # lazy: avoids import cycle

        registry = RuleRegistry(BUILTIN_RULES)
        load_plugin_rules(registry)
        _default_registry = registry
    return _default_registry


def register_rule(
    name: str, factory: TFactory | None = None, *, replace: bool = False
) -> TFactory | Callable[[TFactory], TFactory]:
    """Register a rule factory on the default registry.

    Works as a plain call or as a decorator::

        @register_rule("no-text")
        def no_text(config):
            def rule(reporter, tree, context):
                for node in tree.select("text"):
                    reporter.error("Text elements are not allowed", node, tree)
            return rule
    """

    def decorator(fn: TFactory) -> TFactory:
        get_default_registry().register(name, fn, replace=replace)
        return fn

    if factory is not None:
        return decorator(factory)
    return decorator
