"""Rule configuration normalization and layering.

A rule configuration maps a rule name to ``False`` (disabled), a single
config value, or a list of config values. Each list item is an independent
rule instance sharing the rule name.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from svglint.kernel.exceptions import TypeMismatchError

RuleConfig = Mapping[str, Any]


@dataclass(frozen=True, slots=True)
class RuleInstance:
    """One configured application of a named rule."""

    name: str
    config: Any
    index: int = 0


def expand_rule_config(value: Any) -> list[Any]:
    """Expand one rule's config value into the configs of its instances.

    >>> expand_rule_config(False)
    []
    >>> expand_rule_config({"svg": True})
    [{'svg': True}]
    >>> expand_rule_config([1, 2])
    [1, 2]
    """
    if value is False:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_rules(rules: RuleConfig | None) -> list[RuleInstance]:
    """Flatten ``rules`` into an ordered list of rule instances.

    Order follows the mapping's insertion order, then list order within a
    rule name. The caller's mapping is never modified.
    """
    if rules is None:
        return []
    if not isinstance(rules, Mapping):
        raise TypeMismatchError("rules", "mapping of rule name to config", type(rules).__name__)

    instances: list[RuleInstance] = []
    for name, value in rules.items():
        for config in expand_rule_config(value):
            instances.append(RuleInstance(name=name, config=config, index=len(instances)))
    return instances


def merge_rule_configs(*layers: RuleConfig | None) -> dict[str, Any]:
    """Merge rule configurations, later layers overriding earlier ones per rule name.

    ``False`` is sticky: once a layer disables a rule, no later layer can
    re-enable it. None layers are skipped and no layer is mutated.

    >>> merge_rule_configs({"elm": {"g": 0}, "attr": {}}, {"elm": False}, {"elm": {"g": 1}})
    {'elm': False, 'attr': {}}
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        for name, value in layer.items():
            if merged.get(name) is False:
                continue
            merged[name] = value
    return merged
