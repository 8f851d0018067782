"""``attr`` rule: constrain the attributes of selected elements.

Config maps attribute names to expectations:

- ``True``: attribute is required
- ``False``: attribute is forbidden
- ``"value"``: attribute must equal the string
- ``["a", "b"]``: attribute must be one of the strings (if present)
- ``re.compile(...)``: attribute must fully match the pattern (if present)

Special keys:

- ``rule::selector``: elements to check (default ``*``)
- ``rule::whitelist``: if true, attributes not named in the config are errors
- ``rule::order``: ``true`` for alphabetical order, or a list giving the order

Example::

    attr:
      - rule::selector: svg
        role: img
        viewBox: "0 0 24 24"
        xmlns: true
      - rule::selector: path
        rule::whitelist: true
        d: true
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from svglint.kernel.domain.selector import compile_selector
from svglint.kernel.exceptions import TypeMismatchError

if TYPE_CHECKING:
    from svglint.kernel.domain.document import DocumentTree, Node
    from svglint.kernel.linting.models import RuleContext
    from svglint.kernel.linting.reporter import Reporter

SELECTOR_KEY = "rule::selector"
WHITELIST_KEY = "rule::whitelist"
ORDER_KEY = "rule::order"


def _validate_expectation(name: str, expected: Any) -> Any:
    if isinstance(expected, (bool, str, re.Pattern)):
        return expected
    if isinstance(expected, (list, tuple)) and all(isinstance(v, str) for v in expected):
        return tuple(expected)
    raise TypeMismatchError(
        f"attr[{name!r}]", "bool, string, list of strings or compiled pattern", repr(expected)
    )


class AttrRule:
    """Attribute presence, value, whitelist and order checks."""

    def __init__(self, config: Mapping[str, Any] | None) -> None:
        if config is None:
            config = {}
        if not isinstance(config, Mapping):
            raise TypeMismatchError("attr", "mapping of attribute to expectation", type(config).__name__)

        self.selector: str = config.get(SELECTOR_KEY, "*")
        compile_selector(self.selector)
        self.whitelist = bool(config.get(WHITELIST_KEY, False))

        order = config.get(ORDER_KEY)
        if order is not None and order is not True and not isinstance(order, (list, tuple)):
            raise TypeMismatchError(f"attr[{ORDER_KEY!r}]", "true or a list of names", repr(order))
        self.order: bool | tuple[str, ...] | None = tuple(order) if isinstance(order, (list, tuple)) else order

        self.expectations: dict[str, Any] = {
            name: _validate_expectation(name, expected)
            for name, expected in config.items()
            if not name.startswith("rule::")
        }

    def __call__(self, reporter: Reporter, tree: DocumentTree, context: RuleContext) -> None:
        for node in tree.select(self.selector):
            self._check_node(reporter, tree, node)

    def _check_node(self, reporter: Reporter, tree: DocumentTree, node: Node) -> None:
        for name, expected in self.expectations.items():
            value = node.attributes.get(name)

            if expected is True:
                if value is None:
                    reporter.error(["Expected attribute", repr(name), "on", node], node, tree)
            elif expected is False:
                if value is not None:
                    reporter.error(["Attribute", repr(name), "is not allowed on", node], node, tree)
            elif value is None:
                continue
            elif isinstance(expected, str):
                if value != expected:
                    reporter.error(
                        [f"Expected attribute '{name}' to be {expected!r}, got {value!r} on", node],
                        node,
                        tree,
                    )
            elif isinstance(expected, re.Pattern):
                if not expected.fullmatch(value):
                    reporter.error(
                        [f"Attribute '{name}' value {value!r} does not match /{expected.pattern}/ on", node],
                        node,
                        tree,
                    )
            elif value not in expected:
                reporter.error(
                    [f"Attribute '{name}' value {value!r} is not one of {list(expected)!r} on", node],
                    node,
                    tree,
                )

        if self.whitelist:
            for name in node.attributes:
                if name not in self.expectations:
                    reporter.error(["Attribute", repr(name), "is not whitelisted on", node], node, tree)

        if self.order:
            self._check_order(reporter, tree, node)

    def _check_order(self, reporter: Reporter, tree: DocumentTree, node: Node) -> None:
        present = list(node.attributes)
        if self.order is True:
            expected = sorted(present)
        else:
            ranked = [name for name in self.order if name in node.attributes]  # type: ignore[union-attr]
            present = [name for name in present if name in ranked]
            expected = ranked
        if present != expected:
            reporter.error(
                [f"Wrong attribute order, expected {expected!r} but got {present!r} on", node],
                node,
                tree,
            )
