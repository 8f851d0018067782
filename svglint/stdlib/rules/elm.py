"""``elm`` rule: constrain how many elements match each selector.

Config maps a selector to one of:

- ``True``: at least one element must match
- ``False`` or ``0``: no element may match (each match is reported)
- ``n``: exactly ``n`` elements must match
- ``[min, max]``: between ``min`` and ``max`` matches, inclusive; ``max`` may be null

Example::

    elm:
      svg: 1
      "svg > title": true
      g: [0, 2]
      script: false
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from svglint.kernel.domain.selector import compile_selector
from svglint.kernel.exceptions import TypeMismatchError

if TYPE_CHECKING:
    from svglint.kernel.domain.document import DocumentTree, Node
    from svglint.kernel.linting.models import RuleContext
    from svglint.kernel.linting.reporter import Reporter


def _validate_expectation(selector: str, expected: Any) -> Any:
    if isinstance(expected, bool):
        return expected
    if isinstance(expected, int):
        if expected < 0:
            raise TypeMismatchError(f"elm[{selector!r}]", "non-negative count", str(expected))
        return expected
    if isinstance(expected, (list, tuple)) and len(expected) == 2:
        low, high = expected
        if isinstance(low, int) and not isinstance(low, bool) and (
            high is None or (isinstance(high, int) and not isinstance(high, bool) and high >= low)
        ):
            return (low, high)
    raise TypeMismatchError(
        f"elm[{selector!r}]", "true, false, a count or [min, max]", repr(expected)
    )


class ElmRule:
    """Element presence / count checks."""

    def __init__(self, config: Mapping[str, Any] | None) -> None:
        if config is None:
            config = {}
        if not isinstance(config, Mapping):
            raise TypeMismatchError("elm", "mapping of selector to expectation", type(config).__name__)
        self.expectations: dict[str, Any] = {}
        for selector, expected in config.items():
            compile_selector(selector)  # fail early on bad selectors
            self.expectations[selector] = _validate_expectation(selector, expected)

    def __call__(self, reporter: Reporter, tree: DocumentTree, context: RuleContext) -> None:
        for selector, expected in self.expectations.items():
            self._check(reporter, tree, selector, expected, tree.select(selector))

    @staticmethod
    def _check(
        reporter: Reporter,
        tree: DocumentTree,
        selector: str,
        expected: Any,
        matches: list[Node],
    ) -> None:
        count = len(matches)

        if expected is True:
            if not count:
                reporter.error(f"Expected element '{selector}', found none")
            return

        if expected is False or expected == 0:
            for node in matches:
                reporter.error(["Element disallowed by", repr(selector) + ":", node], node, tree)
            return

        if isinstance(expected, int):
            low = high = expected
        else:
            low, high = expected

        if count < low:
            reporter.error(f"Expected at least {low} '{selector}' element(s), found {count}")
        elif high is not None and count > high:
            surplus = matches[high]
            reporter.error(
                [f"Expected at most {high} '{selector}' element(s), found {count}; first surplus:", surplus],
                surplus,
                tree,
            )
