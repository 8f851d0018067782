"""Rule executor for individual rule instances.

A rule callable may finish immediately or hand back an awaitable. The
executor turns either into a RuleOutcome, always awaits the deferred case,
and routes any failure to the instance's reporter instead of raising.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from svglint.kernel.exceptions import RuleExecutionError
from svglint.kernel.linting.events import ObserverRegistry, RuleCompleted, RuleStarted
from svglint.kernel.linting.models import Diagnostic, RuleContext
from svglint.kernel.logging import get_logger
from svglint.kernel.utils.timer import Timer

if TYPE_CHECKING:
    from svglint.kernel.domain.document import DocumentTree
    from svglint.kernel.linting.registry import RuleFn
    from svglint.kernel.linting.reporter import Reporter

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Immediate:
    """The rule finished synchronously and returned ``value``."""

    value: Any = None


@dataclass(frozen=True, slots=True)
class Deferred:
    """The rule handed back an awaitable that yields its return value or fails."""

    handle: Awaitable[Any]


RuleOutcome = Immediate | Deferred


def outcome_of(value: Any) -> RuleOutcome:
    """Classify a rule's raw return value."""
    if inspect.isawaitable(value):
        return Deferred(value)
    return Immediate(value)


def is_no_findings(value: Any) -> bool:
    """True for the values a rule returns to say "nothing to report"."""
    if value is None or isinstance(value, bool):
        return True
    if isinstance(value, str):
        return not value
    return isinstance(value, (list, tuple)) and not value


def fold_returned(reporter: Reporter, value: Any) -> None:
    """Record diagnostics a rule returned directly as errors on ``reporter``."""
    if is_no_findings(value):
        return
    items = value if isinstance(value, (list, tuple)) else [value]
    for item in items:
        if is_no_findings(item):
            continue
        if isinstance(item, Diagnostic):
            reporter.error(list(item.parts) or item.message, item.node, item.tree)
        elif isinstance(item, BaseException):
            reporter.error(str(item) or type(item).__name__)
        else:
            reporter.error(item)


class RuleExecutor:
    """Runs one rule instance to completion with exception isolation.

    Examples
    --------
    Example usage::

        executor = RuleExecutor()
        reporter = Reporter("custom")
        await executor.execute(rule, reporter, tree, RuleContext(rule_name="custom"))
        reporter.errors  # whatever the rule reported
    """

    def __init__(self, observers: ObserverRegistry | None = None) -> None:
        self.observers = observers if observers is not None else ObserverRegistry()

    async def execute(
        self,
        rule: RuleFn,
        reporter: Reporter,
        tree: DocumentTree,
        context: RuleContext,
    ) -> Reporter:
        """Execute ``rule`` and wait until it has settled.

        Never raises for failures inside the rule: they are recorded with
        ``reporter.exception``. Cancellation of the surrounding task still
        propagates.

        Returns
        -------
        Reporter
            The same reporter, holding everything the instance reported.
        """
        timer = Timer()
        self.observers.notify(RuleStarted(rule_name=context.rule_name, index=context.index))

        try:
            outcome = outcome_of(rule(reporter, tree, context))
            if isinstance(outcome, Deferred):
                value = await outcome.handle
            else:
                value = outcome.value
            fold_returned(reporter, value)
        except Exception as err:
            logger.debug(
                "Rule '{rule}' #{index} raised {error!r}",
                rule=context.rule_name,
                index=context.index,
                error=err,
            )
            wrapped = RuleExecutionError(context.rule_name, err)
            wrapped.__cause__ = err
            reporter.exception(wrapped)

        self.observers.notify(
            RuleCompleted(
                rule_name=context.rule_name,
                index=context.index,
                duration_ms=timer.duration_ms,
                failed=bool(reporter.exceptions),
            )
        )
        return reporter
