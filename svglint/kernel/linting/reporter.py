"""The object rules use to report exceptions, errors, warnings and messages.

One Reporter is created per rule instance and owned by it exclusively, so
recording needs no locking. Each record is appended in call order and
emitted as an event for live observers.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from svglint.kernel.linting.events import (
    ErrorReported,
    EventTypesInput,
    ExceptionReported,
    LogReported,
    ObserverFunc,
    ObserverRegistry,
    WarningReported,
)
from svglint.kernel.linting.models import Diagnostic
from svglint.kernel.logging import get_logger_for_component

if TYPE_CHECKING:
    from svglint.kernel.domain.document import DocumentTree, Node


def _debug_repr(message: Any) -> str:
    try:
        return json.dumps(message, default=repr)
    except (TypeError, ValueError):
        return repr(message)


class Reporter:
    """Collects what a single rule instance reports.

    Examples
    --------
    >>> reporter = Reporter("attr")
    >>> reporter.error(["Expected attribute", "role"])
    >>> reporter.errors[0].message
    'Expected attribute role'
    """

    def __init__(self, name: str, observers: ObserverRegistry | None = None) -> None:
        """Create a reporter.

        Parameters
        ----------
        name : str
            Name used for log routing, normally the rule name.
        observers : ObserverRegistry | None
            Registry to emit events on; a private one is created if omitted.
        """
        self.name = name
        self.logger = get_logger_for_component("reporter", name)
        self.observers = observers if observers is not None else ObserverRegistry()
        self.exceptions: list[BaseException] = []
        self.errors: list[Diagnostic] = []
        self.warns: list[Diagnostic] = []
        self.logs: list[Diagnostic] = []

    def register(self, handler: ObserverFunc, *, event_types: EventTypesInput = None) -> str:
        """Subscribe ``handler`` to this reporter's events; returns the observer id."""
        return self.observers.register(handler, event_types=event_types)

    def unregister(self, observer_id: str) -> bool:
        """Remove a subscription made with :meth:`register`."""
        return self.observers.unregister(observer_id)

    def exception(self, error: BaseException) -> None:
        """Report that an exception occurred during rule processing.

        This marks the lint result as untrustworthy; it does not stop other rules.
        """
        self.logger.debug("Exception reported: {error!r}", error=error)
        self.exceptions.append(error)
        self.observers.notify(ExceptionReported(reporter_name=self.name, error=error))

    def error(self, message: Any, node: Node | None = None, tree: DocumentTree | None = None) -> None:
        """Report a failing check.

        ``message`` is a single value or a console-style list of values.
        """
        self.logger.debug("Error reported: {message}", message=_debug_repr(message))
        result = Diagnostic.build("error", message, node, tree)
        self.errors.append(result)
        self.observers.notify(ErrorReported(reporter_name=self.name, diagnostic=result))

    def warn(self, message: Any, node: Node | None = None, tree: DocumentTree | None = None) -> None:
        """Report a warning. Warnings never fail a run on their own."""
        self.logger.debug("Warn reported: {message}", message=_debug_repr(message))
        result = Diagnostic.build("warning", message, node, tree)
        self.warns.append(result)
        self.observers.notify(WarningReported(reporter_name=self.name, diagnostic=result))

    def log(self, message: Any, node: Node | None = None, tree: DocumentTree | None = None) -> None:
        """Show an informational message to the user."""
        self.logger.debug("Log reported: {message}", message=_debug_repr(message))
        result = Diagnostic.build("log", message, node, tree)
        self.logs.append(result)
        self.observers.notify(LogReported(reporter_name=self.name, diagnostic=result))

    @property
    def has_failures(self) -> bool:
        """True if anything recorded here would fail the run."""
        return bool(self.exceptions or self.errors)

    def __repr__(self) -> str:
        return (
            f"Reporter({self.name!r}, exceptions={len(self.exceptions)}, "
            f"errors={len(self.errors)}, warns={len(self.warns)}, logs={len(self.logs)})"
        )
