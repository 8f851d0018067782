"""Event data classes and the observer registry for live lint reporting.

Observers are read-only: they see events as they happen (for progress UIs)
but cannot influence diagnostics or the verdict. A failing observer is
logged and skipped.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from svglint.kernel.exceptions import TypeMismatchError
from svglint.kernel.logging import get_logger

logger = get_logger(__name__)


@dataclass(slots=True)
class Event:
    """Base class for all events - provides timestamp."""

    timestamp: datetime = field(default_factory=datetime.now, init=False)

    def log_message(self) -> str:
        """Get a formatted log message for this event."""
        return f"{self.__class__.__name__} at {self.timestamp.isoformat()}"


# Run events
@dataclass(slots=True)
class LintStarted(Event):
    """A lint run has started."""

    source_name: str
    rule_count: int = 0

    def log_message(self) -> str:
        return f"Linting {self.source_name} with {self.rule_count} rule instance(s)"


@dataclass(slots=True)
class LintCompleted(Event):
    """A lint run has produced its verdict."""

    source_name: str
    passed: bool
    duration_ms: float = 0.0

    def log_message(self) -> str:
        verdict = "passed" if self.passed else "failed"
        return f"Linting {self.source_name} {verdict} in {self.duration_ms:.1f}ms"


# Rule events
@dataclass(slots=True)
class RuleStarted(Event):
    """A rule instance has been launched."""

    rule_name: str
    index: int

    def log_message(self) -> str:
        return f"Rule '{self.rule_name}' #{self.index} started"


@dataclass(slots=True)
class RuleCompleted(Event):
    """A rule instance has settled (normally or with an exception)."""

    rule_name: str
    index: int
    duration_ms: float
    failed: bool = False

    def log_message(self) -> str:
        outcome = "raised" if self.failed else "completed"
        return f"Rule '{self.rule_name}' #{self.index} {outcome} in {self.duration_ms:.1f}ms"


# Reporter events
@dataclass(slots=True)
class ExceptionReported(Event):
    """A rule crashed; the lint result cannot be fully trusted."""

    reporter_name: str
    error: BaseException


@dataclass(slots=True)
class DiagnosticReported(Event):
    """Base class for error/warning/log events."""

    reporter_name: str
    diagnostic: Any

    def log_message(self) -> str:
        return f"[{self.reporter_name}] {self.diagnostic.kind}: {self.diagnostic.message}"


@dataclass(slots=True)
class ErrorReported(DiagnosticReported):
    """A failing check was recorded."""


@dataclass(slots=True)
class WarningReported(DiagnosticReported):
    """A warning was recorded."""


@dataclass(slots=True)
class LogReported(DiagnosticReported):
    """An informational message was recorded."""


ObserverFunc = Callable[[Event], None]
EventType = type[Event]
EventTypesInput = EventType | Iterable[EventType] | None


def normalize_event_types(event_types: EventTypesInput) -> frozenset[EventType] | None:
    """Normalize user-provided event types to a validated set."""
    if event_types is None:
        return None
    if isinstance(event_types, type):
        return frozenset({_ensure_event_subclass(event_types)})
    if isinstance(event_types, Iterable):
        return frozenset(_ensure_event_subclass(item) for item in event_types)
    raise TypeMismatchError(
        "event_types", "type, iterable of types, or None", type(event_types).__name__
    )


def _ensure_event_subclass(event_type: Any) -> EventType:
    if not isinstance(event_type, type) or not issubclass(event_type, Event):
        raise TypeMismatchError("event_types", "Event subclass", repr(event_type))
    return event_type


class ObserverRegistry:
    """Synchronous observer registry with event-type filtering and fault isolation.

    Examples
    --------
    >>> registry = ObserverRegistry()
    >>> seen = []
    >>> observer_id = registry.register(seen.append, event_types=ErrorReported)
    >>> len(registry)
    1
    """

    __slots__ = ("_observers",)

    def __init__(self) -> None:
        self._observers: dict[str, tuple[ObserverFunc, frozenset[EventType] | None]] = {}

    def register(
        self,
        handler: ObserverFunc,
        *,
        event_types: EventTypesInput = None,
        observer_id: str | None = None,
    ) -> str:
        """Register ``handler`` for ``event_types`` (None = all events) and return its id."""
        if not callable(handler):
            raise TypeMismatchError("handler", "callable", type(handler).__name__)
        observer_id = observer_id or str(uuid.uuid4())
        self._observers[observer_id] = (handler, normalize_event_types(event_types))
        return observer_id

    def unregister(self, observer_id: str) -> bool:
        """Remove an observer; returns False if the id was unknown."""
        return self._observers.pop(observer_id, None) is not None

    def notify(self, event: Event) -> None:
        """Deliver ``event`` to every interested observer, in registration order."""
        for observer_id, (handler, event_types) in list(self._observers.items()):
            if event_types is not None and not isinstance(event, tuple(event_types)):
                continue
            try:
                handler(event)
            except Exception as e:
                logger.warning(
                    "Observer {observer} failed for {event}: {error}",
                    observer=getattr(handler, "__name__", observer_id),
                    event=type(event).__name__,
                    error=e,
                )

    def copy_to(self, other: ObserverRegistry) -> None:
        """Register every observer of this registry on ``other`` under the same ids."""
        other._observers.update(self._observers)

    def clear(self) -> None:
        """Remove all registered observers."""
        self._observers.clear()

    def __len__(self) -> int:
        return len(self._observers)
