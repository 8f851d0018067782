"""Tests for svglint.kernel.linting.events."""

from __future__ import annotations

import pytest

from svglint.kernel.exceptions import TypeMismatchError
from svglint.kernel.linting.events import (
    DiagnosticReported,
    ErrorReported,
    LintCompleted,
    LintStarted,
    ObserverRegistry,
    RuleCompleted,
    WarningReported,
    normalize_event_types,
)
from svglint.kernel.linting.models import Diagnostic


class TestEvents:
    def test_events_are_timestamped(self) -> None:
        event = LintStarted(source_name="a.svg", rule_count=2)

        assert event.timestamp is not None
        assert event.log_message() == "Linting a.svg with 2 rule instance(s)"

    def test_log_messages(self) -> None:
        assert "failed" in LintCompleted(source_name="a.svg", passed=False).log_message()
        assert "raised" in RuleCompleted("elm", 0, 1.5, failed=True).log_message()
        diagnostic = Diagnostic.build("error", "bad")
        assert ErrorReported("elm", diagnostic).log_message() == "[elm] error: bad"


class TestNormalizeEventTypes:
    def test_none_means_all(self) -> None:
        assert normalize_event_types(None) is None

    def test_single_and_iterable(self) -> None:
        assert normalize_event_types(ErrorReported) == frozenset({ErrorReported})
        assert normalize_event_types([ErrorReported, WarningReported]) == frozenset(
            {ErrorReported, WarningReported}
        )

    def test_rejects_non_events(self) -> None:
        with pytest.raises(TypeMismatchError):
            normalize_event_types([str])
        with pytest.raises(TypeMismatchError):
            normalize_event_types(42)  # type: ignore[arg-type]


class TestObserverRegistry:
    def test_notify_all_observers(self) -> None:
        registry = ObserverRegistry()
        seen: list[object] = []
        registry.register(seen.append)

        event = LintStarted(source_name="a.svg")
        registry.notify(event)

        assert seen == [event]

    def test_filters_by_event_type(self) -> None:
        registry = ObserverRegistry()
        errors: list[object] = []
        registry.register(errors.append, event_types=ErrorReported)

        registry.notify(LintStarted(source_name="a.svg"))
        registry.notify(WarningReported("elm", Diagnostic.build("warning", "w")))
        registry.notify(ErrorReported("elm", Diagnostic.build("error", "e")))

        assert len(errors) == 1
        assert isinstance(errors[0], ErrorReported)

    def test_base_class_filter_matches_subclasses(self) -> None:
        registry = ObserverRegistry()
        seen: list[object] = []
        registry.register(seen.append, event_types=DiagnosticReported)

        registry.notify(ErrorReported("elm", Diagnostic.build("error", "e")))
        registry.notify(WarningReported("elm", Diagnostic.build("warning", "w")))

        assert len(seen) == 2

    def test_failing_observer_is_isolated(self) -> None:
        registry = ObserverRegistry()
        seen: list[object] = []

        def broken(event: object) -> None:
            raise RuntimeError("observer crashed")

        registry.register(broken)
        registry.register(seen.append)

        registry.notify(LintStarted(source_name="a.svg"))

        assert len(seen) == 1

    def test_unregister(self) -> None:
        registry = ObserverRegistry()
        observer_id = registry.register(lambda event: None)

        assert len(registry) == 1
        assert registry.unregister(observer_id) is True
        assert registry.unregister(observer_id) is False
        assert len(registry) == 0

    def test_explicit_observer_id(self) -> None:
        registry = ObserverRegistry()

        assert registry.register(lambda event: None, observer_id="progress") == "progress"

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(TypeMismatchError):
            ObserverRegistry().register("not callable")  # type: ignore[arg-type]

    def test_copy_to_and_clear(self) -> None:
        source, target = ObserverRegistry(), ObserverRegistry()
        source.register(lambda event: None, observer_id="a")

        source.copy_to(target)
        source.clear()

        assert len(source) == 0
        assert len(target) == 1
        assert target.unregister("a")
