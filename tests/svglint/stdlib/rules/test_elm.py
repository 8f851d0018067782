"""Tests for svglint.stdlib.rules.elm."""

from __future__ import annotations

import pytest

from svglint.kernel.domain.document import parse_document
from svglint.kernel.exceptions import TypeMismatchError
from svglint.kernel.linting.models import RuleContext
from svglint.kernel.linting.reporter import Reporter
from svglint.stdlib.rules.elm import ElmRule

DOC = """<svg>
  <title>Icon</title>
  <g><path d="M0 0"/></g>
  <g><path d="M1 1"/></g>
</svg>"""


def _run(config: dict) -> Reporter:
    reporter = Reporter("elm")
    ElmRule(config)(reporter, parse_document(DOC), RuleContext(rule_name="elm"))
    return reporter


class TestElmRule:
    def test_required_present(self) -> None:
        assert _run({"svg > title": True}).errors == []

    def test_required_missing(self) -> None:
        errors = _run({"desc": True}).errors

        assert [e.message for e in errors] == ["Expected element 'desc', found none"]

    @pytest.mark.parametrize("expected", [False, 0])
    def test_disallowed_reports_each_match(self, expected) -> None:
        errors = _run({"g": expected}).errors

        assert len(errors) == 2
        assert all(e.node is not None and e.node.tag == "g" for e in errors)
        assert errors[0].message == "Element disallowed by 'g': <g>"

    def test_disallowed_without_matches(self) -> None:
        assert _run({"script": False}).errors == []

    def test_exact_count(self) -> None:
        assert _run({"path": 2}).errors == []
        assert _run({"path": 3}).errors[0].message == "Expected at least 3 'path' element(s), found 2"

    def test_too_many_references_first_surplus(self) -> None:
        errors = _run({"g": 1}).errors

        assert len(errors) == 1
        assert errors[0].node is not None
        assert errors[0].node.line == 4

    @pytest.mark.parametrize(
        ("expected", "count"),
        [([0, 2], 0), ([2, None], 0), ([1, 1], 1), ([3, None], 1)],
    )
    def test_ranges(self, expected, count) -> None:
        assert len(_run({"g": expected}).errors) == count


class TestElmConfig:
    @pytest.mark.parametrize("expected", [-1, "yes", [2, 1], [1], 1.5])
    def test_invalid_expectation(self, expected) -> None:
        with pytest.raises(TypeMismatchError):
            ElmRule({"g": expected})

    def test_invalid_selector(self) -> None:
        with pytest.raises(ValueError):
            ElmRule({"g >": True})

    def test_non_mapping(self) -> None:
        with pytest.raises(TypeMismatchError):
            ElmRule(["g"])  # type: ignore[arg-type]

    def test_none_config_checks_nothing(self) -> None:
        reporter = Reporter("elm")
        ElmRule(None)(reporter, parse_document(DOC), RuleContext(rule_name="elm"))

        assert reporter.errors == []
