"""Tests for svglint.kernel.domain.selector."""

from __future__ import annotations

import pytest

from svglint.kernel.domain.document import parse_document
from svglint.kernel.domain.selector import compile_selector

DOC = """<svg role="img">
  <g id="outer" class="layer main">
    <g id="inner">
      <path d="M0 0" fill="#fff"/>
    </g>
    <rect width="10" data-name="box-large"/>
  </g>
  <path d="M1 1"/>
</svg>"""


@pytest.fixture
def tree():
    return parse_document(DOC)


def _ids(nodes):
    return [node.get("id") or node.get("d") or node.tag for node in nodes]


class TestSelect:
    """Selector matching through DocumentTree.select."""

    def test_tag(self, tree) -> None:
        assert _ids(tree.select("g")) == ["outer", "inner"]

    def test_universal(self, tree) -> None:
        assert len(tree.select("*")) == 6

    def test_descendant(self, tree) -> None:
        assert _ids(tree.select("g path")) == ["M0 0"]

    def test_child(self, tree) -> None:
        assert _ids(tree.select("svg > path")) == ["M1 1"]
        assert _ids(tree.select("svg > g")) == ["outer"]

    def test_child_without_spaces(self, tree) -> None:
        assert _ids(tree.select("svg>g")) == ["outer"]

    def test_id_and_class(self, tree) -> None:
        assert _ids(tree.select("#inner")) == ["inner"]
        assert _ids(tree.select("g.main")) == ["outer"]
        assert tree.select(".missing") == []

    def test_selector_list_keeps_document_order(self, tree) -> None:
        assert _ids(tree.select("path, g")) == ["outer", "inner", "M0 0", "M1 1"]

    @pytest.mark.parametrize(
        ("selector", "expected"),
        [
            ("[fill]", ["M0 0"]),
            ("[role=img]", ["svg"]),
            ('[role="img"]', ["svg"]),
            ("[class~=layer]", ["outer"]),
            ("[data-name^=box]", ["rect"]),
            ("[data-name$=large]", ["rect"]),
            ("[data-name*=x-l]", ["rect"]),
            ("[data-name*='']", []),
        ],
    )
    def test_attribute_operators(self, tree, selector: str, expected: list[str]) -> None:
        assert _ids(tree.select(selector)) == expected

    def test_no_match(self, tree) -> None:
        assert tree.select("circle") == []
        assert tree.select_one("circle") is None


class TestCompileSelector:
    """Selector compilation errors and caching."""

    @pytest.mark.parametrize("selector", ["", "g >", "> g", "g,,path", "g[", "g!"])
    def test_invalid_selector_raises(self, selector: str) -> None:
        with pytest.raises(ValueError, match="Invalid selector"):
            compile_selector(selector)

    def test_compiled_selectors_are_cached(self) -> None:
        assert compile_selector("svg > g") is compile_selector("svg > g")
