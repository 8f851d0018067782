"""Tests for svglint.kernel.domain.document."""

from __future__ import annotations

import gc

import pytest

from svglint.kernel.domain.document import DocumentTree, Node, parse_document
from svglint.kernel.exceptions import ParseError


class TestParseDocument:
    """Test parsing text into a DocumentTree."""

    def test_parses_root_and_children(self, icon_svg: str) -> None:
        tree = parse_document(icon_svg)

        assert isinstance(tree, DocumentTree)
        assert tree.root.tag == "svg"
        assert [child.tag for child in tree.root.children] == ["title", "g"]
        assert [child.tag for child in tree.root.children[1].children] == ["path", "circle"]

    def test_keeps_attribute_order(self) -> None:
        tree = parse_document('<svg viewBox="0 0 1 1" role="img" xmlns="x"></svg>')

        assert list(tree.root.attributes) == ["viewBox", "role", "xmlns"]
        assert tree.root.get("role") == "img"
        assert tree.root.get("missing", "fallback") == "fallback"

    def test_keeps_qualified_names_verbatim(self) -> None:
        tree = parse_document('<svg xmlns:xlink="x"><use xlink:href="#a"/></svg>')

        use = tree.root.children[0]
        assert use.attributes == {"xlink:href": "#a"}

    def test_records_positions(self, icon_svg: str) -> None:
        tree = parse_document(icon_svg)

        path = tree.select_one("path")
        assert path is not None
        assert path.line == 4
        assert path.column == 4

    def test_collects_text(self, icon_svg: str) -> None:
        tree = parse_document(icon_svg)

        title = tree.select_one("title")
        assert title is not None
        assert title.text == "Icon"

    def test_keeps_source_and_filepath(self) -> None:
        tree = parse_document("<svg/>", filepath="/icons/a.svg")

        assert tree.source == "<svg/>"
        assert tree.filepath == "/icons/a.svg"
        assert tree.source_lines == ["<svg/>"]

    def test_malformed_raises_parse_error(self) -> None:
        with pytest.raises(ParseError) as exc_info:
            parse_document("<svg><g></svg>", source_name="broken.svg")

        assert "mismatched tag" in str(exc_info.value)
        assert exc_info.value.source_name == "broken.svg"

    @pytest.mark.parametrize("text", ["", "   \n  "])
    def test_empty_raises_parse_error(self, text: str) -> None:
        with pytest.raises(ParseError, match="empty"):
            parse_document(text)

    def test_text_without_elements_raises_parse_error(self) -> None:
        with pytest.raises(ParseError):
            parse_document("just some text")


class TestNode:
    """Test Node navigation and serialization."""

    def test_parent_links(self, icon_svg: str) -> None:
        tree = parse_document(icon_svg)
        circle = tree.select_one("circle")

        assert circle is not None
        assert circle.parent is not None
        assert circle.parent.tag == "g"
        assert [a.tag for a in circle.ancestors()] == ["g", "svg"]
        assert tree.root.parent is None

    def test_parent_is_weak(self) -> None:
        parent = Node("g")
        child = Node("path")
        parent.append(child)
        assert child.parent is parent

        del parent
        gc.collect()
        assert child.parent is None

    def test_iter_is_document_order(self, icon_svg: str) -> None:
        tree = parse_document(icon_svg)

        assert [node.tag for node in tree.iter()] == ["svg", "title", "g", "path", "circle"]

    def test_open_tag(self) -> None:
        node = Node("g", {"id": "a", "title": 'say "hi"'})

        assert node.open_tag() == '<g id="a" title="say &quot;hi&quot;">'
        assert repr(node) == node.open_tag()

    def test_open_tag_without_attributes(self) -> None:
        assert Node("g").open_tag() == "<g>"
