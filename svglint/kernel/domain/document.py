"""Document tree primitives: Node, DocumentTree and the XML adapter.

The tree owns its nodes top-down. Each node keeps only a weak reference to
its parent so lookups upward never keep a detached subtree alive.
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from typing import Any
from xml.parsers import expat

from svglint.kernel.exceptions import ParseError


class Node:
    """A single element of a parsed document."""

    __slots__ = ("tag", "attributes", "children", "text", "line", "column", "_parent", "__weakref__")

    def __init__(
        self,
        tag: str,
        attributes: dict[str, str] | None = None,
        *,
        line: int = 0,
        column: int = 0,
    ) -> None:
        self.tag = tag
        self.attributes: dict[str, str] = dict(attributes or {})
        self.children: list[Node] = []
        self.text = ""
        self.line = line
        self.column = column
        self._parent: weakref.ref[Node] | None = None

    @property
    def parent(self) -> Node | None:
        """The parent node, or None for the root (or a detached node)."""
        return self._parent() if self._parent is not None else None

    def append(self, child: Node) -> None:
        """Attach ``child`` as the last child of this node."""
        child._parent = weakref.ref(self)
        self.children.append(child)

    def get(self, name: str, default: Any = None) -> Any:
        """Return the value of attribute ``name`` or ``default``."""
        return self.attributes.get(name, default)

    def iter(self) -> Iterator[Node]:
        """Iterate over this node and all descendants in document order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def ancestors(self) -> Iterator[Node]:
        """Iterate from the parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def open_tag(self) -> str:
        """Serialize the opening tag, e.g. ``<g id="foo">``."""
        attrs = "".join(
            f' {name}="{_escape_attr(value)}"' for name, value in self.attributes.items()
        )
        return f"<{self.tag}{attrs}>"

    def __repr__(self) -> str:
        return self.open_tag()


class DocumentTree:
    """A parsed document: exactly one root node plus the source it came from."""

    __slots__ = ("root", "source", "filepath", "_lines")

    def __init__(self, root: Node, source: str, filepath: str | None = None) -> None:
        self.root = root
        self.source = source
        self.filepath = filepath
        self._lines: list[str] | None = None

    @property
    def source_lines(self) -> list[str]:
        """The source split into lines (1-based ``node.line`` indexes into it minus one)."""
        if self._lines is None:
            self._lines = self.source.splitlines()
        return self._lines

    def iter(self) -> Iterator[Node]:
        """Iterate over every node in document order."""
        return self.root.iter()

    def select(self, selector: str) -> list[Node]:
        """Return all nodes matching a CSS-like ``selector``, in document order."""
        from svglint.kernel.domain.selector import compile_selector

        matcher = compile_selector(selector)
        return [node for node in self.iter() if matcher(node)]

    def select_one(self, selector: str) -> Node | None:
        """Return the first node matching ``selector``, if any."""
        matches = self.select(selector)
        return matches[0] if matches else None

    def __repr__(self) -> str:
        return f"DocumentTree(root={self.root!r}, filepath={self.filepath!r})"


def _escape_attr(value: str) -> str:
    return value.replace("&", "&amp;").replace('"', "&quot;").replace("<", "&lt;")


class _TreeBuilder:
    """Expat callbacks assembling a Node tree with source positions."""

    def __init__(self, parser: Any) -> None:
        self._parser = parser
        self._stack: list[Node] = []
        self.root: Node | None = None

    def start(self, tag: str, attrs: list[str]) -> None:
        # ordered_attributes gives a flat [name, value, name, value, ...] list
        attributes = dict(zip(attrs[::2], attrs[1::2], strict=True))
        node = Node(
            tag,
            attributes,
            line=self._parser.CurrentLineNumber,
            column=self._parser.CurrentColumnNumber,
        )
        if self._stack:
            self._stack[-1].append(node)
        else:
            self.root = node
        self._stack.append(node)

    def end(self, tag: str) -> None:
        self._stack.pop()

    def data(self, text: str) -> None:
        if self._stack:
            self._stack[-1].text += text


def parse_document(
    text: str, source_name: str | None = None, filepath: str | None = None
) -> DocumentTree:
    """Parse ``text`` as strict XML into a DocumentTree.

    Tags must be closed and qualified names (``xlink:href``) are kept verbatim.

    Raises
    ------
    ParseError
        If the text is empty or not well-formed XML.
    """
    if not text.strip():
        raise ParseError("document is empty", source_name=source_name)

    parser = expat.ParserCreate()
    parser.ordered_attributes = True
    builder = _TreeBuilder(parser)
    parser.StartElementHandler = builder.start
    parser.EndElementHandler = builder.end
    parser.CharacterDataHandler = builder.data

    try:
        parser.Parse(text, True)
    except expat.ExpatError as e:
        raise ParseError(str(e), source_name=source_name) from e

    if builder.root is None:
        raise ParseError("no root element found", source_name=source_name)

    return DocumentTree(builder.root, text, filepath=filepath)
