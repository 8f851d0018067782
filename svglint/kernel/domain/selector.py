"""CSS-like selector matching over Node trees.

Supported syntax::

    svg > g path          descendant and child combinators
    g, circle             selector lists
    *                     any element
    #foo .bar             id and class shorthands
    [role] [role=img]     attribute presence and comparison (=, ~=, ^=, $=, *=)

Matching runs right to left using the parent back-references of each node.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import lru_cache

from svglint.kernel.domain.document import Node

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<child>>)
  | (?P<comma>,)
  | (?P<tag>\*|[A-Za-z_][\w:-]*)
  | (?P<id>\#[\w-]+)
  | (?P<cls>\.[\w-]+)
  | (?P<attr>\[\s*(?P<name>[\w:.-]+)\s*
        (?:(?P<op>[~^$*]?=)\s*(?P<value>"[^"]*"|'[^']*'|[^\]\s]+)\s*)?\])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True, slots=True)
class _AttrTest:
    name: str
    op: str | None = None
    value: str = ""

    def __call__(self, node: Node) -> bool:
        actual = node.attributes.get(self.name)
        if actual is None:
            return False
        if self.op is None:
            return True
        if self.op == "=":
            return actual == self.value
        if self.op == "~=":
            return self.value in actual.split()
        if self.op == "^=":
            return bool(self.value) and actual.startswith(self.value)
        if self.op == "$=":
            return bool(self.value) and actual.endswith(self.value)
        return bool(self.value) and self.value in actual


@dataclass(slots=True)
class _Compound:
    tag: str = "*"
    tests: list[Callable[[Node], bool]] = field(default_factory=list)

    def matches(self, node: Node) -> bool:
        if self.tag != "*" and node.tag != self.tag:
            return False
        return all(test(node) for test in self.tests)


# A complex selector is a list of (combinator, compound) pairs, left to right.
# The first combinator is always None.
_Complex = list[tuple[str | None, _Compound]]


def _parse(selector: str) -> list[_Complex]:
    selectors: list[_Complex] = []
    current: _Complex = []
    compound: _Compound | None = None
    pending: str | None = None
    pos = 0

    def flush() -> None:
        nonlocal compound, pending
        if compound is not None:
            current.append((pending if current else None, compound))
            compound = None
            pending = None

    while pos < len(selector):
        match = _TOKEN_RE.match(selector, pos)
        if match is None:
            raise ValueError(f"Invalid selector {selector!r} at position {pos}")
        pos = match.end()
        kind = "attr" if match.group("attr") is not None else match.lastgroup

        if kind == "ws":
            if compound is not None:
                flush()
                pending = " "
            continue
        if kind in ("child", "comma"):
            flush()
            if not current:
                raise ValueError(f"Invalid selector {selector!r}: dangling {match.group()!r}")
            if kind == "child":
                pending = ">"
            else:
                selectors.append(current)
                current = []
                pending = None
            continue

        if kind == "tag":
            if compound is not None:
                raise ValueError(f"Invalid selector {selector!r}: unexpected tag {match.group()!r}")
            compound = _Compound(tag=match.group())
            continue

        if compound is None:
            compound = _Compound()
        if kind == "id":
            compound.tests.append(_AttrTest("id", "=", match.group()[1:]))
        elif kind == "cls":
            compound.tests.append(_AttrTest("class", "~=", match.group()[1:]))
        else:
            value = match.group("value") or ""
            if value[:1] in ("'", '"'):
                value = value[1:-1]
            compound.tests.append(_AttrTest(match.group("name"), match.group("op"), value))

    flush()
    if not current:
        raise ValueError(f"Invalid selector {selector!r}: empty selector")
    if pending is not None and pending != " ":
        raise ValueError(f"Invalid selector {selector!r}: trailing combinator")
    selectors.append(current)
    return selectors


def _matches_complex(node: Node, parts: _Complex, index: int) -> bool:
    combinator, compound = parts[index]
    if not compound.matches(node):
        return False
    if index == 0:
        return True
    if combinator == ">":
        parent = node.parent
        return parent is not None and _matches_complex(parent, parts, index - 1)
    return any(_matches_complex(ancestor, parts, index - 1) for ancestor in node.ancestors())


@lru_cache(maxsize=256)
def compile_selector(selector: str) -> Callable[[Node], bool]:
    """Compile ``selector`` into a predicate over nodes.

    Raises
    ------
    ValueError
        If the selector cannot be parsed.
    """
    complexes = _parse(selector.strip())

    def matcher(node: Node) -> bool:
        return any(_matches_complex(node, parts, len(parts) - 1) for parts in complexes)

    return matcher
