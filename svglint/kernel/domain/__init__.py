"""Document domain: the parsed tree rules inspect."""

from svglint.kernel.domain.document import DocumentTree, Node, parse_document
from svglint.kernel.domain.selector import compile_selector

__all__ = ["DocumentTree", "Node", "compile_selector", "parse_document"]
