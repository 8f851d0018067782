"""Core models for the svglint linting engine."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Literal

from svglint.kernel.exceptions import RuleExecutionError

if TYPE_CHECKING:
    from svglint.kernel.domain.document import DocumentTree, Node

DiagnosticKind = Literal["exception", "error", "warning", "log"]


def format_message(parts: Sequence[Any]) -> str:
    """Join a console-style message list into one string.

    Strings are kept verbatim, anything else is shown with ``repr``.
    """
    return " ".join(part if isinstance(part, str) else repr(part) for part in parts)


def as_parts(message: Any) -> tuple[Any, ...]:
    """Normalize a single message value or a message list into a tuple of parts."""
    if isinstance(message, (list, tuple)):
        return tuple(message)
    return (message,)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single reported item, attributable to exactly one rule instance.

    ``node`` and ``tree`` are kept as raw references so the presentation
    layer can decide how to render the surrounding source.
    """

    kind: DiagnosticKind
    message: str
    rule_name: str | None = None
    parts: tuple[Any, ...] = ()
    node: Node | None = field(default=None, compare=False)
    tree: DocumentTree | None = field(default=None, compare=False)
    error: BaseException | None = field(default=None, compare=False)

    @classmethod
    def build(
        cls,
        kind: DiagnosticKind,
        message: Any,
        node: Node | None = None,
        tree: DocumentTree | None = None,
        rule_name: str | None = None,
    ) -> Diagnostic:
        """Build a diagnostic from a single message or a console-style message list."""
        parts = as_parts(message)
        return cls(
            kind=kind,
            message=format_message(parts),
            rule_name=rule_name,
            parts=parts,
            node=node,
            tree=tree,
        )

    @classmethod
    def from_exception(cls, error: BaseException, rule_name: str | None = None) -> Diagnostic:
        """Build an exception-kind diagnostic for a crashed rule or a failed parse.

        A :class:`RuleExecutionError` is unwrapped so the message and ``error``
        show what the rule itself raised.
        """
        if isinstance(error, RuleExecutionError):
            error = error.original_error
        return cls(
            kind="exception",
            message=str(error) or type(error).__name__,
            rule_name=rule_name,
            parts=(error,),
            error=error,
        )

    def prefixed(self, rule_name: str) -> Diagnostic:
        """Return a copy attributed to ``rule_name`` with the message prefixed by it."""
        return replace(self, rule_name=rule_name, message=f"{rule_name}: {self.message}")

    @property
    def has_location(self) -> bool:
        """True if the diagnostic points at a node of a known tree."""
        return self.node is not None and self.tree is not None


@dataclass(frozen=True, slots=True)
class RuleContext:
    """Auxiliary information handed to every rule instance."""

    rule_name: str
    filepath: str | None = None
    source_name: str = ""
    index: int = 0


class RunReport:
    """Aggregated outcome of one lint invocation across all rule instances."""

    __slots__ = ("exceptions", "errors", "warnings", "logs", "source_name", "filepath")

    def __init__(self, source_name: str = "", filepath: str | None = None) -> None:
        """Initialize an empty report."""
        self.exceptions: list[Diagnostic] = []
        self.errors: list[Diagnostic] = []
        self.warnings: list[Diagnostic] = []
        self.logs: list[Diagnostic] = []
        self.source_name = source_name
        self.filepath = filepath

    def extend(self, other: RunReport) -> None:
        """Append every sequence of ``other`` after this report's items."""
        self.exceptions.extend(other.exceptions)
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        self.logs.extend(other.logs)

    @property
    def passed(self) -> bool:
        """Pass iff there are no exceptions and no errors."""
        return not self.exceptions and not self.errors

    @property
    def failures(self) -> list[Diagnostic]:
        """Exceptions followed by errors: the payload of a failed run."""
        return [*self.exceptions, *self.errors]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        """Every item in the report, most severe kinds first."""
        return [*self.exceptions, *self.errors, *self.warnings, *self.logs]

    @property
    def is_clean(self) -> bool:
        """True if nothing at all was reported."""
        return not self.diagnostics

    def __repr__(self) -> str:
        return (
            f"RunReport(source={self.source_name!r}, exceptions={len(self.exceptions)}, "
            f"errors={len(self.errors)}, warnings={len(self.warnings)}, logs={len(self.logs)})"
        )
