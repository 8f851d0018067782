"""SVGLint - the run orchestrator.

One call lints one input: resolve it to text, parse it, launch every
configured rule instance concurrently, wait for all of them, and merge
their diagnostics in configuration order.

Examples
--------
Example usage::

    linter = SVGLint({"rules": {"elm": {"g": 0}}})
    try:
        await linter.lint("icon.svg")
    except LintFailed as failure:
        for diagnostic in failure.results:
            print(diagnostic.message)
"""

from __future__ import annotations

import asyncio
import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Literal

from svglint.kernel.config.models import SVGLintConfig
from svglint.kernel.domain.document import DocumentTree, parse_document
from svglint.kernel.exceptions import LintFailed, ParseError, RuleResolutionError
from svglint.kernel.linting.events import (
    EventTypesInput,
    LintCompleted,
    LintStarted,
    ObserverFunc,
    ObserverRegistry,
)
from svglint.kernel.linting.executor import RuleExecutor
from svglint.kernel.linting.models import Diagnostic, RuleContext, RunReport
from svglint.kernel.linting.registry import RuleFn, RuleRegistry, get_default_registry
from svglint.kernel.linting.reporter import Reporter
from svglint.kernel.linting.rule_config import RuleInstance, normalize_rules
from svglint.kernel.logging import get_logger
from svglint.kernel.utils.timer import Timer

logger = get_logger(__name__)

LintSource = str | os.PathLike[str]
LintCallback = Callable[[Literal[True] | list[Diagnostic]], Any]

_MAX_DISPLAY_NAME = 27


def display_name(source: LintSource) -> str:
    """Shorten an input for messages: ``first 13 chars...last 14 chars``."""
    name = os.fspath(source)
    if len(name) > _MAX_DISPLAY_NAME:
        return f"{name[:13]}...{name[-14:]}"
    return name


def _read_source(source: LintSource) -> tuple[str, str | None]:
    """Return (text, filepath); fall back to treating ``source`` as document text."""
    try:
        path = Path(source)
        if path.is_file():
            return path.read_text(encoding="utf-8"), str(path)
    except (OSError, ValueError, UnicodeDecodeError) as e:
        logger.debug("Not reading {source!r} as a file: {error}", source=display_name(source), error=e)
    return os.fspath(source), None


def _coerce_config(config: SVGLintConfig | Mapping[str, Any] | None) -> SVGLintConfig:
    if config is None:
        return SVGLintConfig()
    if isinstance(config, SVGLintConfig):
        return config
    return SVGLintConfig(rules=dict(config.get("rules") or {}))


class SVGLint:
    """Lints SVG documents against a rule configuration.

    Each run is independent: rule instances, reporters and the report are
    created fresh per call and nothing is kept afterwards.
    """

    def __init__(
        self,
        config: SVGLintConfig | Mapping[str, Any] | None = None,
        *,
        registry: RuleRegistry | None = None,
        observers: ObserverRegistry | None = None,
    ) -> None:
        """Create a linter.

        Parameters
        ----------
        config : SVGLintConfig | Mapping | None
            Either a loaded config or a mapping with a ``rules`` key.
        registry : RuleRegistry | None
            Rule registry to resolve names with; defaults to the process-wide one.
        observers : ObserverRegistry | None
            Observers that receive run, rule and reporter events of every run.
        """
        self.config = _coerce_config(config)
        self._registry = registry
        self.observers = observers if observers is not None else ObserverRegistry()

    @property
    def registry(self) -> RuleRegistry:
        """The registry rule names are resolved against."""
        if self._registry is None:
            self._registry = get_default_registry()
        return self._registry

    def register_observer(
        self, handler: ObserverFunc, *, event_types: EventTypesInput = None
    ) -> str:
        """Subscribe ``handler`` to the events of every subsequent run."""
        return self.observers.register(handler, event_types=event_types)

    async def lint(
        self,
        source: LintSource,
        callback: LintCallback | None = None,
        log: Any = None,
    ) -> Literal[True]:
        """Lint ``source`` (a file path or literal SVG text).

        Parameters
        ----------
        source : str | PathLike
            Path to a readable file, otherwise used as the document text itself.
        callback : callable | None
            Called exactly once with ``True`` or with the list of failures.
        log : logger-like | None
            Receives operational notices such as unknown rules through its
            ``.warning(...)`` and ``.debug(...)`` methods (a loguru or stdlib
            logger both work). Defaults to the svglint logger.

        Returns
        -------
        Literal[True]
            When the run passes.

        Raises
        ------
        LintFailed
            When the run fails; ``results`` holds exceptions then errors.
        """
        report = await self.run(source, log=log)
        if report.passed:
            if callback is not None:
                callback(True)
            return True

        failures = report.failures
        if callback is not None:
            callback(failures)
        raise LintFailed(failures)

    async def run(
        self, source: LintSource, log: Any = None, *, source_name: str | None = None
    ) -> RunReport:
        """Lint ``source`` and return the full report, including warnings and logs.

        Never raises for malformed documents or failing rules; those end up
        in the report. ``source_name`` overrides the name shown in messages,
        e.g. ``"<stdin>"``.
        """
        log = log if log is not None else logger
        timer = Timer()
        name = source_name or display_name(source)

        text, filepath = await asyncio.to_thread(_read_source, source)
        report = RunReport(source_name=name, filepath=filepath)

        try:
            tree = parse_document(text, source_name=name, filepath=filepath)
        except ParseError as e:
            wrapped = ParseError(f"Error in {name}: SVG parsing error: {e}", source_name=name)
            wrapped.__cause__ = e
            log.debug(f"Parsing {name} failed: {e}")
            report.exceptions.append(Diagnostic.from_exception(wrapped))
            self.observers.notify(
                LintCompleted(source_name=name, passed=False, duration_ms=timer.duration_ms)
            )
            return report

        bound = self._resolve_rules(normalize_rules(self.config.rules), log)
        self.observers.notify(LintStarted(source_name=name, rule_count=len(bound)))

        reporters = await self._execute_all(bound, tree, filepath, name)

        for instance, reporter in zip((inst for inst, _ in bound), reporters, strict=True):
            report.extend(self._collect(instance.name, reporter))

        self.observers.notify(
            LintCompleted(source_name=name, passed=report.passed, duration_ms=timer.duration_ms)
        )
        return report

    def _resolve_rules(
        self, instances: list[RuleInstance], log: Any
    ) -> list[tuple[RuleInstance, RuleFn]]:
        """Bind each instance to its callable, skipping the ones that cannot be resolved."""
        bound: list[tuple[RuleInstance, RuleFn]] = []
        for instance in instances:
            try:
                rule = self.registry.resolve(instance.name, instance.config)
            except RuleResolutionError as e:
                log.warning(f"Unknown rule ({instance.name}). It will be ignored: {e.reason}")
                continue
            bound.append((instance, rule))
        return bound

    async def _execute_all(
        self,
        bound: list[tuple[RuleInstance, RuleFn]],
        tree: DocumentTree,
        filepath: str | None,
        source_name: str,
    ) -> list[Reporter]:
        """Launch every rule instance, then wait for all of them to settle."""
        executor = RuleExecutor(observers=self.observers)
        tasks = []
        for instance, rule in bound:
            reporter_observers = ObserverRegistry()
            self.observers.copy_to(reporter_observers)
            reporter = Reporter(instance.name, observers=reporter_observers)
            context = RuleContext(
                rule_name=instance.name,
                filepath=filepath,
                source_name=source_name,
                index=instance.index,
            )
            tasks.append(executor.execute(rule, reporter, tree, context))
        # gather keeps input order, so the report follows configuration order
        return list(await asyncio.gather(*tasks))

    @staticmethod
    def _collect(rule_name: str, reporter: Reporter) -> RunReport:
        part = RunReport()
        part.exceptions = [
            Diagnostic.from_exception(err, rule_name).prefixed(rule_name)
            for err in reporter.exceptions
        ]
        part.errors = [d.prefixed(rule_name) for d in reporter.errors]
        part.warnings = [d.prefixed(rule_name) for d in reporter.warns]
        part.logs = [d.prefixed(rule_name) for d in reporter.logs]
        return part


async def lint(
    source: LintSource,
    config: SVGLintConfig | Mapping[str, Any] | None = None,
    callback: LintCallback | None = None,
    log: Any = None,
) -> Literal[True]:
    """Lint ``source`` with ``config`` using the default rule registry.

    See :meth:`SVGLint.lint`.
    """
    return await SVGLint(config).lint(source, callback=callback, log=log)
