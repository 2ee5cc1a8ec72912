"""Test run orchestration for a single test class."""

import logging
import sys
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional, TextIO

from classtest.config import ClassTestConfig, get_default_config
from classtest.core.executor import TestExecutor
from classtest.core.reflector import MethodEntry, reflect
from classtest.core.scheduler import TestScheduler
from classtest.core.validator import validate
from classtest.models import RunReport
from classtest.output import resolve_color
from classtest.tags import TagKind

logger = logging.getLogger(__name__)


class TestRunner:
    """Runs the tagged tests of one class.

    Reflection and validation happen in the constructor, so a malformed
    class raises :class:`~classtest.exceptions.StructuralError` before any
    test runs.
    """

    __test__ = False

    def __init__(
        self,
        cls: type,
        sink: Optional[TextIO] = None,
        config: Optional[ClassTestConfig] = None,
        color: Optional[bool] = None,
    ):
        """Initialize the test runner.

        Args:
            cls: The test class; must be constructible without arguments
            sink: Text stream for run lines (default: sys.stdout at run time)
            config: Runner configuration (default: built-in defaults)
            color: Force colors on or off, overriding the configured mode
        """
        self.cls = cls
        self.sink = sink
        self.config = config or get_default_config()
        self.color = color

        index = reflect(cls)
        validate(index)
        self._index: Mapping[TagKind, tuple[MethodEntry, ...]] = MappingProxyType(
            {kind: tuple(entries) for kind, entries in index.items()}
        )

        self.scheduler = TestScheduler(
            priority_min=self.config.execution.priority_min,
            priority_max=self.config.execution.priority_max,
        )
        self._plan = tuple(self.scheduler.schedule(list(self._index[TagKind.TEST])))
        logger.debug("Plan for %s: %s", self.class_name, [e.name for e in self._plan])

    @property
    def class_name(self) -> str:
        return self.cls.__name__

    @property
    def index(self) -> Mapping[TagKind, tuple[MethodEntry, ...]]:
        """Read-only tag index built at construction."""
        return self._index

    @property
    def plan(self) -> list[MethodEntry]:
        """TEST entries in execution order."""
        return list(self._plan)

    @property
    def before(self) -> Optional[MethodEntry]:
        entries = self._index.get(TagKind.BEFORE_EACH)
        return entries[0] if entries else None

    @property
    def after(self) -> Optional[MethodEntry]:
        entries = self._index.get(TagKind.AFTER_EACH)
        return entries[0] if entries else None

    def run(self) -> RunReport:
        """Execute every planned test, writing one line per test.

        May be called again; each call replays the same plan on fresh
        fixtures.

        Returns:
            RunReport with one result per planned test
        """
        sink = self.sink if self.sink is not None else sys.stdout
        color = resolve_color(self.config.output.color, sink, self.color)

        executor = TestExecutor(
            self.cls,
            sink,
            before=self.before,
            after=self.after,
            color=color,
        )

        report = RunReport(class_name=self.class_name, started_at=datetime.now())

        executor.write(f"{self.class_name}:\n")
        for entry in self._plan:
            priority = entry.declared_priority if self.scheduler.is_prioritized(entry) else None
            report.results.append(executor.execute(entry, priority=priority))

        report.finished_at = datetime.now()
        logger.debug(
            "Finished %s: %d passed, %d failed, %d errors",
            self.class_name,
            report.passed,
            report.failed,
            report.errors,
        )
        return report


def run_class(
    cls: type,
    sink: Optional[TextIO] = None,
    config: Optional[ClassTestConfig] = None,
) -> RunReport:
    """Build a runner for ``cls`` and run it once."""
    return TestRunner(cls, sink=sink, config=config).run()
