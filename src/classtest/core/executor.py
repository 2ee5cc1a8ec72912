"""Per-test execution.

Each test runs on a fresh instance of the test class, wrapped in the
optional before/after hooks, and reports exactly one result line to the
sink. No per-test error escapes the executor.
"""

import logging
import time
import traceback
from typing import Any, Optional, TextIO

from classtest.assertions import AssertionFailure
from classtest.core.reflector import MethodEntry
from classtest.models import TestResult, TestStatus
from classtest.output import MSG_GOOD, SEPARATOR

logger = logging.getLogger(__name__)

# sys.exit() from code under test is a test error; Ctrl-C still stops the run
UNEXPECTED_ERRORS = (Exception, SystemExit)


def _format_error(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


class TestExecutor:
    """Executes planned tests of one class and writes their outcomes."""

    __test__ = False

    def __init__(
        self,
        cls: type,
        sink: TextIO,
        before: Optional[MethodEntry] = None,
        after: Optional[MethodEntry] = None,
        color: bool = False,
    ):
        """Initialize test executor.

        Args:
            cls: The test class, constructed once per test
            sink: Text stream receiving result lines
            before: The before_each hook, if any
            after: The after_each hook, if any
            color: Emit ANSI colors in assertion diagnostics
        """
        self.cls = cls
        self.sink = sink
        self.before = before
        self.after = after
        self.color = color

    def execute(self, test: MethodEntry, priority: Optional[int] = None) -> TestResult:
        """Run one test and report it.

        Args:
            test: The TEST entry to run
            priority: Effective priority, recorded on the result

        Returns:
            TestResult describing the outcome
        """
        self.write(f"{test.name}{SEPARATOR}")
        start_time = time.perf_counter()

        try:
            instance = self.cls()
        except UNEXPECTED_ERRORS as e:
            # Construction is not a test step, assertion failures included
            status, message = TestStatus.ERROR, _format_error(e)
        else:
            status, message = self._run_steps(instance, test)

        duration_ms = int((time.perf_counter() - start_time) * 1000)

        self.write(message if message.endswith("\n") else message + "\n")
        logger.debug("%s.%s -> %s", self.cls.__qualname__, test.name, status.value)

        return TestResult(
            name=test.name,
            status=status,
            priority=priority,
            message=message.rstrip("\n"),
            duration_ms=duration_ms,
        )

    def _run_steps(self, instance: Any, test: MethodEntry) -> tuple[TestStatus, str]:
        """Call before, test and after on a fixture and classify the outcome."""
        try:
            if self.before is not None:
                self.before.bind(instance)()

            test.bind(instance)()

            if self.after is not None:
                self.after.bind(instance)()
        except AssertionFailure as e:
            return TestStatus.FAILED, e.render(self.color)
        except UNEXPECTED_ERRORS as e:
            return TestStatus.ERROR, _format_error(e)

        return TestStatus.PASSED, MSG_GOOD

    def write(self, text: str) -> None:
        """Write to the sink and flush, so lines appear as tests progress."""
        self.sink.write(text)
        self.sink.flush()
