"""End-to-end tests for TestRunner."""

import io
import sys

import pytest

from classtest import StructuralError, TestRunner, assert_true, run_class
from classtest.config import ClassTestConfig, ExecutionConfig, OutputConfig
from classtest.models import TestStatus
from classtest.tags import TagKind, after_each, before_each, test
from sample_calculator import BrokenCalculatorTests, CalculatorTests


def run_to_string(cls, **kwargs) -> tuple[str, object]:
    sink = io.StringIO()
    report = TestRunner(cls, sink=sink, **kwargs).run()
    return sink.getvalue(), report


def reported_names(output: str) -> list[str]:
    return [line.split(" ... ")[0] for line in output.splitlines() if " ... " in line]


class TestRunnerScenarios:
    """The calculator scenarios."""

    def test_happy_path(self):
        """Test sum/diff/div all pass, diff last because it is unprioritized."""
        output, report = run_to_string(CalculatorTests)

        assert output == (
            "CalculatorTests:\n"
            "test_sum ... ok\n"
            "test_div ... ok\n"
            "test_diff ... ok\n"
        )
        assert report.success
        assert report.total == 3

    def test_failing_multiplication_and_division_by_zero(self):
        """Test failures are reported and do not stop the run."""
        output, report = run_to_string(BrokenCalculatorTests)

        lines = output.splitlines()
        assert lines[0] == "BrokenCalculatorTests:"
        assert lines[1] == "test_sum ... ok"
        assert lines[2] == "test_mult ... Values(int) are not equal!"
        assert lines[3].strip() == "expected=10021"
        assert lines[4].strip() == "got=21"
        assert lines[5] == "test_div_by_zero ... Traceback (most recent call last):"
        assert "ZeroDivisionError: division by zero" in output
        assert lines[-1] == "test_diff ... ok"

        statuses = {r.name: r.status for r in report.results}
        assert statuses == {
            "test_sum": TestStatus.PASSED,
            "test_mult": TestStatus.FAILED,
            "test_div_by_zero": TestStatus.ERROR,
            "test_diff": TestStatus.PASSED,
        }
        assert not report.success

    def test_priority_interleaving(self):
        """Test A=1, B unset, C=2, D=3 runs as A, C, D, B."""

        class Interleaved:
            @test(priority=1)
            def A(self):
                pass

            @test
            def B(self):
                pass

            @test(priority=2)
            def C(self):
                pass

            @test(priority=3)
            def D(self):
                pass

        output, _ = run_to_string(Interleaved)
        assert reported_names(output) == ["A", "C", "D", "B"]

    def test_missing_hooks(self):
        """Test a class with only a test runs and passes."""

        class Plain:
            @test
            def check(self):
                assert_true(True)

        output, report = run_to_string(Plain)

        assert output.endswith("check ... ok\n")
        assert report.passed == 1

    def test_structural_rejection(self):
        """Test two before_each hooks fail construction before any test runs."""
        ran = []

        class TwoSetups:
            @before_each
            def a(self):
                ran.append("a")

            @before_each
            def b(self):
                ran.append("b")

            @test
            def check(self):
                ran.append("check")

        sink = io.StringIO()
        with pytest.raises(StructuralError, match="before_each"):
            TestRunner(TwoSetups, sink=sink)

        assert ran == []
        assert sink.getvalue() == ""


class TestRunnerProperties:
    """Runner-level guarantees."""

    def test_isolation_and_hook_coverage(self):
        """Test each test gets its own instance, seen by its hooks."""
        seen = []

        class Tracked:
            @before_each
            def setup(self):
                seen.append(("before", id(self)))

            @test(priority=1)
            def first(self):
                seen.append(("test", id(self)))

            @test(priority=2)
            def second(self):
                seen.append(("test", id(self)))

            @test
            def third(self):
                seen.append(("test", id(self)))

            @after_each
            def teardown(self):
                seen.append(("after", id(self)))

        instances = []
        original_init = Tracked.__init__

        def tracking_init(self):
            instances.append(self)
            original_init(self)

        Tracked.__init__ = tracking_init
        run_to_string(Tracked)

        assert len(instances) == 3
        assert len({id(i) for i in instances}) == 3
        for position, instance in enumerate(instances):
            triple = seen[position * 3:position * 3 + 3]
            assert triple == [
                ("before", id(instance)),
                ("test", id(instance)),
                ("after", id(instance)),
            ]

    def test_failure_containment(self):
        """Test that every planned test runs even when earlier ones fail."""

        class Faulty:
            @test(priority=1)
            def explode(self):
                raise ValueError("nope")

            @test(priority=2)
            def fail(self):
                assert_true(False)

            @test(priority=3)
            def fine(self):
                pass

        output, report = run_to_string(Faulty)

        assert reported_names(output)[-1] == "fine"
        assert [r.name for r in report.results] == ["explode", "fail", "fine"]

    def test_system_exit_does_not_stop_run(self):
        """Test that a test calling sys.exit() is followed by the next test."""

        class Exits:
            @test(priority=1)
            def quits(self):
                sys.exit(3)

            @test(priority=2)
            def later(self):
                pass

        output, report = run_to_string(Exits)

        assert output.startswith("Exits:\nquits ... Traceback")
        assert output.endswith("later ... ok\n")
        assert [r.status for r in report.results] == [TestStatus.ERROR, TestStatus.PASSED]

    def test_header_is_flushed(self):
        """Test the header reaches a buffered sink before the first test line."""

        class FlushLog(io.StringIO):
            def __init__(self):
                super().__init__()
                self.flushed = []

            def flush(self):
                self.flushed.append(self.getvalue())
                super().flush()

        sink = FlushLog()
        TestRunner(CalculatorTests, sink=sink).run()

        assert sink.flushed[0] == "CalculatorTests:\n"

    def test_run_is_repeatable(self):
        """Test that run() replays the same plan."""
        sink = io.StringIO()
        runner = TestRunner(CalculatorTests, sink=sink)

        first = runner.run()
        second = runner.run()

        assert [r.name for r in first.results] == [r.name for r in second.results]
        assert sink.getvalue().count("CalculatorTests:\n") == 2

    def test_index_is_read_only(self):
        """Test that the tag index cannot be modified after construction."""
        runner = TestRunner(CalculatorTests, sink=io.StringIO())

        with pytest.raises(TypeError):
            runner.index[TagKind.TEST] = ()

    def test_plan_property(self):
        """Test the exposed execution plan."""
        runner = TestRunner(CalculatorTests, sink=io.StringIO())

        assert [e.name for e in runner.plan] == ["test_sum", "test_div", "test_diff"]
        assert runner.before.name == "init"
        assert runner.after.name == "close"

    def test_defaults_to_stdout(self, capsys):
        """Test that run lines go to stdout without an explicit sink."""
        run_class(CalculatorTests)

        captured = capsys.readouterr()
        assert captured.out.startswith("CalculatorTests:\n")
        assert "test_sum ... ok" in captured.out

    def test_priority_recorded_only_when_in_range(self):
        """Test report priorities for in-range and out-of-range tests."""

        class Ranged:
            @test(priority=2)
            def inside(self):
                pass

            @test(priority=42)
            def outside(self):
                pass

        _, report = run_to_string(Ranged)
        priorities = {r.name: r.priority for r in report.results}
        assert priorities == {"inside": 2, "outside": None}


class TestRunnerConfiguration:
    """Configuration effects on a run."""

    def test_color_always(self):
        """Test that forced colors decorate failure diagnostics."""
        config = ClassTestConfig(output=OutputConfig(color="always"))
        output, _ = run_to_string(BrokenCalculatorTests, config=config)

        assert "\x1b[32mexpected\x1b[0m=10021" in output

    def test_color_auto_on_non_terminal(self):
        """Test that auto mode leaves StringIO sinks uncolored."""
        output, _ = run_to_string(BrokenCalculatorTests)
        assert "\x1b[" not in output

    def test_color_override(self):
        """Test the explicit color argument wins over config."""
        config = ClassTestConfig(output=OutputConfig(color="always"))
        output, _ = run_to_string(BrokenCalculatorTests, config=config, color=False)
        assert "\x1b[" not in output

    def test_custom_priority_range(self):
        """Test that a narrower range moves tests to the unprioritized block."""
        config = ClassTestConfig(execution=ExecutionConfig(priority_min=1, priority_max=2))
        output, _ = run_to_string(CalculatorTests, config=config)

        # test_div (priority 3) joins test_diff in the tail, in declaration order
        assert reported_names(output) == ["test_sum", "test_diff", "test_div"]
