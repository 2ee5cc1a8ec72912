"""Data models for test outcomes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class TestStatus(str, Enum):
    """Outcome of a single test."""

    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass
class TestResult:
    """Represents the result of a single test."""

    __test__ = False

    name: str = ""
    status: TestStatus = TestStatus.PASSED
    priority: Optional[int] = None
    message: str = ""
    duration_ms: int = 0

    @property
    def passed(self) -> bool:
        return self.status == TestStatus.PASSED

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "status": self.status.value,
            "priority": self.priority,
            "message": self.message,
            "duration_ms": self.duration_ms,
        }


@dataclass
class RunReport:
    """Aggregate of one ``run()`` call."""

    class_name: str
    results: list[TestResult] = field(default_factory=list)
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.status == TestStatus.PASSED)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if r.status == TestStatus.FAILED)

    @property
    def errors(self) -> int:
        return sum(1 for r in self.results if r.status == TestStatus.ERROR)

    @property
    def success(self) -> bool:
        """Check if every test passed."""
        return self.passed == self.total

    @property
    def duration_ms(self) -> int:
        return sum(r.duration_ms for r in self.results)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "class_name": self.class_name,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "errors": self.errors,
            "duration_ms": self.duration_ms,
            "results": [r.to_dict() for r in self.results],
        }
