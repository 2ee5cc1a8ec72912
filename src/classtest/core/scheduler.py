"""Ordering of tests by priority."""

import sys
from typing import Optional

from classtest.core.reflector import MethodEntry

PRIORITY_MIN = 1
PRIORITY_MAX = 10

# Sorts after every legal priority
UNPRIORITIZED = sys.maxsize


class TestScheduler:
    """Orders test entries by priority."""

    __test__ = False

    def __init__(
        self,
        priority_min: Optional[int] = None,
        priority_max: Optional[int] = None,
    ):
        """Initialize the scheduler.

        Args:
            priority_min: Lowest legal priority (default: 1)
            priority_max: Highest legal priority (default: 10)
        """
        self.priority_min = PRIORITY_MIN if priority_min is None else priority_min
        self.priority_max = PRIORITY_MAX if priority_max is None else priority_max

    def effective_priority(self, entry: MethodEntry) -> int:
        """Get the sort key of an entry.

        Priorities outside the legal range, or missing, map to UNPRIORITIZED.
        """
        priority = entry.declared_priority
        if priority is None or not self.priority_min <= priority <= self.priority_max:
            return UNPRIORITIZED
        return priority

    def is_prioritized(self, entry: MethodEntry) -> bool:
        return self.effective_priority(entry) != UNPRIORITIZED

    def schedule(self, entries: list[MethodEntry]) -> list[MethodEntry]:
        """Get the execution plan.

        The sort is stable, so tests sharing a priority, and all
        unprioritized tests, keep their discovery order.

        Args:
            entries: TEST entries in discovery order

        Returns:
            New list of entries in execution order
        """
        return sorted(entries, key=self.effective_priority)

    def get_groups(self, entries: list[MethodEntry]) -> dict[str, list[MethodEntry]]:
        """Split a plan into its prioritized and unprioritized blocks."""
        plan = self.schedule(entries)
        return {
            "prioritized": [e for e in plan if self.is_prioritized(e)],
            "unprioritized": [e for e in plan if not self.is_prioritized(e)],
        }


def schedule(entries: list[MethodEntry]) -> list[MethodEntry]:
    """Order entries using the default 1..10 priority range."""
    return TestScheduler().schedule(entries)
