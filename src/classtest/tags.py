"""Method tags recognized by the runner.

Tags are attached to plain functions inside a test class body:

    class CalculatorTests:
        @before_each
        def init(self):
            self.calculator = Calculator()

        @test(priority=1)
        def test_sum(self):
            assert_equals(10, self.calculator.sum(3, 7))

        @after_each
        def close(self):
            self.calculator = None
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

TAGS_ATTRIBUTE = "__classtest_tags__"


class TagKind(str, Enum):
    """Role of a tagged method."""

    BEFORE_EACH = "before_each"
    TEST = "test"
    AFTER_EACH = "after_each"


@dataclass(frozen=True)
class TagValue:
    """A tag attached to a method.

    ``priority`` is only carried by TEST tags; None means unprioritized.
    """

    kind: TagKind
    priority: Optional[int] = None


def _attach(func: Callable, tag: TagValue) -> Callable:
    tags = getattr(func, TAGS_ATTRIBUTE, None)
    if tags is None:
        tags = []
        setattr(func, TAGS_ATTRIBUTE, tags)
    tags.append(tag)
    return func


def get_tags(obj: Any) -> list[TagValue]:
    """Return the recognized tags attached to an object."""
    tags = getattr(obj, TAGS_ATTRIBUTE, None)
    if not isinstance(tags, list):
        return []
    return [t for t in tags if isinstance(t, TagValue)]


def before_each(func: Optional[Callable] = None):
    """Mark a method to run before each test, on the test's fixture."""
    if func is None:
        return before_each
    return _attach(func, TagValue(TagKind.BEFORE_EACH))


def after_each(func: Optional[Callable] = None):
    """Mark a method to run after each test, on the test's fixture."""
    if func is None:
        return after_each
    return _attach(func, TagValue(TagKind.AFTER_EACH))


def test(func: Optional[Callable] = None, *, priority: Optional[int] = None):
    """Mark a method as a test.

    Usable bare (``@test``) or with a priority (``@test(priority=2)``).
    Priorities from 1 to 10 run first, lowest value first; tests without a
    priority, or with one outside that range, run after them.
    """
    if priority is not None and (isinstance(priority, bool) or not isinstance(priority, int)):
        raise TypeError(f"Test priority must be an integer, got {type(priority).__name__}")

    def decorator(f: Callable) -> Callable:
        return _attach(f, TagValue(TagKind.TEST, priority))

    if func is None:
        return decorator
    return decorator(func)


# Keep pytest from collecting the decorator itself when imported into test modules
test.__test__ = False
