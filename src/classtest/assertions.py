"""Assertion helpers.

Every helper raises :class:`AssertionFailure` when its check does not hold.
The runner recognizes that type and reports only the short diagnostic
instead of a traceback.

    from classtest.assertions import assert_equals

    assert_equals(10, calculator.sum(3, 7))
"""

from collections.abc import Set as AbstractSet
from numbers import Number
from typing import Any

from classtest.exceptions import ClassTestError
from classtest.output import ANSI_ERROR, ANSI_GOOD, paint


class AssertionFailure(ClassTestError, AssertionError):
    """The failure signal raised by assertion helpers.

    The diagnostic is kept uncolored; :meth:`render` decorates the
    ``expected``/``got`` labels for terminals.
    """

    def __init__(self, summary: str, expected: str, got: str):
        self.summary = summary
        self.expected = expected
        self.got = got
        super().__init__(self.render(color=False))

    def render(self, color: bool = False) -> str:
        """Format the diagnostic, optionally with ANSI colored labels."""
        return (
            f"{self.summary}\n"
            f"    {paint('expected', ANSI_GOOD, color)}={self.expected}\n"
            f"         {paint('got', ANSI_ERROR, color)}={self.got}"
        )


def _type_name(value: Any) -> str:
    return type(value).__name__


def _values_equal(expected: Any, got: Any) -> bool:
    """Compare two values, through ordering when they support it."""
    if isinstance(expected, Number) and isinstance(got, Number):
        if isinstance(expected, bool) != isinstance(got, bool):
            return False
        return got == expected
    if isinstance(expected, AbstractSet) or isinstance(got, AbstractSet):
        # subset ordering is partial
        return got == expected
    try:
        return not (got < expected) and not (got > expected)
    except TypeError:
        # unordered values (dicts, None, mixed types)
        return got == expected


def assert_equals(expected: Any, got: Any) -> None:
    """Check that ``got`` equals ``expected``.

    Numbers compare with ``==``, except that a bool never equals a
    non-bool number (``assert_equals(1, True)`` fails). Other values compare through their
    ordering, so two values are equal when neither sorts before the other.
    Values without an ordering fall back to ``==``.

    Raises:
        AssertionFailure: If the values differ
    """
    if not _values_equal(expected, got):
        raise AssertionFailure(
            f"Values({_type_name(got)}) are not equal!",
            expected=repr(expected),
            got=repr(got),
        )


def assert_null(got: Any) -> None:
    """Check that ``got`` is None."""
    if got is not None:
        raise AssertionFailure(
            f"Value({_type_name(got)}) is not None!",
            expected="None",
            got=repr(got),
        )


def assert_true(got: Any) -> None:
    """Check that ``got`` is truthy."""
    if not got:
        raise AssertionFailure(
            f"Value({_type_name(got)}) is not true!",
            expected="True",
            got=repr(got),
        )


def assert_false(got: Any) -> None:
    """Check that ``got`` is falsy."""
    if got:
        raise AssertionFailure(
            f"Value({_type_name(got)}) is not false!",
            expected="False",
            got=repr(got),
        )


# Aliases matching the camelCase names used by xUnit-style suites
assertEquals = assert_equals
assertNull = assert_null
assertTrue = assert_true
assertFalse = assert_false
