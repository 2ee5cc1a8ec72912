"""
classtest - a single-class unit-test runner.

This package provides:
- Tags marking test methods and per-test setup/teardown hooks
- Priority-ordered execution on a fresh fixture per test
- Assertion helpers whose failures are reported without a traceback
"""

__version__ = "0.1.0"
__author__ = "classtest Team"

from classtest.assertions import (
    AssertionFailure,
    assert_equals,
    assert_false,
    assert_null,
    assert_true,
    assertEquals,
    assertFalse,
    assertNull,
    assertTrue,
)
from classtest.core.runner import TestRunner, run_class
from classtest.exceptions import ClassTestError, StructuralError
from classtest.tags import after_each, before_each, test

__all__ = [
    "AssertionFailure",
    "ClassTestError",
    "StructuralError",
    "TestRunner",
    "after_each",
    "assertEquals",
    "assertFalse",
    "assertNull",
    "assertTrue",
    "assert_equals",
    "assert_false",
    "assert_null",
    "assert_true",
    "before_each",
    "run_class",
    "test",
]
