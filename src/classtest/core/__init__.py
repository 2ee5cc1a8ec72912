"""Core discovery, ordering and execution."""

from classtest.core.executor import TestExecutor
from classtest.core.reflector import MethodEntry, reflect
from classtest.core.runner import TestRunner, run_class
from classtest.core.scheduler import TestScheduler, schedule
from classtest.core.validator import validate

__all__ = [
    "MethodEntry",
    "TestExecutor",
    "TestRunner",
    "TestScheduler",
    "reflect",
    "run_class",
    "schedule",
    "validate",
]
