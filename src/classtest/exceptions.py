"""Exception types raised by classtest."""

from typing import Optional


class ClassTestError(Exception):
    """Base class for all classtest errors."""

    pass


class StructuralError(ClassTestError):
    """Raised when a test class violates the tagging rules.

    Raised while a runner is being constructed, before any test runs.
    """

    def __init__(self, message: str, kind: Optional[str] = None, names: Optional[list[str]] = None):
        super().__init__(message)
        self.kind = kind
        self.names = names or []


class TargetLoadError(ClassTestError):
    """Raised when a ``module:Class`` target cannot be resolved."""

    pass
