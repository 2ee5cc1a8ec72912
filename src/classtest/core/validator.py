"""Structural checks over a reflected tag index."""

from classtest.core.reflector import TagIndex
from classtest.exceptions import StructuralError
from classtest.tags import TagKind


def validate(index: TagIndex) -> None:
    """Check the tagging rules of a test class.

    Raises:
        StructuralError: If there is more than one before/after hook, or
            no test at all
    """
    for kind in (TagKind.BEFORE_EACH, TagKind.AFTER_EACH):
        entries = index.get(kind, [])
        if len(entries) > 1:
            raise StructuralError(
                f"@{kind.value} method must be alone",
                kind=kind.value,
                names=[e.name for e in entries],
            )

    if not index.get(TagKind.TEST):
        raise StructuralError("@test methods not found", kind=TagKind.TEST.value)
