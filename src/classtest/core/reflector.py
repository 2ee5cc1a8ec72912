"""Discovery of tagged methods on a test class."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from classtest.tags import TAGS_ATTRIBUTE, TagKind, TagValue, get_tags

logger = logging.getLogger(__name__)

TagIndex = dict[TagKind, list["MethodEntry"]]


@dataclass(frozen=True)
class MethodEntry:
    """A discovered method paired with the tag that selected it."""

    name: str
    function: Callable
    tag: TagValue

    @property
    def kind(self) -> TagKind:
        return self.tag.kind

    @property
    def declared_priority(self) -> Optional[int]:
        """Priority as written on the tag, None when not set."""
        return self.tag.priority

    def bind(self, instance: Any) -> Callable:
        """Get the method bound to a fixture instance."""
        return self.function.__get__(instance, type(instance))


def _member_tags(member: Any) -> list[TagValue]:
    """Collect tags from a member and, for static/class methods, its function.

    A tag may sit on either object depending on decorator order.
    """
    sources = [member]
    if isinstance(member, (staticmethod, classmethod)):
        sources.append(member.__func__)

    tags: list[TagValue] = []
    seen = set()
    for source in sources:
        raw = getattr(source, TAGS_ATTRIBUTE, None)
        if raw is None or id(raw) in seen:
            continue
        seen.add(id(raw))
        tags.extend(get_tags(source))
    return tags


def reflect(cls: type) -> TagIndex:
    """Build the tag index for a test class.

    Only members declared on ``cls`` itself are inspected, in class-body
    definition order. A member carrying several tags yields one entry per tag.

    Args:
        cls: The test class

    Returns:
        Mapping from tag kind to the entries found for it

    Raises:
        TypeError: If ``cls`` is not a class
    """
    if not isinstance(cls, type):
        raise TypeError(f"Expected a class, got {type(cls).__name__}")

    index: TagIndex = {}

    for name, member in vars(cls).items():
        tags = _member_tags(member)
        if not tags:
            continue

        for tag in tags:
            entry = MethodEntry(name=name, function=member, tag=tag)
            index.setdefault(tag.kind, []).append(entry)

    logger.debug(
        "Reflected %s: %s",
        cls.__qualname__,
        {kind.value: [e.name for e in entries] for kind, entries in index.items()},
    )
    return index
