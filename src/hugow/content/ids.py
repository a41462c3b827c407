"""
Ephemeral content IDs.

IDs are 1-based positions in one scan result. They exist only for the
duration of a single command: they are never persisted, and they change
whenever the filters or the content tree change. Commands that resolve an
ID (``status``, ``edit``) always rebuild the index from an unfiltered scan,
so an ID remembered from a filtered ``list`` can point at a different file.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator

from hugow.content.scanner import ContentItem, ContentScanner
from hugow.core.errors import InvalidArgument, NotFound

_DIGITS = re.compile(r"[0-9]+")


def assign_ids(items: Iterable[ContentItem]) -> list[tuple[int, ContentItem]]:
    """Number items 1..N in the order given."""
    return list(enumerate(items, start=1))


def parse_id(text: str) -> int:
    """Parse a user-supplied ID.

    Raises:
        InvalidArgument: If ``text`` is not a positive integer
    """
    stripped = text.strip()
    if not _DIGITS.fullmatch(stripped) or int(stripped) < 1:
        raise InvalidArgument(f"Invalid ID: {text!r} (expected a positive integer)")
    return int(stripped)


def looks_like_id(text: str) -> bool:
    return bool(_DIGITS.fullmatch(text.strip()))


class IdIndex:
    """Ordered arena of scan results addressed by ephemeral ID."""

    def __init__(self, items: Iterable[ContentItem]):
        self._entries = assign_ids(items)

    @classmethod
    def for_resolution(cls, scanner: ContentScanner) -> IdIndex:
        """Build the index used to resolve IDs: always an unfiltered scan."""
        return cls(scanner.scan())

    @property
    def entries(self) -> list[tuple[int, ContentItem]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[tuple[int, ContentItem]]:
        return iter(self._entries)

    def resolve(self, item_id: int) -> ContentItem:
        """Return the item numbered ``item_id``.

        Raises:
            NotFound: If no item has that ID in this index
        """
        for entry_id, item in self._entries:
            if entry_id == item_id:
                return item
        raise NotFound(item_id)
