"""
Hugo content scanner.

Scans the posts and pages sections of a content root and classifies each
file by type and draft status.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from hugow.content.frontmatter import read_draft_flag
from hugow.core.errors import InvalidArgument

logger = logging.getLogger(__name__)

CONTENT_EXTENSIONS = frozenset({".md", ".markdown", ".html"})


class ContentType(Enum):
    """Kind of content, tied to the section directory it lives in."""

    POST = "post"
    PAGE = "page"

    @property
    def directory(self) -> str:
        return f"{self.value}s"


class Status(Enum):
    DRAFT = "draft"
    PUBLIC = "public"


@dataclass(frozen=True)
class ContentItem:
    """A single discovered content file."""

    relative_path: str  # POSIX path relative to the content root
    content_type: ContentType
    status: Status
    path: Path

    @property
    def is_draft(self) -> bool:
        return self.status is Status.DRAFT


_TYPE_WORDS = {
    "post": ContentType.POST,
    "posts": ContentType.POST,
    "page": ContentType.PAGE,
    "pages": ContentType.PAGE,
}

_STATUS_WORDS = {
    "draft": Status.DRAFT,
    "drafts": Status.DRAFT,
    "public": Status.PUBLIC,
    "published": Status.PUBLIC,
}


def parse_type(word: str) -> ContentType:
    """Parse ``post``/``page`` (singular or plural).

    Raises:
        InvalidArgument: If the word is not a content type
    """
    try:
        return _TYPE_WORDS[word.lower()]
    except KeyError:
        raise InvalidArgument(f"Unknown content type: {word!r} (expected post or page)")


def parse_status(word: str) -> Status:
    """Parse ``draft``/``public``.

    Raises:
        InvalidArgument: If the word is not a status
    """
    try:
        return _STATUS_WORDS[word.lower()]
    except KeyError:
        raise InvalidArgument(f"Unknown status: {word!r} (expected draft or public)")


def parse_filters(words: tuple[str, ...] | list[str]) -> tuple[ContentType | None, Status | None]:
    """Parse positional filter words in any order.

    ``any`` is accepted as an explicit wildcard. At most one type and one
    status may be given.

    Returns:
        (type_filter, status_filter) where None means Any.
    """
    type_filter: ContentType | None = None
    status_filter: Status | None = None
    for word in words:
        lowered = word.lower()
        if lowered == "any":
            continue
        if lowered in _TYPE_WORDS:
            if type_filter is not None:
                raise InvalidArgument(f"Content type given twice: {word!r}")
            type_filter = _TYPE_WORDS[lowered]
        elif lowered in _STATUS_WORDS:
            if status_filter is not None:
                raise InvalidArgument(f"Status given twice: {word!r}")
            status_filter = _STATUS_WORDS[lowered]
        else:
            raise InvalidArgument(
                f"Unknown filter: {word!r} (expected post, page, draft or public)"
            )
    return type_filter, status_filter


class ContentScanner:
    """Scans the section directories of a content root."""

    # Sections in scan order
    SECTIONS = (ContentType.POST, ContentType.PAGE)

    def __init__(self, content_root: Path):
        """Initialize scanner.

        Args:
            content_root: Validated <project>/content directory
        """
        self.content_root = Path(content_root)

    def scan(
        self,
        type_filter: ContentType | None = None,
        status_filter: Status | None = None,
    ) -> list[ContentItem]:
        """Scan content, keeping items that pass both filters.

        Sections are visited posts first, then pages; within a section items
        are sorted by relative path. A missing section contributes nothing.

        Args:
            type_filter: Only this content type (None for any)
            status_filter: Only this status (None for any)

        Returns:
            Ordered list of ContentItem objects
        """
        items: list[ContentItem] = []
        for content_type in self.SECTIONS:
            if type_filter is not None and content_type is not type_filter:
                continue
            section = sorted(self._scan_section(content_type), key=lambda it: it.relative_path)
            items.extend(
                item
                for item in section
                if status_filter is None or item.status is status_filter
            )
        return items

    def _scan_section(self, content_type: ContentType) -> Iterator[ContentItem]:
        """Yield items for the direct children of one section directory."""
        directory = self.content_root / content_type.directory
        if not directory.is_dir():
            logger.debug("Section %s missing, skipping", directory)
            return

        for path in directory.iterdir():
            if not self._is_content_file(path):
                continue
            status = Status.DRAFT if read_draft_flag(path) else Status.PUBLIC
            relative = path.relative_to(self.content_root).as_posix()
            logger.debug("Scanned %s (%s, %s)", relative, content_type.value, status.value)
            yield ContentItem(
                relative_path=relative,
                content_type=content_type,
                status=status,
                path=path,
            )

    @staticmethod
    def _is_content_file(path: Path) -> bool:
        # Skip symlinks to prevent traversal outside content directory
        if path.is_symlink() or not path.is_file():
            return False
        # Skip hidden files and temp files left by editors or writers
        if path.name.startswith("."):
            return False
        # Section list pages are not content items
        if path.name.startswith("_index."):
            return False
        return path.suffix.lower() in CONTENT_EXTENSIONS
