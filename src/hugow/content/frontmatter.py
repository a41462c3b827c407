"""
Draft flag access in front matter.

Reads and writes the single ``draft:`` field of a content file without
parsing the rest of the header. Only the draft line is ever touched; every
other byte of the file passes through unchanged.

The header is located with a small state machine over lines:

    BEFORE_HEADER --(first line is ---)--> IN_HEADER --(---)--> AFTER_HEADER
    BEFORE_HEADER --(anything else)------> NO_HEADER

Inside IN_HEADER the first ``draft:`` line is the field. In NO_HEADER the
whole file is searched instead, so headerless files still round-trip. A
``draft:`` line in the body of a file with a header is not the field.

A leading byte-order mark does not hide the opening delimiter. Bytes that
are not valid UTF-8 are carried through unchanged.
"""

from __future__ import annotations

import contextlib
import logging
import os
import re
import stat
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from hugow.core.errors import PathInvalid, WriteFailure

logger = logging.getLogger(__name__)

DELIMITER = "---"
BOM = "\ufeff"
# Only \n, \r\n and a lone \r end a line; form feeds or U+2028 in a title do not
LINE = re.compile(r"[^\r\n]*(?:\r\n|\r|\n)|[^\r\n]+")
DRAFT_LINE = re.compile(r"^(?P<indent>[ \t]*)draft:(?P<value>.*)$")
TRUE_VALUE = re.compile(r"^\s*true\s*(#.*)?$")
# Non-UTF-8 bytes decode to lone surrogates and encode back to the same bytes
TEXT_ERRORS = "surrogateescape"


class HeaderState(Enum):
    BEFORE_HEADER = "before"
    IN_HEADER = "in"
    AFTER_HEADER = "after"
    NO_HEADER = "none"


@dataclass(frozen=True)
class DraftLocation:
    """Where the draft field lives in a list of lines."""

    opening: int | None  # index of the opening delimiter
    closing: int | None  # index of the closing delimiter
    draft: int | None  # index of the draft: line
    value: bool  # parsed value; False when absent

    @property
    def has_header(self) -> bool:
        return self.opening is not None


def split_lines(text: str) -> list[str]:
    """Split ``text`` into lines that keep their own terminators."""
    return LINE.findall(text)


def _newline_of(line: str) -> str:
    return line[len(line.rstrip("\r\n")):]


def _content_of(index: int, line: str) -> str:
    """The line without its terminator (and without a BOM on line 0)."""
    content = line.rstrip("\r\n")
    if index == 0:
        content = content.removeprefix(BOM)
    return content


def _is_delimiter(index: int, line: str) -> bool:
    return _content_of(index, line).strip() == DELIMITER


def locate_draft(lines: list[str]) -> DraftLocation:
    """Find the header delimiters and the draft line.

    Args:
        lines: File content as returned by ``split_lines``

    Returns:
        DraftLocation describing the header and the draft line, if any.
    """
    state = HeaderState.BEFORE_HEADER
    opening = closing = draft = None

    for index, line in enumerate(lines):
        if state is HeaderState.BEFORE_HEADER:
            if _is_delimiter(index, line):
                opening = index
                state = HeaderState.IN_HEADER
                continue
            state = HeaderState.NO_HEADER

        if state is HeaderState.IN_HEADER:
            if _is_delimiter(index, line):
                closing = index
                state = HeaderState.AFTER_HEADER
                break
            if draft is None and DRAFT_LINE.match(_content_of(index, line)):
                draft = index
        elif state is HeaderState.NO_HEADER:
            if DRAFT_LINE.match(_content_of(index, line)):
                draft = index
                break

    value = False
    if draft is not None:
        match = DRAFT_LINE.match(_content_of(draft, lines[draft]))
        value = bool(match and TRUE_VALUE.match(match.group("value")))

    return DraftLocation(opening=opening, closing=closing, draft=draft, value=value)


def parse_draft_flag(text: str) -> bool:
    """Return the draft value held in ``text`` (False when absent)."""
    return locate_draft(split_lines(text)).value


def render_draft_flag(text: str, value: bool) -> str:
    """Return ``text`` with the draft field set to ``value``.

    An existing draft line is replaced in place, keeping its indentation and
    line ending. Otherwise a new line is inserted right after the opening
    delimiter, or as the first line of a file without a header. A leading
    BOM stays at the very start of the file.
    """
    lines = split_lines(text)
    location = locate_draft(lines)
    literal = "true" if value else "false"

    if location.draft is not None:
        index = location.draft
        old = lines[index]
        match = DRAFT_LINE.match(_content_of(index, old))
        assert match is not None
        bom = BOM if index == 0 and old.startswith(BOM) else ""
        lines[index] = f"{bom}{match.group('indent')}draft: {literal}{_newline_of(old)}"
        return "".join(lines)

    if location.has_header:
        assert location.opening is not None
        opening_line = lines[location.opening]
        newline = _newline_of(opening_line)
        if not newline:
            # Header is just "---" with no trailing newline
            newline = "\n"
            lines[location.opening] = opening_line + newline
        lines.insert(location.opening + 1, f"draft: {literal}{newline}")
        return "".join(lines)

    if not lines:
        return f"draft: {literal}\n"
    first = lines[0]
    newline = _newline_of(first) or "\n"
    if first.startswith(BOM):
        lines[0] = first[len(BOM):]
        return f"{BOM}draft: {literal}{newline}" + "".join(lines)
    return f"draft: {literal}{newline}" + "".join(lines)


def read_text(path: Path) -> str:
    """Read a content file, preserving its line endings and undecodable bytes.

    Raises:
        PathInvalid: If the file is missing or unreadable
    """
    try:
        with open(path, encoding="utf-8", errors=TEXT_ERRORS, newline="") as handle:
            return handle.read()
    except OSError as e:
        raise PathInvalid(path, f"Cannot read content file ({e.__class__.__name__})") from e


def read_draft_flag(path: Path) -> bool:
    """Return True iff the file's draft field is the literal ``true``.

    A file without a draft field is public.
    """
    return parse_draft_flag(read_text(Path(path)))


def atomic_write(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` via a sibling temp file.

    The original file is left untouched unless the whole new content has
    been written and flushed. The temp file is removed on any failure,
    including KeyboardInterrupt.

    Raises:
        WriteFailure: If the temp file cannot be written or moved into place
    """
    path = Path(path)
    try:
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=f".{path.name}.")
    except OSError as e:
        raise WriteFailure(path, e) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", errors=TEXT_ERRORS, newline="") as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        with contextlib.suppress(OSError):
            os.chmod(tmp_path, stat.S_IMODE(path.stat().st_mode))
        os.replace(tmp_path, path)
    except BaseException as e:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        if isinstance(e, (OSError, UnicodeError)):
            raise WriteFailure(path, e) from e
        raise

    logger.debug("Wrote %s", path)


def set_draft_flag(path: Path, value: bool) -> bool:
    """Set the draft field of a content file.

    Args:
        path: Content file to update
        value: New draft value

    Returns:
        True if the file changed, False if it already held ``value``.

    Raises:
        PathInvalid: If the file cannot be read
        WriteFailure: If the file cannot be rewritten (original left intact)
    """
    path = Path(path)
    original = read_text(path)
    if parse_draft_flag(original) == value:
        logger.debug("%s already has draft: %s", path, str(value).lower())
        return False

    atomic_write(path, render_draft_flag(original, value))
    return True
