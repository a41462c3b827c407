"""
Error kinds raised by hugow handlers.

Every handler error is terminal to the current command; the CLI layer prints
the message and exits with status 1.
"""

from __future__ import annotations

from pathlib import Path


class HugowError(Exception):
    """Base class for all handled hugow errors."""
    pass


class InvalidArgument(HugowError):
    """Bad command, option value, or ID syntax."""
    pass


class NotConfigured(HugowError):
    """A required path, host, or collaborator is missing."""
    pass


class PathInvalid(HugowError):
    """The project or content root is missing or malformed."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        super().__init__(f"{reason}: {path}")


class AlreadyExists(HugowError):
    """New content would overwrite an existing file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Content already exists: {path}")


class NotFound(HugowError):
    """An ephemeral ID did not resolve to a content item."""

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"No content with ID {item_id}")


class CollaboratorFailure(HugowError):
    """An external process (hugo, rsync, editor, fzf) failed."""

    def __init__(self, collaborator: str, detail: str):
        self.collaborator = collaborator
        self.detail = detail
        super().__init__(f"{collaborator} failed: {detail}")


class WriteFailure(HugowError):
    """A content or config file could not be written; the old file is intact."""

    def __init__(self, path: Path | str, cause: BaseException | str):
        self.path = Path(path)
        super().__init__(f"Could not write {path}: {cause}")
