"""
Content management for a Hugo site.

Provides tools for:
- Scanning posts and pages with their draft status
- Numbering scan results with ephemeral IDs
- Reading and setting the draft flag safely
"""

from hugow.content.frontmatter import read_draft_flag, set_draft_flag
from hugow.content.ids import IdIndex, assign_ids
from hugow.content.scanner import ContentItem, ContentScanner, ContentType, Status

__all__ = [
    "ContentScanner",
    "ContentItem",
    "ContentType",
    "Status",
    "IdIndex",
    "assign_ids",
    "read_draft_flag",
    "set_draft_flag",
]
