"""Title to slug conversion."""

from __future__ import annotations

import re
import unicodedata

_SEPARATOR_RUN = re.compile(r"[^a-z0-9]+")


def slugify(title: str) -> str:
    """Convert a title to a filesystem- and URL-safe slug.

    Diacritics are stripped (``Café`` becomes ``cafe``), other non-ASCII
    characters are dropped, letters are lower-cased, and every run of
    non-alphanumerics collapses to a single hyphen. Leading and trailing
    hyphens are removed. Returns ``""`` when nothing usable remains.
    """
    decomposed = unicodedata.normalize("NFKD", title)
    ascii_text = decomposed.encode("ascii", "ignore").decode("ascii")
    slug = _SEPARATOR_RUN.sub("-", ascii_text.lower())
    return slug.strip("-")
