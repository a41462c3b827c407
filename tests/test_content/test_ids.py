"""Tests for ephemeral ID assignment and resolution."""

from pathlib import Path

import pytest

from hugow.content.ids import IdIndex, assign_ids, looks_like_id, parse_id
from hugow.content.scanner import ContentItem, ContentScanner, ContentType, Status
from hugow.core.errors import InvalidArgument, NotFound


def _item(rel, content_type=ContentType.POST, status=Status.PUBLIC):
    return ContentItem(rel, content_type, status, Path("/site/content") / rel)


def test_assign_ids_numbers_from_one():
    items = [_item("posts/a.md"), _item("posts/b.md"), _item("pages/c.md", ContentType.PAGE)]
    assert assign_ids(items) == [(1, items[0]), (2, items[1]), (3, items[2])]


def test_assign_ids_empty():
    assert assign_ids([]) == []


def test_index_resolve():
    items = [_item("posts/a.md"), _item("posts/b.md")]
    index = IdIndex(items)
    assert len(index) == 2
    assert index.resolve(2) is items[1]
    assert list(index) == index.entries


def test_index_resolve_unknown():
    index = IdIndex([_item("posts/a.md")])
    with pytest.raises(NotFound, match="99") as exc_info:
        index.resolve(99)
    assert exc_info.value.item_id == 99


def test_index_resolve_zero_not_found():
    with pytest.raises(NotFound):
        IdIndex([_item("posts/a.md")]).resolve(0)


def test_for_resolution_ignores_earlier_filters(site, write_content):
    """IDs from a filtered listing may point elsewhere in the unfiltered index."""
    write_content("posts/2024-01-01-a.md", draft=False)
    write_content("posts/2024-01-02-b.md", draft=True)
    scanner = ContentScanner(site / "content")

    filtered = assign_ids(scanner.scan(status_filter=Status.DRAFT))
    assert filtered[0][1].relative_path == "posts/2024-01-02-b.md"

    index = IdIndex.for_resolution(scanner)
    assert index.resolve(1).relative_path == "posts/2024-01-01-a.md"
    assert index.resolve(2).relative_path == "posts/2024-01-02-b.md"


def test_ids_stable_for_unchanged_tree(site, write_content):
    for name in ["posts/c.md", "posts/a.md", "pages/b.md"]:
        write_content(name)
    scanner = ContentScanner(site / "content")
    first = [(i, it.relative_path) for i, it in IdIndex.for_resolution(scanner)]
    second = [(i, it.relative_path) for i, it in IdIndex.for_resolution(scanner)]
    assert first == second == [(1, "posts/a.md"), (2, "posts/c.md"), (3, "pages/b.md")]


@pytest.mark.parametrize("text, expected", [("1", 1), (" 42 ", 42), ("007", 7)])
def test_parse_id(text, expected):
    assert parse_id(text) == expected


@pytest.mark.parametrize("text", ["0", "-1", "abc", "1.5", "", "²"])
def test_parse_id_invalid(text):
    with pytest.raises(InvalidArgument):
        parse_id(text)


def test_looks_like_id():
    assert looks_like_id("12")
    assert not looks_like_id("post")
    assert not looks_like_id("-3")
