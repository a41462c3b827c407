"""Tests for draft flag access in front matter."""

import os

import pytest

from hugow.content import frontmatter
from hugow.content.frontmatter import (
    atomic_write,
    split_lines,
    locate_draft,
    parse_draft_flag,
    read_draft_flag,
    render_draft_flag,
    set_draft_flag,
)
from hugow.core.errors import PathInvalid, WriteFailure

DRAFT_POST = '---\ntitle: "Hello"\ndraft: true\ntags: [a, b]\n---\n\nBody line.\n'
PUBLIC_POST = '---\ntitle: "Hello"\ndraft: false\n---\n\nBody line.\n'
NO_DRAFT_POST = '---\ntitle: "Hello"\ndate: 2024-01-01\n---\n\nBody line.\n'


def _write(tmp_path, text, name="post.md"):
    path = tmp_path / name
    path.write_bytes(text.encode("utf-8"))
    return path


def _without_draft_lines(text):
    return [line for line in text.splitlines() if not line.lstrip().startswith("draft:")]


# ---------------------------------------------------------------------------
# locate_draft (state machine)
# ---------------------------------------------------------------------------


def test_locate_in_header():
    location = locate_draft(DRAFT_POST.splitlines(keepends=True))
    assert location.opening == 0
    assert location.closing == 4
    assert location.draft == 2
    assert location.value is True


def test_locate_ignores_body_after_header():
    text = '---\ntitle: "x"\n---\ndraft: true\n'
    location = locate_draft(text.splitlines(keepends=True))
    assert location.has_header
    assert location.draft is None
    assert location.value is False


def test_locate_without_header_searches_file():
    text = "Some text\n  draft: true\n"
    location = locate_draft(text.splitlines(keepends=True))
    assert not location.has_header
    assert location.draft == 1
    assert location.value is True


def test_locate_unterminated_header():
    text = "---\ntitle: x\ndraft: true\n"
    location = locate_draft(text.splitlines(keepends=True))
    assert location.opening == 0
    assert location.closing is None
    assert location.draft == 2


def test_locate_empty_file():
    location = locate_draft([])
    assert location.opening is None
    assert location.draft is None
    assert location.value is False


# ---------------------------------------------------------------------------
# parse_draft_flag / read_draft_flag
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text, expected",
    [
        (DRAFT_POST, True),
        (PUBLIC_POST, False),
        (NO_DRAFT_POST, False),
        ("---\n   draft:   true   \n---\n", True),
        ("---\ndraft: true # still writing\n---\n", True),
        ("---\ndraft:true\n---\n", True),
        ("---\ndraft: truest\n---\n", False),
        ("---\ndraft: \"true\"\n---\n", False),
        ("---\ndrafted: true\n---\n", False),
        ("---\r\ndraft: true\r\n---\r\n", True),
        ("", False),
    ],
)
def test_parse_draft_flag(text, expected):
    assert parse_draft_flag(text) is expected


def test_read_draft_flag(tmp_path):
    assert read_draft_flag(_write(tmp_path, DRAFT_POST)) is True
    assert read_draft_flag(_write(tmp_path, NO_DRAFT_POST, "b.md")) is False


def test_read_missing_file(tmp_path):
    with pytest.raises(PathInvalid, match="missing.md"):
        read_draft_flag(tmp_path / "missing.md")


# ---------------------------------------------------------------------------
# render_draft_flag
# ---------------------------------------------------------------------------


def test_render_replaces_existing_line():
    result = render_draft_flag(DRAFT_POST, False)
    assert result == DRAFT_POST.replace("draft: true", "draft: false")


def test_render_replaces_non_boolean_value():
    text = "---\ndraft: maybe\ntitle: x\n---\n"
    assert render_draft_flag(text, True) == "---\ndraft: true\ntitle: x\n---\n"


def test_render_keeps_indentation():
    text = "---\n  draft: false\n---\n"
    assert render_draft_flag(text, True) == "---\n  draft: true\n---\n"


def test_render_inserts_after_opening_delimiter():
    result = render_draft_flag(NO_DRAFT_POST, True)
    assert result == '---\ndraft: true\ntitle: "Hello"\ndate: 2024-01-01\n---\n\nBody line.\n'


def test_render_inserts_first_line_without_header():
    assert render_draft_flag("Just text.\n", True) == "draft: true\nJust text.\n"


def test_render_empty_file():
    assert render_draft_flag("", True) == "draft: true\n"


def test_render_preserves_crlf():
    text = "---\r\ntitle: x\r\ndraft: false\r\n---\r\nBody\r\n"
    assert render_draft_flag(text, True) == "---\r\ntitle: x\r\ndraft: true\r\n---\r\nBody\r\n"


def test_render_inserts_with_crlf():
    text = "---\r\ntitle: x\r\n---\r\n"
    assert render_draft_flag(text, False) == "---\r\ndraft: false\r\ntitle: x\r\n---\r\n"


def test_render_body_draft_line_untouched():
    text = '---\ntitle: "x"\n---\ndraft: true is how you hide posts\n'
    result = render_draft_flag(text, True)
    assert result == '---\ndraft: true\ntitle: "x"\n---\ndraft: true is how you hide posts\n'


@pytest.mark.parametrize("text", [DRAFT_POST, PUBLIC_POST, NO_DRAFT_POST, "plain\n", ""])
@pytest.mark.parametrize("value", [True, False])
def test_render_preserves_other_lines(text, value):
    """Removing draft lines from input and output leaves the same lines in order."""
    result = render_draft_flag(text, value)
    assert _without_draft_lines(result) == _without_draft_lines(text)
    assert parse_draft_flag(result) is value


def test_render_does_not_duplicate_key():
    result = render_draft_flag(render_draft_flag(NO_DRAFT_POST, True), False)
    assert result.count("draft:") == 1


# ---------------------------------------------------------------------------
# set_draft_flag
# ---------------------------------------------------------------------------


def test_set_flips_value(tmp_path):
    path = _write(tmp_path, DRAFT_POST)
    assert set_draft_flag(path, False) is True
    assert read_draft_flag(path) is False
    assert path.read_text() == '---\ntitle: "Hello"\ndraft: false\ntags: [a, b]\n---\n\nBody line.\n'


def test_set_is_noop_when_already_set(tmp_path):
    path = _write(tmp_path, DRAFT_POST)
    os.utime(path, (1_000_000, 1_000_000))
    assert set_draft_flag(path, True) is False
    assert path.read_bytes() == DRAFT_POST.encode()
    assert path.stat().st_mtime == 1_000_000


def test_set_false_on_missing_field_is_noop(tmp_path):
    path = _write(tmp_path, NO_DRAFT_POST)
    assert set_draft_flag(path, False) is False
    assert path.read_text() == NO_DRAFT_POST


@pytest.mark.parametrize("text", [DRAFT_POST, PUBLIC_POST, NO_DRAFT_POST, "no header\n"])
@pytest.mark.parametrize("value", [True, False])
def test_set_is_idempotent(tmp_path, text, value):
    path = _write(tmp_path, text)
    set_draft_flag(path, value)
    first = path.read_bytes()
    assert set_draft_flag(path, value) is False
    assert path.read_bytes() == first
    assert read_draft_flag(path) is value


def test_set_leaves_no_temp_files(tmp_path):
    path = _write(tmp_path, NO_DRAFT_POST)
    set_draft_flag(path, True)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["post.md"]


def test_set_keeps_permissions(tmp_path):
    path = _write(tmp_path, DRAFT_POST)
    path.chmod(0o640)
    set_draft_flag(path, False)
    assert path.stat().st_mode & 0o777 == 0o640


# ---------------------------------------------------------------------------
# atomic_write failure handling
# ---------------------------------------------------------------------------


def test_failed_replace_keeps_original(tmp_path, monkeypatch):
    path = _write(tmp_path, DRAFT_POST)

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr(frontmatter.os, "replace", broken_replace)
    with pytest.raises(WriteFailure, match="post.md"):
        set_draft_flag(path, False)

    assert path.read_bytes() == DRAFT_POST.encode()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["post.md"]


def test_interrupt_cleans_temp_file(tmp_path, monkeypatch):
    path = _write(tmp_path, DRAFT_POST)

    def interrupted(src, dst):
        raise KeyboardInterrupt

    monkeypatch.setattr(frontmatter.os, "replace", interrupted)
    with pytest.raises(KeyboardInterrupt):
        atomic_write(path, "replacement")

    assert path.read_bytes() == DRAFT_POST.encode()
    assert sorted(p.name for p in tmp_path.iterdir()) == ["post.md"]


def test_unwritable_directory(tmp_path, monkeypatch):
    path = _write(tmp_path, DRAFT_POST)

    def no_temp(*args, **kwargs):
        raise PermissionError("read-only")

    monkeypatch.setattr(frontmatter.tempfile, "mkstemp", no_temp)
    with pytest.raises(WriteFailure) as exc_info:
        set_draft_flag(path, False)
    assert exc_info.value.path == path
    assert path.read_bytes() == DRAFT_POST.encode()


# ---------------------------------------------------------------------------
# Unusual line endings, BOM and encodings
# ---------------------------------------------------------------------------


def test_split_lines_only_on_line_terminators():
    text = "---\ntitle: a\x0cb c\r\ndraft: true\r---\rbody"
    assert split_lines(text) == [
        "---\n",
        "title: a\x0cb c\r\n",
        "draft: true\r",
        "---\r",
        "body",
    ]
    assert "".join(split_lines(text)) == text


def test_render_preserves_cr_endings():
    text = "---\rtitle: x\rdraft: true\r---\rbody\r"
    assert render_draft_flag(text, False) == "---\rtitle: x\rdraft: false\r---\rbody\r"
    assert parse_draft_flag(text) is True


def test_form_feed_in_title_does_not_shift_lines():
    text = "---\ntitle: a\x0cb\ndraft: false\n---\nbody\n"
    assert render_draft_flag(text, True) == "---\ntitle: a\x0cb\ndraft: true\n---\nbody\n"


def test_bom_before_opening_delimiter():
    text = "\ufeff---\ntitle: x\n---\nbody\n"
    location = locate_draft(split_lines(text))
    assert location.opening == 0
    assert location.closing == 2
    assert render_draft_flag(text, True) == "\ufeff---\ndraft: true\ntitle: x\n---\nbody\n"


def test_bom_without_header_stays_first():
    text = "\ufeffplain\n"
    assert render_draft_flag(text, True) == "\ufeffdraft: true\nplain\n"
    assert parse_draft_flag(render_draft_flag(text, True)) is True


def test_set_keeps_non_utf8_bytes(tmp_path):
    path = tmp_path / "legacy.md"
    path.write_bytes(b"---\ntitle: caf\xe9\ndraft: true\n---\n\xff body\n")
    assert read_draft_flag(path) is True

    assert set_draft_flag(path, False) is True
    assert path.read_bytes() == b"---\ntitle: caf\xe9\ndraft: false\n---\n\xff body\n"
