"""
Content command handlers.

Plain functions behind the ``new``, ``list``, ``edit`` and ``status``
commands. They take the immutable SiteConfig plus the collaborators they
need, raise HugowError subclasses, and return small result objects that the
click layer renders.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from hugow.content.frontmatter import read_draft_flag, set_draft_flag
from hugow.content.ids import IdIndex, assign_ids, parse_id
from hugow.content.scanner import ContentItem, ContentScanner, ContentType, Status
from hugow.core.collaborators import Editor, Generator, Selector
from hugow.core.config import CONTENT_DIR, SiteConfig, resolve_content_root, resolve_project_root
from hugow.core.errors import (
    AlreadyExists,
    CollaboratorFailure,
    InvalidArgument,
    NotConfigured,
    NotFound,
)
from hugow.core.slug import slugify

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class NewResult:
    path: Path
    relative_path: str
    edited: bool = False


@dataclass
class EditResult:
    paths: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def opened(self) -> bool:
        return bool(self.paths)


@dataclass
class StatusResult:
    item_id: int
    item: ContentItem
    status: Status
    changed: bool = False


# ---------------------------------------------------------------------------
# new
# ---------------------------------------------------------------------------


def content_relative_path(content_type: ContentType, slug: str, today: date) -> str:
    """Project-relative path for new content.

    Posts are date-prefixed: ``content/posts/2024-06-01-my-title.md``.
    Pages are not: ``content/pages/about.md``.
    """
    if content_type is ContentType.POST:
        filename = f"{today.isoformat()}-{slug}.md"
    else:
        filename = f"{slug}.md"
    return f"{CONTENT_DIR}/{content_type.directory}/{filename}"


def new_content(
    config: SiteConfig,
    content_type: ContentType,
    title: str,
    generator: Generator,
    editor: Editor | None = None,
    today: date | None = None,
    open_editor: bool = True,
) -> NewResult:
    """Create a new post or page, force it to draft, and optionally edit it.

    Raises:
        PathInvalid: If the project directory does not exist
        InvalidArgument: If the title produces an empty slug
        AlreadyExists: If the target file is already present
        CollaboratorFailure: If scaffolding or the editor fails
        WriteFailure: If the draft flag cannot be written
    """
    project = resolve_project_root(config)

    slug = slugify(title)
    if not slug:
        raise InvalidArgument(f"Title {title!r} does not produce a usable slug")

    if today is None:
        today = date.today()

    relative = content_relative_path(content_type, slug, today)
    target = project / relative
    if target.exists():
        raise AlreadyExists(target)

    generator.create(project, relative)
    if not target.is_file():
        raise CollaboratorFailure("hugo new", f"did not create {target}")

    # New content always starts as a draft, whatever the archetype says
    set_draft_flag(target, True)
    logger.debug("Created %s", target)

    result = NewResult(path=target, relative_path=relative)
    if open_editor and editor is not None:
        editor.open([target])
        result.edited = True
    return result


# ---------------------------------------------------------------------------
# list
# ---------------------------------------------------------------------------


def list_content(
    config: SiteConfig,
    type_filter: ContentType | None = None,
    status_filter: Status | None = None,
) -> list[tuple[int, ContentItem]]:
    """Scan with filters and number the results for display."""
    scanner = ContentScanner(resolve_content_root(config))
    return assign_ids(scanner.scan(type_filter, status_filter))


def format_row(item_id: int, item: ContentItem) -> str:
    """Tab-separated row used for interactive selection."""
    return "\t".join([str(item_id), item.status.value, item.content_type.value, item.relative_path])


# ---------------------------------------------------------------------------
# edit
# ---------------------------------------------------------------------------


def edit_by_ids(
    config: SiteConfig,
    raw_ids: list[str] | tuple[str, ...],
    editor: Editor | None,
) -> EditResult:
    """Resolve IDs against a fresh unfiltered scan and open them together.

    Unknown IDs become warnings rather than errors. Nothing is opened when
    no ID resolves.

    Raises:
        InvalidArgument: If an ID is not a positive integer
        NotConfigured: If files resolved but no editor is configured
    """
    ids = [parse_id(raw) for raw in raw_ids]
    index = IdIndex.for_resolution(ContentScanner(resolve_content_root(config)))

    result = EditResult()
    for item_id in ids:
        try:
            item = index.resolve(item_id)
        except NotFound as e:
            result.warnings.append(str(e))
            continue
        if item.path not in result.paths:
            result.paths.append(item.path)

    _open_all(result, editor)
    return result


def edit_by_selection(
    config: SiteConfig,
    type_filter: ContentType | None,
    status_filter: Status | None,
    selector: Selector | None,
    editor: Editor | None,
) -> EditResult:
    """Let the user pick content interactively, then open the picks.

    Raises:
        NotConfigured: If no selector (or, with picks, no editor) is available
    """
    if selector is None:
        raise NotConfigured(
            "Interactive selection needs fzf on PATH; pass explicit IDs instead"
        )

    entries = list_content(config, type_filter, status_filter)
    result = EditResult()
    if not entries:
        return result

    by_id = {item_id: item for item_id, item in entries}
    for row in selector.select([format_row(item_id, item) for item_id, item in entries]):
        head = row.split("\t", 1)[0]
        try:
            item = by_id[int(head)]
        except (ValueError, KeyError):
            result.warnings.append(f"Ignoring unrecognized selection: {row!r}")
            continue
        if item.path not in result.paths:
            result.paths.append(item.path)

    _open_all(result, editor)
    return result


def _open_all(result: EditResult, editor: Editor | None) -> None:
    if not result.paths:
        return
    if editor is None:
        raise NotConfigured("No editor configured; set $EDITOR or $VISUAL")
    editor.open(result.paths)


# ---------------------------------------------------------------------------
# status
# ---------------------------------------------------------------------------


def content_status(
    config: SiteConfig,
    raw_id: str,
    new_status: Status | None = None,
) -> StatusResult:
    """Report or set the draft status of the item with the given ID.

    Raises:
        InvalidArgument: If the ID is not a positive integer
        NotFound: If the ID does not resolve
        WriteFailure: If the draft flag cannot be written
    """
    item_id = parse_id(raw_id)
    index = IdIndex.for_resolution(ContentScanner(resolve_content_root(config)))
    item = index.resolve(item_id)

    if new_status is None:
        current = Status.DRAFT if read_draft_flag(item.path) else Status.PUBLIC
        return StatusResult(item_id=item_id, item=item, status=current)

    changed = set_draft_flag(item.path, new_status is Status.DRAFT)
    return StatusResult(item_id=item_id, item=item, status=new_status, changed=changed)
