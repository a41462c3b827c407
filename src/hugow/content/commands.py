"""CLI commands for posts and pages.

Thin click layer over hugow.content.handlers: parse arguments, build the
SiteConfig once, call the handler, render the result.
"""

from __future__ import annotations

import json as json_module
from datetime import date, datetime

import click
from rich.markup import escape
from rich.table import Table

from hugow.content.handlers import (
    content_status,
    edit_by_ids,
    edit_by_selection,
    list_content,
    new_content,
)
from hugow.content.ids import looks_like_id
from hugow.content.scanner import Status, parse_filters, parse_status, parse_type
from hugow.core.context import Context, common_options, console, pass_context, reports_errors
from hugow.core.errors import InvalidArgument


def _parse_date(value: str | None) -> date | None:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise InvalidArgument(f"Invalid date: {value!r}. Use YYYY-MM-DD.")


# ---------------------------------------------------------------------------
# hugow new
# ---------------------------------------------------------------------------


@click.command(name="new")
@click.argument("content_type", metavar="post|page")
@click.argument("title")
@click.option("--date", "date_str", default=None, help="Post date YYYY-MM-DD (default: today)")
@click.option("--edit/--no-edit", default=True, help="Open the new file in $EDITOR")
@common_options
@pass_context
@reports_errors
def new(
    ctx: Context,
    content_type: str,
    title: str,
    date_str: str | None,
    edit: bool,
    project_path: str | None,
    deploy_path: str | None,
    deploy_host: str | None,
) -> None:
    """Create a new post or page as a draft.

    Posts are written to content/posts/<YYYY-MM-DD>-<slug>.md and pages to
    content/pages/<slug>.md.
    """
    kind = parse_type(content_type)
    today = _parse_date(date_str)
    config = ctx.site_config(
        project_path=project_path, deploy_path=deploy_path, deploy_host=deploy_host
    )
    collaborators = ctx.collaborators

    console.print(f"[cyan]Creating new {kind.value}:[/cyan] {escape(title)}")
    result = new_content(
        config,
        kind,
        title,
        generator=collaborators.generator,
        editor=collaborators.editor,
        today=today,
        open_editor=edit,
    )

    console.print(f"[green]Created:[/green] {result.path}", soft_wrap=True)
    if not result.edited:
        console.print()
        console.print("[dim]Next steps:[/dim]")
        console.print(f"  1. Edit {result.path}")
        console.print("  2. Run `hugow status <id> public` when ready to publish")
        console.print("  3. Run `hugow deploy` to build and upload the site")


# ---------------------------------------------------------------------------
# hugow list
# ---------------------------------------------------------------------------


@click.command(name="list")
@click.argument("filters", nargs=-1, metavar="[post|page] [draft|public]")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON array")
@common_options
@pass_context
@reports_errors
def list_cmd(
    ctx: Context,
    filters: tuple[str, ...],
    as_json: bool,
    project_path: str | None,
    deploy_path: str | None,
    deploy_host: str | None,
) -> None:
    """List content with ephemeral IDs.

    IDs are only valid until the content changes. `status` and `edit`
    resolve IDs against the unfiltered listing, so use IDs from a plain
    `hugow list` when acting on them.
    """
    type_filter, status_filter = parse_filters(filters)
    config = ctx.site_config(
        project_path=project_path, deploy_path=deploy_path, deploy_host=deploy_host
    )
    entries = list_content(config, type_filter, status_filter)

    if as_json:
        output = [
            {
                "id": item_id,
                "status": item.status.value,
                "type": item.content_type.value,
                "path": item.relative_path,
            }
            for item_id, item in entries
        ]
        click.echo(json_module.dumps(output, indent=2))
        return

    if not entries:
        console.print("[yellow]No content found matching criteria.[/yellow]")
        return

    table = Table(title=f"Content ({len(entries)})")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Status")
    table.add_column("Type", style="dim")
    table.add_column("Path", no_wrap=True)

    for item_id, item in entries:
        status_text = "[yellow]draft[/yellow]" if item.is_draft else "[green]public[/green]"
        table.add_row(str(item_id), status_text, item.content_type.value, escape(item.relative_path))

    console.print(table)
    if type_filter is not None or status_filter is not None:
        console.print("[dim]IDs above are for this filtered view only.[/dim]")


# ---------------------------------------------------------------------------
# hugow edit
# ---------------------------------------------------------------------------


@click.command(name="edit")
@click.argument("targets", nargs=-1, metavar="ID... | [post|page] [draft|public]")
@common_options
@pass_context
@reports_errors
def edit(
    ctx: Context,
    targets: tuple[str, ...],
    project_path: str | None,
    deploy_path: str | None,
    deploy_host: str | None,
) -> None:
    """Open content in $EDITOR by ID or by interactive selection.

    With numeric IDs, each ID is resolved against a fresh unfiltered scan.
    Otherwise the (optionally filtered) content is offered in fzf.
    """
    id_args = [t for t in targets if looks_like_id(t)]
    if id_args and len(id_args) != len(targets):
        raise InvalidArgument("Give either IDs or a post|page filter, not both")

    config = ctx.site_config(
        project_path=project_path, deploy_path=deploy_path, deploy_host=deploy_host
    )
    collaborators = ctx.collaborators

    if id_args:
        result = edit_by_ids(config, id_args, editor=collaborators.editor)
    else:
        type_filter, status_filter = parse_filters(targets)
        result = edit_by_selection(
            config,
            type_filter,
            status_filter,
            selector=collaborators.selector,
            editor=collaborators.editor,
        )

    for warning in result.warnings:
        console.print(f"[yellow]Warning:[/yellow] {escape(warning)}", highlight=False, soft_wrap=True)

    if not result.opened:
        console.print("[yellow]No valid files to edit.[/yellow]")
        return

    console.print(f"[green]Edited {len(result.paths)} file(s).[/green]")


# ---------------------------------------------------------------------------
# hugow status
# ---------------------------------------------------------------------------


@click.command(name="status")
@click.argument("item_id", metavar="ID")
@click.argument("new_status", required=False, metavar="[draft|public]")
@common_options
@pass_context
@reports_errors
def status(
    ctx: Context,
    item_id: str,
    new_status: str | None,
    project_path: str | None,
    deploy_path: str | None,
    deploy_host: str | None,
) -> None:
    """Show or set the draft status of a content item."""
    wanted = parse_status(new_status) if new_status is not None else None
    config = ctx.site_config(
        project_path=project_path, deploy_path=deploy_path, deploy_host=deploy_host
    )
    result = content_status(config, item_id, wanted)

    label = "draft" if result.status is Status.DRAFT else "public"
    where = f"[cyan]{result.item_id}[/cyan] {escape(result.item.relative_path)}"

    if wanted is None:
        console.print(f"{where} is [bold]{label}[/bold]", soft_wrap=True)
    elif result.changed:
        console.print(f"[green]Marked[/green] {where} as [bold]{label}[/bold]", soft_wrap=True)
    else:
        console.print(f"{where} is already [bold]{label}[/bold] (no change)", soft_wrap=True)
