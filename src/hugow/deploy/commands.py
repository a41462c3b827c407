"""CLI command for building and publishing the site."""

from __future__ import annotations

import click

from hugow.core.context import Context, common_options, console, pass_context, reports_errors
from hugow.deploy.deployer import deploy_site


@click.command(name="deploy")
@click.option("-n", "--dry-run", is_flag=True, help="Build, but only preview the sync")
@common_options
@pass_context
@reports_errors
def deploy(
    ctx: Context,
    dry_run: bool,
    project_path: str | None,
    deploy_path: str | None,
    deploy_host: str | None,
) -> None:
    """Build the site with Hugo and deploy it with rsync."""
    config = ctx.site_config(
        project_path=project_path,
        deploy_path=deploy_path,
        deploy_host=deploy_host,
        dry_run=dry_run,
    )
    collaborators = ctx.collaborators

    if config.dry_run:
        console.print("[yellow]DRY RUN MODE - sync will not change the server[/yellow]")
    console.print(f"[cyan]Generating the site in {config.project_path}...[/cyan]")

    result = deploy_site(config, builder=collaborators.builder, sync=collaborators.sync)

    if result.dry_run:
        console.print(f"[yellow]DRY RUN - nothing uploaded to {result.target}[/yellow]", soft_wrap=True)
    else:
        console.print(f"[green]Deployed[/green] {result.source} to {result.target}", soft_wrap=True)
