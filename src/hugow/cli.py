"""
Main CLI dispatcher for hugow.

Usage:
    hugow new post|page TITLE            # Scaffold a draft and open it
    hugow list [post|page] [draft|public]
    hugow edit ID... | [post|page] [draft|public]
    hugow status ID [draft|public]
    hugow deploy [--dry-run]
    hugow config [show|get|set|path]
"""

from __future__ import annotations

import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from hugow import __version__
from hugow.core.context import Context

err_console = Console(stderr=True)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _configure_logging(verbose: bool) -> None:
    """Send debug records to stderr through rich when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__, prog_name="hugow")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Hugo site content tools.

    Create, list, edit and publish posts and pages of a Hugo site.
    """
    if isinstance(ctx.obj, Context):
        ctx.obj.verbose = verbose or ctx.obj.verbose
    else:
        ctx.obj = Context(verbose=verbose)
    _configure_logging(ctx.obj.verbose)


def run() -> None:
    """Console entry point: every handled failure, usage errors included, exits 1."""
    try:
        main(standalone_mode=False)
    except click.exceptions.Abort:
        err_console.print("[yellow]Aborted.[/yellow]")
        sys.exit(1)
    except click.exceptions.Exit as e:
        sys.exit(e.exit_code)
    except click.ClickException as e:
        e.show()
        sys.exit(1)
    sys.exit(0)


# Import and register commands (imports after main definition intentional)
from hugow.config.commands import config  # noqa: E402
from hugow.content.commands import edit, list_cmd, new, status  # noqa: E402
from hugow.deploy.commands import deploy  # noqa: E402

main.add_command(new)
main.add_command(list_cmd)
main.add_command(edit)
main.add_command(status)
main.add_command(deploy)
main.add_command(config)


if __name__ == "__main__":
    run()
