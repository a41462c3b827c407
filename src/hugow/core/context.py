"""
Shared CLI context and decorators.

Commands receive a Context carrying the console and the external
collaborators, and build their immutable SiteConfig from it exactly once.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

import click
from rich.console import Console
from rich.markup import escape

from hugow.core.collaborators import Collaborators
from hugow.core.config import SiteConfig, load_site_config
from hugow.core.errors import HugowError

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(
        self,
        verbose: bool = False,
        collaborators: Collaborators | None = None,
        config_loader: Callable[..., SiteConfig] = load_site_config,
    ):
        self.verbose = verbose
        self.console = console
        self._collaborators = collaborators
        self._config_loader = config_loader

    @property
    def collaborators(self) -> Collaborators:
        if self._collaborators is None:
            self._collaborators = Collaborators.from_environment()
        return self._collaborators

    def site_config(self, **overrides: Any) -> SiteConfig:
        """Build the immutable config for this invocation."""
        return self._config_loader(**overrides)


pass_context = click.make_pass_decorator(Context, ensure=True)


def common_options(func: Callable) -> Callable:
    """Attach the project/deploy override options shared by every command."""
    func = click.option(
        "-H", "--deploy-host", default=None, help="Override the remote deploy host"
    )(func)
    func = click.option(
        "-d", "--deploy-path", default=None, help="Override the remote deploy path"
    )(func)
    func = click.option(
        "-p",
        "--project-path",
        default=None,
        type=click.Path(file_okay=False),
        help="Override the Hugo project directory",
    )(func)
    return func


def reports_errors(func: Callable) -> Callable:
    """Print handled errors in red and exit with status 1."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except HugowError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
            raise SystemExit(1)

    return wrapper
