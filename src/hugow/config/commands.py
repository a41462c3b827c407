"""
Configuration management CLI commands.

Manages hugow settings stored in config.yaml. Command-line flags always
override these values for a single invocation.
"""

from __future__ import annotations

from typing import Any

import click
from rich.table import Table

from hugow.core.config import get_config_path, load_config_file, save_config_file
from hugow.core.context import console, reports_errors
from hugow.core.errors import InvalidArgument

# Settings with descriptions; None default means "must be configured"
CONFIG_SCHEMA: dict[str, dict[str, Any]] = {
    "project_path": {
        "default": "current directory",
        "description": "Hugo project directory",
    },
    "deploy_path": {
        "default": None,
        "description": "Absolute path of the site on the deploy host",
    },
    "deploy_host": {
        "default": None,
        "description": "Host (or user@host) that rsync uploads to",
    },
}


def _check_key(key: str) -> None:
    if key not in CONFIG_SCHEMA:
        raise InvalidArgument(
            f"Unknown setting: {key} (available: {', '.join(CONFIG_SCHEMA)})"
        )


@click.group()
def config():
    """Manage hugow configuration.

    Settings are stored in the YAML file shown by `hugow config path`
    ($HUGOW_CONFIG, else $XDG_CONFIG_HOME/hugow/config.yaml, else
    ~/.config/hugow/config.yaml).
    """
    pass


@config.command(name="show")
def show_cmd():
    """Show all settings and where they come from."""
    values = load_config_file()

    table = Table(title="Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value", style="green")
    table.add_column("Description", style="dim")

    for key, schema in CONFIG_SCHEMA.items():
        value = values.get(key)
        if value is None:
            default = schema["default"]
            display_value = f"[dim]{default}[/dim]" if default else "[red]not set[/red]"
        else:
            display_value = str(value)
        table.add_row(key, display_value, schema["description"])

    console.print(table)
    console.print(f"\n[dim]Config file: {get_config_path()}[/dim]")


@config.command(name="get")
@click.argument("key")
@reports_errors
def get_cmd(key: str):
    """Get a configuration value.

    Examples:
        hugow config get deploy_host
    """
    _check_key(key)
    value = load_config_file().get(key)
    if value is None:
        default = CONFIG_SCHEMA[key]["default"]
        console.print(f"{key} = {default or 'not set'} [dim](default)[/dim]")
    else:
        console.print(f"{key} = {value}")


@config.command(name="set")
@click.argument("key")
@click.argument("value")
@reports_errors
def set_cmd(key: str, value: str):
    """Set a configuration value.

    Examples:
        hugow config set deploy_host www.example.org
        hugow config set deploy_path /var/www/site
    """
    _check_key(key)
    if not value.strip():
        raise InvalidArgument(f"Empty value for {key}")

    values = load_config_file()
    values[key] = value
    save_config_file(values)
    console.print(f"[green]Set {key} = {value}[/green]")


@config.command(name="unset")
@click.argument("key")
@reports_errors
def unset_cmd(key: str):
    """Remove a setting so its default applies again."""
    _check_key(key)
    values = load_config_file()
    if key not in values:
        console.print(f"[dim]{key} is not set[/dim]")
        return
    del values[key]
    save_config_file(values)
    console.print(f"[green]Removed {key}[/green]")


@config.command(name="path")
def path_cmd():
    """Show path to config file."""
    click.echo(str(get_config_path()))
