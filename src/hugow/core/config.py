"""
Configuration and path management.

Settings come from a YAML config file and are overridden by command-line
flags. The result is an immutable SiteConfig built once per invocation and
passed explicitly to every handler.

Config file resolution:
  1. HUGOW_CONFIG environment variable (highest priority)
  2. $XDG_CONFIG_HOME/hugow/config.yaml
  3. ~/.config/hugow/config.yaml
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from hugow.core.errors import PathInvalid, WriteFailure

logger = logging.getLogger(__name__)

# Keys understood in config.yaml
CONFIG_KEYS = ("project_path", "deploy_path", "deploy_host")

CONTENT_DIR = "content"
PUBLISH_DIR = "public"


@dataclass(frozen=True)
class SiteConfig:
    """Effective settings for one invocation."""

    project_path: Path
    deploy_path: str | None = None
    deploy_host: str | None = None
    dry_run: bool = False

    @property
    def content_path(self) -> Path:
        return self.project_path / CONTENT_DIR

    @property
    def publish_path(self) -> Path:
        return self.project_path / PUBLISH_DIR

    def with_overrides(self, **overrides: Any) -> SiteConfig:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "project_path" in changes:
            changes["project_path"] = Path(changes["project_path"]).expanduser()
        return replace(self, **changes)


def get_config_path() -> Path:
    """Return the path to the hugow config file.

    Returns:
        Path to config file (may not exist).
    """
    explicit = os.environ.get("HUGOW_CONFIG")
    if explicit:
        return Path(explicit).expanduser()
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        base = Path(xdg_config_home)
    else:
        base = Path.home() / ".config"
    return base / "hugow" / "config.yaml"


def load_config_file(config_path: Path | None = None) -> dict[str, Any]:
    """Load the config file.

    Returns:
        Configuration dict, or empty dict if file is missing or invalid.
    """
    if config_path is None:
        config_path = get_config_path()
    if not config_path.is_file():
        return {}
    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        logger.warning("Ignoring unreadable config file %s", config_path, exc_info=True)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def save_config_file(data: dict[str, Any], config_path: Path | None = None) -> Path:
    """Write the config file in YAML format.

    Returns:
        Path that was written.

    Raises:
        WriteFailure: If the file or its directory cannot be written
    """
    if config_path is None:
        config_path = get_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            yaml.dump(data, default_flow_style=False, sort_keys=False), encoding="utf-8"
        )
    except OSError as e:
        raise WriteFailure(config_path, e) from e
    return config_path


def load_site_config(
    project_path: str | Path | None = None,
    deploy_path: str | None = None,
    deploy_host: str | None = None,
    dry_run: bool = False,
    config_path: Path | None = None,
) -> SiteConfig:
    """Build the effective SiteConfig from the config file and overrides.

    Args:
        project_path: Override for the Hugo project directory
        deploy_path: Override for the remote deploy path
        deploy_host: Override for the remote deploy host
        dry_run: Forwarded to the sync step of deploy
        config_path: Explicit config file (defaults to get_config_path())

    Returns:
        Frozen SiteConfig; project_path defaults to the current directory.
    """
    file_values = load_config_file(config_path)

    base = SiteConfig(
        project_path=Path(file_values.get("project_path") or Path.cwd()).expanduser(),
        deploy_path=_optional_str(file_values.get("deploy_path")),
        deploy_host=_optional_str(file_values.get("deploy_host")),
    )
    return base.with_overrides(
        project_path=project_path,
        deploy_path=deploy_path,
        deploy_host=deploy_host,
        dry_run=dry_run or None,
    )


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def resolve_project_root(config: SiteConfig) -> Path:
    """Validate and absolutize the project directory.

    Raises:
        PathInvalid: If the project path is missing or not a directory
    """
    project = config.project_path
    if not project.is_dir():
        raise PathInvalid(project, "Invalid project path")
    return project.resolve()


def resolve_content_root(config: SiteConfig) -> Path:
    """Validate the project's content directory.

    Returns:
        Absolute path of <project>/content.

    Raises:
        PathInvalid: If the project or its content directory is missing
    """
    content = resolve_project_root(config) / CONTENT_DIR
    if not content.is_dir():
        raise PathInvalid(content, "Content directory not found")
    return content
