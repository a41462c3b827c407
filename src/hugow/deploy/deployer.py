"""
Site deployment.

Builds the Hugo site, then mirrors the publish directory to the remote host.
Build and sync failures are reported separately and never retried: a
partial sync is resumed by running deploy again.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from hugow.core.collaborators import Builder, SyncTool
from hugow.core.config import PUBLISH_DIR, SiteConfig, resolve_project_root
from hugow.core.errors import NotConfigured, PathInvalid

logger = logging.getLogger(__name__)


@dataclass
class DeployResult:
    project: Path
    source: Path
    target: str
    dry_run: bool


def deploy_site(config: SiteConfig, builder: Builder, sync: SyncTool) -> DeployResult:
    """Build the site and sync it to ``deploy_host:deploy_path``.

    Dry-run only affects the sync step; the build always runs.

    Raises:
        PathInvalid: If the project directory is missing
        NotConfigured: If deploy host or path is not set
        CollaboratorFailure: From the build (collaborator "build") or the
            sync (collaborator "sync")
    """
    project = resolve_project_root(config)
    if not config.deploy_host:
        raise NotConfigured("Deploy host is not set (use --deploy-host or deploy_host in config)")
    if not config.deploy_path:
        raise NotConfigured("Deploy path is not set (use --deploy-path or deploy_path in config)")

    builder.build(project)

    source = project / PUBLISH_DIR
    if not source.is_dir():
        raise PathInvalid(source, "Build produced no publish directory")

    target = f"{config.deploy_host}:{config.deploy_path}"
    logger.debug("Syncing %s to %s (dry_run=%s)", source, target, config.dry_run)
    sync.sync(source, config.deploy_host, config.deploy_path, dry_run=config.dry_run)

    return DeployResult(project=project, source=source, target=target, dry_run=config.dry_run)
