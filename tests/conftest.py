"""Shared test fixtures for hugow."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from hugow.core.collaborators import Collaborators
from hugow.core.config import SiteConfig, load_site_config
from hugow.core.context import Context
from hugow.core.errors import CollaboratorFailure

ARCHETYPE = '---\ntitle: "{title}"\ndate: 2024-06-01T10:00:00Z\ndraft: false\n---\n\n'


class FakeGenerator:
    """Writes a Hugo-like archetype instead of running ``hugo new``."""

    def __init__(self, template: str = ARCHETYPE, fail: bool = False, create: bool = True):
        self.template = template
        self.fail = fail
        self.create_file = create
        self.calls: list[tuple[Path, str]] = []

    def create(self, project_root: Path, relative_path: str) -> None:
        self.calls.append((project_root, relative_path))
        if self.fail:
            raise CollaboratorFailure("hugo new", "exited with status 255")
        if self.create_file:
            target = project_root / relative_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(self.template.format(title=target.stem), encoding="utf-8")


class FakeEditor:
    def __init__(self):
        self.calls: list[list[Path]] = []

    def open(self, paths):
        self.calls.append(list(paths))


class FakeSelector:
    """Returns the rows whose ID column is in ``pick``."""

    def __init__(self, pick: tuple[str, ...] = ()):
        self.pick = pick
        self.rows: list[str] = []

    def select(self, rows):
        self.rows = list(rows)
        return [row for row in rows if row.split("\t", 1)[0] in self.pick]


class FakeBuilder:
    def __init__(self, fail: bool = False, publish: bool = True):
        self.fail = fail
        self.publish = publish
        self.calls: list[Path] = []

    def build(self, project_root: Path) -> None:
        self.calls.append(project_root)
        if self.fail:
            raise CollaboratorFailure("build", "hugo exited with status 1")
        if self.publish:
            (project_root / "public").mkdir(exist_ok=True)


class FakeSync:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[tuple[Path, str, str, bool]] = []

    def sync(self, source_dir: Path, host: str, remote_path: str, dry_run: bool = False) -> None:
        self.calls.append((source_dir, host, remote_path, dry_run))
        if self.fail:
            raise CollaboratorFailure("sync", "rsync exited with status 23")


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point hugow at a config file inside tmp_path and clear editor variables."""
    config_file = tmp_path / "hugow-config.yaml"
    monkeypatch.setenv("HUGOW_CONFIG", str(config_file))
    monkeypatch.delenv("EDITOR", raising=False)
    monkeypatch.delenv("VISUAL", raising=False)
    return config_file


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def site(tmp_path):
    """Create an empty Hugo project with posts and pages sections."""
    root = tmp_path / "site"
    (root / "content" / "posts").mkdir(parents=True)
    (root / "content" / "pages").mkdir(parents=True)
    return root


@pytest.fixture
def write_content(site):
    """Factory fixture for content files relative to the content root."""

    def _write(relative: str, draft: bool | None = None, body: str = "Body text.\n") -> Path:
        lines = ["---", 'title: "Test"']
        if draft is not None:
            lines.append(f"draft: {'true' if draft else 'false'}")
        lines.append("---")
        path = site / "content" / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n\n" + body, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config(site):
    return SiteConfig(project_path=site, deploy_path="/var/www/site", deploy_host="web.example.org")


@pytest.fixture
def fakes():
    return Collaborators(
        generator=FakeGenerator(),
        builder=FakeBuilder(),
        sync=FakeSync(),
        editor=FakeEditor(),
        selector=FakeSelector(),
    )


@pytest.fixture
def cli_obj(site, fakes):
    """CLI context wired to fake collaborators, defaulting to the test site."""

    def loader(**overrides):
        if overrides.get("project_path") is None:
            overrides["project_path"] = site
        return load_site_config(**overrides)

    return Context(collaborators=fakes, config_loader=loader)
