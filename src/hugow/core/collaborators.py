"""
External process collaborators.

Each collaborator is a one-method protocol so handlers can be tested with
fakes. The process-backed implementations run their command with ``cwd=``
rather than changing the working directory of hugow itself.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

from hugow.core.errors import CollaboratorFailure

logger = logging.getLogger(__name__)


@runtime_checkable
class Generator(Protocol):
    """Scaffolds a new content file inside a Hugo project."""

    def create(self, project_root: Path, relative_path: str) -> None: ...


@runtime_checkable
class Builder(Protocol):
    """Renders the site into its publish directory."""

    def build(self, project_root: Path) -> None: ...


@runtime_checkable
class SyncTool(Protocol):
    """Mirrors a local directory to a remote host."""

    def sync(self, source_dir: Path, host: str, remote_path: str, dry_run: bool = False) -> None: ...


@runtime_checkable
class Editor(Protocol):
    """Opens files for interactive editing and blocks until done."""

    def open(self, paths: Sequence[Path]) -> None: ...


@runtime_checkable
class Selector(Protocol):
    """Lets the user pick zero or more rows."""

    def select(self, rows: Sequence[str]) -> list[str]: ...


def run_command(
    name: str,
    cmd: list[str],
    cwd: Path | None = None,
    stdin: str | None = None,
    capture: bool = False,
) -> subprocess.CompletedProcess:
    """Run an external command, raising on a missing binary.

    Args:
        name: Collaborator name used in error messages
        cmd: Command and arguments
        cwd: Working directory for the child process
        stdin: Text to feed on standard input
        capture: Capture stdout (stderr always goes to the terminal)

    Returns:
        The completed process; callers decide what a return code means.

    Raises:
        CollaboratorFailure: If the executable cannot be started
    """
    logger.debug("Running %s (cwd=%s)", shlex.join(cmd), cwd)
    try:
        return subprocess.run(
            cmd,
            cwd=cwd,
            input=stdin,
            stdout=subprocess.PIPE if capture else None,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError as e:
        raise CollaboratorFailure(name, f"{cmd[0]} not found") from e
    except OSError as e:
        raise CollaboratorFailure(name, f"could not run {cmd[0]}: {e}") from e


def _check(name: str, result: subprocess.CompletedProcess, cmd: list[str]) -> None:
    if result.returncode != 0:
        raise CollaboratorFailure(name, f"`{shlex.join(cmd)}` exited with status {result.returncode}")


@dataclass(frozen=True)
class HugoGenerator:
    """``hugo new <path>`` in the project directory."""

    executable: str = "hugo"

    def create(self, project_root: Path, relative_path: str) -> None:
        cmd = [self.executable, "new", relative_path]
        _check("hugo new", run_command("hugo new", cmd, cwd=project_root), cmd)


@dataclass(frozen=True)
class HugoBuilder:
    """Production build: ``hugo --minify --gc --environment production``."""

    executable: str = "hugo"
    environment: str = "production"

    def build(self, project_root: Path) -> None:
        if shutil.which(self.executable) is None:
            raise CollaboratorFailure("build", f"{self.executable} is not installed")
        cmd = [self.executable, "--minify", "--gc", "--environment", self.environment]
        _check("build", run_command("build", cmd, cwd=project_root), cmd)


@dataclass(frozen=True)
class RsyncSync:
    """``rsync -az --delete <dir>/ host:path``."""

    executable: str = "rsync"

    def sync(self, source_dir: Path, host: str, remote_path: str, dry_run: bool = False) -> None:
        # Trailing slash: copy the directory's contents, not the directory
        source = str(source_dir).rstrip("/") + "/"
        cmd = [self.executable, "-az", "--delete"]
        if dry_run:
            cmd += ["--dry-run", "--itemize-changes"]
        cmd += [source, f"{host}:{remote_path}"]
        _check("sync", run_command("sync", cmd), cmd)


@dataclass(frozen=True)
class ProcessEditor:
    """Runs the configured editor command with all paths at once."""

    command: tuple[str, ...]

    def open(self, paths: Sequence[Path]) -> None:
        cmd = [*self.command, *(str(p) for p in paths)]
        _check("editor", run_command("editor", cmd), cmd)


@dataclass(frozen=True)
class FzfSelector:
    """Multi-select over tab-separated rows with fzf."""

    executable: str = "fzf"

    # fzf exit codes meaning "nothing chosen" (no match, interrupted)
    NO_SELECTION = (1, 130)

    def select(self, rows: Sequence[str]) -> list[str]:
        cmd = [self.executable, "--multi", "--delimiter", "\t"]
        result = run_command("selector", cmd, stdin="\n".join(rows) + "\n", capture=True)
        if result.returncode in self.NO_SELECTION:
            return []
        _check("selector", result, cmd)
        return [line for line in (result.stdout or "").splitlines() if line.strip()]


def find_editor(environ: dict[str, str] | None = None) -> ProcessEditor | None:
    """Return an editor from $VISUAL or $EDITOR, or None if neither is set."""
    if environ is None:
        environ = dict(os.environ)
    raw = environ.get("VISUAL") or environ.get("EDITOR")
    if not raw or not raw.strip():
        return None
    return ProcessEditor(command=tuple(shlex.split(raw)))


def find_selector() -> FzfSelector | None:
    """Return the fzf selector, or None if fzf is not on PATH."""
    if shutil.which("fzf") is None:
        return None
    return FzfSelector()


@dataclass
class Collaborators:
    """The set of external collaborators a command may use."""

    generator: Generator
    builder: Builder
    sync: SyncTool
    editor: Editor | None = None
    selector: Selector | None = None

    @classmethod
    def from_environment(cls) -> Collaborators:
        return cls(
            generator=HugoGenerator(),
            builder=HugoBuilder(),
            sync=RsyncSync(),
            editor=find_editor(),
            selector=find_selector(),
        )
