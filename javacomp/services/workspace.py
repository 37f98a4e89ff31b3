from __future__ import annotations

import shutil
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator

import structlog

from javacomp.core.errors import FilesystemError


logger = structlog.get_logger(__name__)

_DIR_PREFIX = "java_"


@dataclass(frozen=True, slots=True)
class Workspace:
    id: str
    root: Path
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def create_workspace(scratch_root: str | Path) -> Workspace:
    """Allocate a fresh directory under ``scratch_root`` named after a random UUID."""
    workspace_id = uuid.uuid4().hex
    root = Path(scratch_root) / f"{_DIR_PREFIX}{workspace_id}"
    try:
        # exist_ok=False: a collision means something else owns the path
        root.mkdir(parents=True, exist_ok=False)
    except OSError as exc:
        raise FilesystemError(f"unable to create workspace: {exc.strerror or exc}") from exc
    logger.debug("workspace_created", workspace_id=workspace_id, root=str(root))
    return Workspace(id=workspace_id, root=root)


def write_source(workspace: Workspace, file_name: str, content: str) -> Path:
    target = (workspace.root / file_name).resolve()
    if target.parent != workspace.root.resolve():
        raise FilesystemError(f"file name escapes workspace: {file_name!r}")
    try:
        target.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise FilesystemError(f"unable to write source file: {exc.strerror or exc}") from exc
    return target


def destroy(workspace: Workspace) -> None:
    """Remove the workspace recursively. Safe to call more than once; never raises."""
    try:
        shutil.rmtree(workspace.root)
    except FileNotFoundError:
        return
    except OSError as exc:
        logger.warning(
            "workspace_destroy_failed",
            workspace_id=workspace.id,
            root=str(workspace.root),
            error=str(exc),
        )
        return
    logger.debug("workspace_destroyed", workspace_id=workspace.id)


@contextmanager
def provisioned_workspace(scratch_root: str | Path) -> Iterator[Workspace]:
    """Yield a new workspace and destroy it on every exit path."""
    workspace = create_workspace(scratch_root)
    try:
        yield workspace
    finally:
        destroy(workspace)
