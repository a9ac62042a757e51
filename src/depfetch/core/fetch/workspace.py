"""Workspace directory holding one checkout per dependency."""
from __future__ import annotations

import logging
from pathlib import Path

from depfetch.core.exceptions import WorkspaceError

logger = logging.getLogger(__name__)

WORKSPACE_MODE = 0o750


def ensure_workspace(path: Path) -> Path:
    """Create the workspace directory if needed and return its absolute path.

    Raises:
        WorkspaceError: If ``path`` exists and is not a directory.
    """
    path = Path(path).expanduser().resolve()
    if path.exists():
        if not path.is_dir():
            raise WorkspaceError(f"{path} should be directory", context={"path": str(path)})
        return path

    logger.debug("creating workspace %s", path)
    path.mkdir(mode=WORKSPACE_MODE, parents=True)
    return path


def dependency_dir(workspace: Path, name: str) -> Path:
    return Path(workspace) / name


__all__ = ["ensure_workspace", "dependency_dir", "WORKSPACE_MODE"]
