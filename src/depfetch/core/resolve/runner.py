"""Wire configuration, workspace, fetcher and walker into one resolution run."""
from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

from depfetch.core.config.domains import FetchConfig, ManifestConfig, WorkspaceConfig
from depfetch.core.fetch.git import GitFetcher
from depfetch.core.fetch.workspace import ensure_workspace
from depfetch.core.manifest.reader import read_manifest

from .walker import GraphWalker, ResolutionResult

logger = logging.getLogger(__name__)


def resolve_tree(
    repo_root: Path,
    *,
    workspace: Optional[Path] = None,
    pull: Optional[bool] = None,
) -> tuple[Path, ResolutionResult]:
    """Fetch every dependency reachable from ``repo_root``'s manifest.

    Args:
        repo_root: Directory holding the root manifest and ``.depfetch/`` config.
        workspace: Overrides ``workspace.directory``.
        pull: Overrides ``fetch.pull`` when not ``None``.

    Returns:
        The workspace directory and the resolution result.
    """
    repo_root = Path(repo_root).resolve()
    fetch_cfg = FetchConfig(repo_root=repo_root)
    manifest_cfg = ManifestConfig(repo_root=repo_root)

    workspace_dir = ensure_workspace(workspace or WorkspaceConfig(repo_root=repo_root).directory)
    logger.debug("workspace: %s", workspace_dir)

    fetcher = GitFetcher.from_config(workspace_dir, fetch_cfg)
    if pull is not None:
        fetcher.pull = pull

    walker = GraphWalker(
        fetcher,
        reader=functools.partial(read_manifest, filenames=manifest_cfg.filenames),
        default_revision=fetch_cfg.default_revision,
        root_name=manifest_cfg.root_name,
    )
    return workspace_dir, walker.run(repo_root)


__all__ = ["resolve_tree"]
