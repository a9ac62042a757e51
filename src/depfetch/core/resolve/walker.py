"""Breadth-first dependency graph walker.

The walker drains a FIFO queue of directories, starting with the root:

1. Read the directory's manifest; a missing manifest marks a leaf.
2. For the root only, enable every feature the manifest declares.
3. For each enabled feature, in manifest order, process its edges in
   declaration order: default the revision, enable the edge's requested
   features on the dependency, register the dependency, fetch it, and
   enqueue its directory.

Feature propagation happens before the fetch, so a dependency may request
features on dependencies that are fetched later in the traversal. A
dependency's own manifest is read only after it has been fetched.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional, Protocol

from depfetch.core.exceptions import ManifestError
from depfetch.core.manifest.model import DependencyEdge, Manifest
from depfetch.core.manifest.reader import read_manifest

from .conflicts import AcceptResult, ConflictRegistry, ResolvedDependency
from .features import FeatureRegistry, qualify

logger = logging.getLogger(__name__)

DEFAULT_REVISION = "master"
ROOT_NAME = "root"


class Fetcher(Protocol):
    def materialize(self, name: str, url: str, revision: str) -> Path:
        """Fetch ``name`` at ``revision`` and return its directory."""
        ...


ManifestReader = Callable[[Path], Optional[Manifest]]


class WalkerState(str, Enum):
    IDLE = "idle"
    DRAINING = "draining"
    DONE = "done"


@dataclass(frozen=True)
class WorkQueueEntry:
    directory: Path
    dependency_name: str
    is_root: bool = False


@dataclass
class ResolutionResult:
    enabled_features: List[str] = field(default_factory=list)
    dependencies: List[ResolvedDependency] = field(default_factory=list)
    disabled_features: List[str] = field(default_factory=list)
    missing_manifests: List[Path] = field(default_factory=list)

    @property
    def fetched_directories(self) -> List[Path]:
        return [d.path for d in self.dependencies if d.path is not None]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "enabled_features": list(self.enabled_features),
            "dependencies": [d.to_dict() for d in self.dependencies],
            "disabled_features": list(self.disabled_features),
            "missing_manifests": [str(p) for p in self.missing_manifests],
        }


class GraphWalker:
    """Resolve and materialize the dependency graph rooted at a directory.

    Each :meth:`run` owns a fresh :class:`FeatureRegistry` and
    :class:`ConflictRegistry`, so independent runs never share state.
    Fatal conditions (:class:`DependencyConflictError`, :class:`FetchError`,
    :class:`ManifestError`) propagate out of :meth:`run` unchanged.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        *,
        reader: ManifestReader = read_manifest,
        default_revision: str = DEFAULT_REVISION,
        root_name: str = ROOT_NAME,
    ) -> None:
        self.fetcher = fetcher
        self.reader = reader
        self.default_revision = default_revision
        self.root_name = root_name
        self.state = WalkerState.IDLE
        self.features = FeatureRegistry()
        self.resolved = ConflictRegistry()

    def run(self, root_directory: Path) -> ResolutionResult:
        self.features = FeatureRegistry()
        self.resolved = ConflictRegistry()
        result = ResolutionResult()

        queue: Deque[WorkQueueEntry] = deque(
            [WorkQueueEntry(Path(root_directory), self.root_name, is_root=True)]
        )
        self.state = WalkerState.DRAINING
        while queue:
            entry = queue.popleft()
            queue.extend(self._process(entry, result))
        self.state = WalkerState.DONE

        result.enabled_features = self.features.as_list()
        result.dependencies = list(self.resolved)
        logger.info("all dependencies fetched!")
        return result

    def _process(self, entry: WorkQueueEntry, result: ResolutionResult) -> List[WorkQueueEntry]:
        manifest = self.reader(entry.directory)
        if manifest is None:
            logger.info("no manifest in %s", entry.directory)
            result.missing_manifests.append(entry.directory)
            return []

        logger.info("processing %s (%s)", manifest.path, entry.dependency_name)
        if entry.is_root:
            self.features.enable_all(entry.dependency_name, manifest.feature_names)

        discovered: List[WorkQueueEntry] = []
        for feature in manifest.features:
            qualified = qualify(entry.dependency_name, feature.name)
            if not self.features.is_enabled(entry.dependency_name, feature.name):
                logger.info("feature %s disabled, skipping %d dependencies", qualified, len(feature.dependencies))
                if qualified not in result.disabled_features:
                    result.disabled_features.append(qualified)
                continue

            logger.info("feature %s enabled", qualified)
            for edge in feature.dependencies:
                if edge.name == self.root_name:
                    raise ManifestError(
                        f"Invalid manifest {manifest.path}: dependency name '{edge.name}' is the root name",
                        path=str(manifest.path),
                    )
                child = self._resolve_edge(edge)
                if child is not None:
                    discovered.append(child)
        return discovered

    def _resolve_edge(self, edge: DependencyEdge) -> Optional[WorkQueueEntry]:
        revision = edge.revision or self.default_revision
        self.features.enable(edge.name, edge.features)

        outcome = self.resolved.accept(edge.name, edge.url, revision)
        if outcome is AcceptResult.ALREADY_PRESENT:
            logger.info("%s: already resolved at %s#%s", edge.name, edge.url, revision)
            return None

        logger.info("%s: %s#%s", edge.name, edge.url, revision)
        directory = self.fetcher.materialize(edge.name, edge.url, revision)
        self.resolved.record_path(edge.name, directory)
        return WorkQueueEntry(Path(directory), edge.name, is_root=False)


__all__ = [
    "DEFAULT_REVISION",
    "ROOT_NAME",
    "Fetcher",
    "GraphWalker",
    "ResolutionResult",
    "WalkerState",
    "WorkQueueEntry",
]
