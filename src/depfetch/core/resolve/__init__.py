"""Dependency resolution: feature gating, conflict detection and graph traversal.

Public API:
    from depfetch.core.resolve import GraphWalker, FeatureRegistry, ConflictRegistry
"""
from __future__ import annotations

from .conflicts import AcceptResult, ConflictRegistry, ResolvedDependency
from .features import FeatureRegistry, qualify, split_features
from .walker import (
    DEFAULT_REVISION,
    ROOT_NAME,
    Fetcher,
    GraphWalker,
    ResolutionResult,
    WalkerState,
    WorkQueueEntry,
)
from .runner import resolve_tree

__all__ = [
    "AcceptResult",
    "ConflictRegistry",
    "ResolvedDependency",
    "FeatureRegistry",
    "qualify",
    "split_features",
    "DEFAULT_REVISION",
    "ROOT_NAME",
    "Fetcher",
    "GraphWalker",
    "ResolutionResult",
    "WalkerState",
    "WorkQueueEntry",
    "resolve_tree",
]
