"""Repository manifests: the per-directory declaration of features and dependencies.

Public API:
    from depfetch.core.manifest import Manifest, Feature, DependencyEdge, read_manifest
"""
from __future__ import annotations

from .model import MAIN_FEATURE, DependencyEdge, Feature, Manifest
from .reader import find_manifest, parse_manifest, read_manifest

__all__ = [
    "MAIN_FEATURE",
    "DependencyEdge",
    "Feature",
    "Manifest",
    "find_manifest",
    "parse_manifest",
    "read_manifest",
]
