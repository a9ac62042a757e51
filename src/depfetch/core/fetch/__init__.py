"""Fetching dependencies into the workspace."""
from __future__ import annotations

from .git import ALREADY_EXISTS_MARKER, GitFetcher
from .workspace import dependency_dir, ensure_workspace

__all__ = ["ALREADY_EXISTS_MARKER", "GitFetcher", "dependency_dir", "ensure_workspace"]
