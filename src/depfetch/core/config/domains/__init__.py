"""Domain-specific configuration accessors.

Each domain config provides typed, cached access to one section of the
merged depfetch configuration:

- FetchConfig: git binary, default revision, timeouts, pull/verify switches
- WorkspaceConfig: workspace directory
- ManifestConfig: manifest filenames and the root's dependency name
- LoggingConfig: console level/format and optional log file

Usage:
    from depfetch.core.config.domains import FetchConfig

    fetch = FetchConfig(repo_root=Path("/path/to/project"))
    fetch.default_revision
"""
from __future__ import annotations

from .fetch import FetchConfig
from .logging import LoggingConfig
from .manifest import ManifestConfig
from .workspace import WorkspaceConfig

__all__ = [
    "FetchConfig",
    "LoggingConfig",
    "ManifestConfig",
    "WorkspaceConfig",
]
