"""depfetch configuration system.

Usage:
    from depfetch.core.config import ConfigManager
    from depfetch.core.config.domains import FetchConfig

    # Direct config manager usage
    manager = ConfigManager(repo_root=Path("/path/to/project"))
    config = manager.load_config()

    # Domain-specific accessors (recommended)
    fetch = FetchConfig(repo_root=Path("/path/to/project"))
    fetch.timeout_seconds
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import get_cached_config, clear_all_caches, is_cached
from .base import BaseDomainConfig
from .domains import FetchConfig, LoggingConfig, ManifestConfig, WorkspaceConfig

__all__ = [
    "ConfigManager",
    "BaseDomainConfig",
    "get_cached_config",
    "clear_all_caches",
    "is_cached",
    "FetchConfig",
    "LoggingConfig",
    "ManifestConfig",
    "WorkspaceConfig",
]
