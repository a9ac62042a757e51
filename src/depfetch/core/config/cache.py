"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain configs.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path, validate: bool) -> str:
    # Include environment overrides and project config mtimes so that a
    # changed env var or edited config file is never served stale.
    from .manager import ENV_PREFIX, ConfigManager

    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith(ENV_PREFIX)
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    files = []
    for path in ConfigManager(repo_root=repo_root).project_files():
        st = path.stat()
        files.append((path.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:validate={validate}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = True) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same repo_root, environment
    and project config files, avoiding repeated file I/O.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, validate)

    if key not in _config_cache:
        from .manager import ConfigManager

        manager = ConfigManager(repo_root=normalized_root)
        _config_cache[key] = manager._load_config_uncached(validate=validate)

    # NOTE: returns the cached dict instance (treat as immutable)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear the configuration cache (used by tests and after config edits)."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, validate: bool = True) -> bool:
    normalized_root = _normalize_repo_root(repo_root)
    return _cache_key(normalized_root, validate) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
