"""Shared CLI helpers."""
from __future__ import annotations

import argparse
from pathlib import Path

from depfetch.core.config.domains import LoggingConfig
from depfetch.core.stdlib_logging import configure_stdlib_logging


def get_repo_root(args: argparse.Namespace) -> Path:
    """Repository root from ``--repo-root``, or the current directory."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).expanduser().resolve()
    return Path.cwd().resolve()


def setup_logging(args: argparse.Namespace, repo_root: Path) -> None:
    """Configure console/file logging from config and the standard flags.

    ``--verbose`` forces DEBUG; ``--json`` keeps the console quiet below
    WARNING so stdout/stderr stay machine readable.
    """
    cfg = LoggingConfig(repo_root=repo_root)
    level = cfg.level
    if getattr(args, "verbose", False):
        level = "DEBUG"
    elif getattr(args, "json", False):
        level = "WARNING"
    configure_stdlib_logging(level=level, fmt=cfg.format, log_path=cfg.file)


__all__ = ["get_repo_root", "setup_logging"]
