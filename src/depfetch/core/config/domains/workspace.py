"""Domain-specific configuration for the fetch workspace."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class WorkspaceConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "workspace"

    @cached_property
    def directory(self) -> Path:
        """Workspace directory; relative values resolve against the repo root."""
        raw = Path(str(self.section.get("directory") or "deps")).expanduser()
        return raw if raw.is_absolute() else self.repo_root / raw


__all__ = ["WorkspaceConfig"]
