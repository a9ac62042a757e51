"""Domain-specific configuration for dependency fetching (git)."""
from __future__ import annotations

from functools import cached_property
from typing import Optional

from ..base import BaseDomainConfig


class FetchConfig(BaseDomainConfig):
    """Typed access to the ``fetch`` section."""

    def _config_section(self) -> str:
        return "fetch"

    @cached_property
    def git_binary(self) -> str:
        return str(self.section.get("git_binary") or "git")

    @cached_property
    def default_revision(self) -> str:
        """Revision used for edges that do not pin one."""
        return str(self.section.get("default_revision") or "master")

    @cached_property
    def timeout_seconds(self) -> Optional[float]:
        raw = self.section.get("timeout_seconds")
        return float(raw) if raw is not None else None

    @cached_property
    def pull(self) -> bool:
        return bool(self.section.get("pull", True))

    @cached_property
    def verify_existing_remote(self) -> bool:
        return bool(self.section.get("verify_existing_remote", False))


__all__ = ["FetchConfig"]
