"""Domain-specific configuration for manifest discovery."""
from __future__ import annotations

from functools import cached_property
from typing import Tuple

from ..base import BaseDomainConfig

DEFAULT_MANIFEST_FILENAMES = ("repository.yml", "repository.yaml", "repository.xml")


class ManifestConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "manifest"

    @cached_property
    def filenames(self) -> Tuple[str, ...]:
        """Candidate manifest filenames, checked in order."""
        names = self.section.get("filenames") or DEFAULT_MANIFEST_FILENAMES
        return tuple(str(n) for n in names)

    @cached_property
    def root_name(self) -> str:
        """Dependency name the root directory's features are qualified with."""
        return str(self.section.get("root_name") or "root")


__all__ = ["ManifestConfig", "DEFAULT_MANIFEST_FILENAMES"]
