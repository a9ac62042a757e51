"""Conflict registry: first-seen (url, revision) binding per dependency name."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Dict, Iterator, Optional

from depfetch.core.exceptions import DependencyConflictError


@dataclass(frozen=True)
class ResolvedDependency:
    name: str
    url: str
    revision: str
    path: Optional[Path] = None

    def same_source(self, other: "ResolvedDependency") -> bool:
        return self.url == other.url and self.revision == other.revision

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {
            "name": self.name,
            "url": self.url,
            "revision": self.revision,
            "path": str(self.path) if self.path is not None else None,
        }


class AcceptResult(str, Enum):
    ACCEPTED = "accepted"
    ALREADY_PRESENT = "already_present"


class ConflictRegistry:
    """Append-only record of accepted dependencies, keyed by name.

    The first (url, revision) accepted for a name wins; requesting the same
    pair again is a no-op and requesting any other pair is fatal.
    """

    def __init__(self) -> None:
        self._records: Dict[str, ResolvedDependency] = {}

    def accept(self, name: str, url: str, revision: str) -> AcceptResult:
        requested = ResolvedDependency(name=name, url=url, revision=revision)
        existing = self._records.get(name)
        if existing is None:
            self._records[name] = requested
            return AcceptResult.ACCEPTED
        if existing.same_source(requested):
            return AcceptResult.ALREADY_PRESENT
        raise DependencyConflictError(existing, requested)

    def record_path(self, name: str, path: Path) -> ResolvedDependency:
        """Attach the materialized directory to an accepted record."""
        record = replace(self._records[name], path=Path(path))
        self._records[name] = record
        return record

    def get(self, name: str) -> Optional[ResolvedDependency]:
        return self._records.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._records

    def __iter__(self) -> Iterator[ResolvedDependency]:
        return iter(list(self._records.values()))

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["AcceptResult", "ConflictRegistry", "ResolvedDependency"]
