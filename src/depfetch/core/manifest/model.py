from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Tuple

MAIN_FEATURE = "main"


@dataclass(frozen=True)
class DependencyEdge:
    """One dependency declaration inside a feature.

    ``revision`` is ``None`` when the manifest does not pin one; the walker
    substitutes the configured default. ``features`` is the comma-separated
    list of the dependency's own features to enable (may be empty).
    """

    name: str
    url: str
    revision: Optional[str] = None
    features: str = ""


@dataclass(frozen=True)
class Feature:
    name: str
    dependencies: Tuple[DependencyEdge, ...] = ()


@dataclass(frozen=True)
class Manifest:
    path: Path
    features: Tuple[Feature, ...] = field(default_factory=tuple)

    @property
    def feature_names(self) -> list[str]:
        return [f.name for f in self.features]

    def iter_edges(self) -> Iterator[Tuple[Feature, DependencyEdge]]:
        for feature in self.features:
            for edge in feature.dependencies:
                yield feature, edge


__all__ = ["MAIN_FEATURE", "DependencyEdge", "Feature", "Manifest"]
