"""Feature registry: the set of enabled ``dependency:feature`` identifiers."""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, List

from depfetch.core.manifest.model import MAIN_FEATURE


def qualify(dependency_name: str, feature_name: str) -> str:
    return f"{dependency_name}:{feature_name}"


def split_features(features_csv: str) -> List[str]:
    """Split a comma-separated feature list, dropping blanks.

    >>> split_features(" extra, docs,,")
    ['extra', 'docs']
    """
    return [name.strip() for name in (features_csv or "").split(",") if name.strip()]


class FeatureRegistry:
    """Append-only, insertion-ordered set of qualified feature identifiers.

    Referencing a dependency always enables its ``main`` feature in addition
    to whatever the referencing edge asks for.
    """

    def __init__(self) -> None:
        self._enabled: Dict[str, None] = {}

    def _add(self, qualified: str) -> bool:
        if qualified in self._enabled:
            return False
        self._enabled[qualified] = None
        return True

    def enable(self, dependency_name: str, features_csv: str = "") -> List[str]:
        """Enable ``main`` plus every feature in ``features_csv`` for a dependency.

        Returns the qualified ids that were not enabled before.
        """
        names = [MAIN_FEATURE, *split_features(features_csv)]
        return self.enable_all(dependency_name, names)

    def enable_all(self, dependency_name: str, feature_names: Iterable[str]) -> List[str]:
        added = []
        for name in feature_names:
            qualified = qualify(dependency_name, name)
            if self._add(qualified):
                added.append(qualified)
        return added

    def is_enabled(self, dependency_name: str, feature_name: str) -> bool:
        return qualify(dependency_name, feature_name) in self._enabled

    def as_list(self) -> List[str]:
        return list(self._enabled)

    def __contains__(self, qualified: object) -> bool:
        return qualified in self._enabled

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._enabled))

    def __len__(self) -> int:
        return len(self._enabled)


__all__ = ["FeatureRegistry", "qualify", "split_features"]
