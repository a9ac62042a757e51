"""Merging of configuration layers.

Mappings merge key by key. Lists (``manifest.filenames`` is the one depfetch
ships) are replaced by the later layer unless the later list starts with a
directive:

- ``"+"``: append to the inherited list,
  e.g. ``filenames: ["+", deps.yml]`` also looks for ``deps.yml``.
- ``"="``: replace, same as a plain list; spells out the intent in config files.

Any other value replaces the inherited one.
"""
from __future__ import annotations

from typing import Any, Dict, List

APPEND = "+"
REPLACE = "="


def merge_arrays(inherited: List[Any], layer: List[Any]) -> List[Any]:
    """Apply one layer's list on top of the inherited list.

    >>> merge_arrays(["repository.yml"], ["+", "deps.yml"])
    ['repository.yml', 'deps.yml']
    """
    if not layer:
        return list(inherited)
    head, rest = layer[0], list(layer[1:])
    if head == APPEND:
        return [*inherited, *rest]
    if head == REPLACE:
        return rest
    return list(layer)


def _merge_value(inherited: Any, value: Any) -> Any:
    # Directives are consumed even when nothing is inherited.
    if isinstance(value, dict):
        return deep_merge(inherited if isinstance(inherited, dict) else {}, value)
    if isinstance(value, list):
        return merge_arrays(inherited if isinstance(inherited, list) else [], value)
    return value


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` with ``override`` layered on top; neither input is modified."""
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        merged[key] = _merge_value(merged.get(key), value)
    return merged


__all__ = ["deep_merge", "merge_arrays"]
