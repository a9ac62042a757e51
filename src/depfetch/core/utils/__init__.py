"""Utility helpers for depfetch core.

- merge: dictionary deep merge used by the config layer
- yaml_io: YAML reading with error handling
- subprocess: subprocess execution with timeouts
"""
from __future__ import annotations

from .merge import deep_merge, merge_arrays
from .yaml_io import read_yaml

__all__ = ["deep_merge", "merge_arrays", "read_yaml"]
