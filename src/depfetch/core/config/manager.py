"""
depfetch configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import jsonschema
import yaml

from depfetch.core.exceptions import ConfigError
from depfetch.core.utils.merge import deep_merge as _deep_merge
from depfetch.core.utils.yaml_io import read_yaml
from depfetch.data import get_data_path, read_json

logger = logging.getLogger(__name__)

PROJECT_CONFIG_DIRNAME = ".depfetch"
ENV_PREFIX = "DEPFETCH_"


class ConfigManager:
    """Load, merge, and validate depfetch configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: DEPFETCH_<section>__<key>
    2. Project-local config: <repo-root>/.depfetch/config.local.yml (uncommitted)
    3. Project config: <repo-root>/.depfetch/config.yml
    4. Bundled defaults: depfetch.data/config/*.yaml (alphabetical order)
    """

    PROJECT_FILES = ("config.yml", "config.yaml")
    PROJECT_LOCAL_FILES = ("config.local.yml", "config.local.yaml")

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root).expanduser().resolve() if repo_root else self._find_repo_root()

        # Bundled defaults from depfetch.data package (always available)
        self.core_config_dir = get_data_path("config")

        # Project-specific config overrides
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIRNAME

    def _find_repo_root(self) -> Path:
        return Path.cwd().resolve()

    def deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Recursively merge dictionaries. Delegates to shared implementation."""
        return _deep_merge(base, override)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping at the top level",
                context={"path": str(path)},
            )
        return data

    def validate_schema(self, config: Dict[str, Any]) -> None:
        schema = read_json("schemas", "config.schema.json")
        validator = jsonschema.Draft202012Validator(schema)
        issues: List[str] = []
        for err in sorted(validator.iter_errors(config), key=lambda e: list(e.path)):
            path = ".".join(str(p) for p in err.path) or "<root>"
            issues.append(f"{path}: {err.message}")
        if issues:
            raise ConfigError(
                "Configuration failed validation:\n  " + "\n  ".join(issues),
                context={"issues": issues},
            )

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except ValueError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else raw.split("_")
        if any(seg == "" for seg in segs):
            raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
        # Normalize to lowercase so env overrides create canonical keys.
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX) :]
            if not raw:
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Dict[str, Any] = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if nxt is None:
                nxt = cur[part] = {}
            if not isinstance(nxt, dict):
                raise ConfigError(
                    f"Environment override {ENV_PREFIX}{'__'.join(path)} traverses non-mapping key '{part}'"
                )
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("config override from environment: %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    def project_files(self) -> List[Path]:
        """Project config files that exist, lowest priority first."""
        files: List[Path] = []
        for group in (self.PROJECT_FILES, self.PROJECT_LOCAL_FILES):
            for name in group:
                candidate = self.project_config_dir / name
                if candidate.is_file():
                    files.append(candidate)
                    break
        return files

    def _load_config_uncached(self, validate: bool = True) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {}
        for path in sorted(self.core_config_dir.glob("*.yaml")):
            cfg = self.deep_merge(cfg, self.load_yaml(path))

        for path in self.project_files():
            logger.debug("loading project config %s", path)
            cfg = self.deep_merge(cfg, self.load_yaml(path))

        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load the merged configuration (cached per root/env/config files)."""
        from .cache import get_cached_config

        return get_cached_config(self.repo_root, validate=validate)


__all__ = ["ConfigManager", "PROJECT_CONFIG_DIRNAME", "ENV_PREFIX"]
