"""Manifest reader.

Loads ``repository.yml`` (or ``repository.yaml``, ``repository.xml``) from a
directory into a :class:`Manifest`.

- A directory without a manifest is a leaf: :func:`read_manifest` returns ``None``.
- A manifest that exists but is not valid YAML/XML, or does not match the bundled
  ``repository.schema.json``, raises :class:`ManifestError`.
- The flat form (a top-level ``dependencies`` list, no ``features``) is read as
  an implicit ``main`` feature placed before any declared features.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence

import yaml
from jsonschema import Draft202012Validator

from depfetch.core.config.domains.manifest import DEFAULT_MANIFEST_FILENAMES
from depfetch.core.exceptions import ManifestError
from depfetch.data import read_json

from .model import MAIN_FEATURE, DependencyEdge, Feature, Manifest
from .xml_format import load_xml_document

logger = logging.getLogger(__name__)

_RESERVED_NAMES = {".", ".."}


def _validator() -> Draft202012Validator:
    schema = read_json("schemas", "repository.schema.json")
    return Draft202012Validator(schema)


def find_manifest(directory: Path, filenames: Sequence[str] = DEFAULT_MANIFEST_FILENAMES) -> Optional[Path]:
    """Return the first manifest file present in ``directory``, if any."""
    directory = Path(directory)
    for name in filenames:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def _features_csv(raw: Any) -> str:
    if raw is None:
        return ""
    if isinstance(raw, (list, tuple)):
        return ",".join(str(item).strip() for item in raw)
    return str(raw).strip()


def _edge(raw: Dict[str, Any]) -> DependencyEdge:
    revision = str(raw.get("revision") or "").strip()
    return DependencyEdge(
        name=str(raw["name"]).strip(),
        url=str(raw["url"]).strip(),
        revision=revision or None,
        features=_features_csv(raw.get("features")),
    )


def _edges(raw: Optional[Iterable[Dict[str, Any]]]) -> tuple[DependencyEdge, ...]:
    return tuple(_edge(item) for item in (raw or []))


def parse_manifest(data: Any, path: Path) -> Manifest:
    """Validate a decoded YAML document and build a :class:`Manifest`."""
    issues: List[str] = []
    for err in sorted(_validator().iter_errors(data), key=lambda e: list(e.path)):
        where = "/".join(str(p) for p in err.path) or "<root>"
        issues.append(f"{where}: {err.message}")
    if issues:
        raise ManifestError(
            f"Invalid manifest {path}:\n  " + "\n  ".join(issues),
            path=str(path),
            issues=issues,
        )

    data = data or {}
    features: List[Feature] = []
    if data.get("dependencies"):
        features.append(Feature(MAIN_FEATURE, _edges(data.get("dependencies"))))
    for raw_feature in data.get("features") or []:
        features.append(Feature(str(raw_feature["name"]), _edges(raw_feature.get("dependencies"))))

    manifest = Manifest(path=Path(path), features=tuple(features))
    for _feature, edge in manifest.iter_edges():
        if edge.name in _RESERVED_NAMES:
            raise ManifestError(
                f"Invalid manifest {path}: dependency name '{edge.name}' is reserved",
                path=str(path),
            )
    return manifest


def read_manifest(
    directory: Path,
    filenames: Sequence[str] = DEFAULT_MANIFEST_FILENAMES,
) -> Optional[Manifest]:
    """Read the manifest in ``directory``.

    Returns:
        The parsed manifest, or ``None`` when the directory has none.

    Raises:
        ManifestError: When the manifest cannot be read, decoded or validated.
    """
    path = find_manifest(directory, filenames)
    if path is None:
        return None

    try:
        if path.suffix.lower() == ".xml":
            data = load_xml_document(path)
        else:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ManifestError(f"Invalid YAML in manifest {path}: {exc}", path=str(path)) from exc
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}", path=str(path)) from exc

    manifest = parse_manifest(data, path)
    logger.debug("read %s: features=%s", path, manifest.feature_names)
    return manifest


__all__ = ["find_manifest", "parse_manifest", "read_manifest"]
