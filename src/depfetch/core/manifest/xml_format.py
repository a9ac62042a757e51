"""Decoding of ``repository.xml`` manifests.

The XML form carries the same tree as the YAML form::

    <repository>
      <dependency name="foo" url="..." revision="r1"/>
      <feature name="extra">
        <dependency name="bar" url="..." features="docs"/>
      </feature>
    </repository>

Top-level ``<dependency>`` elements are the flat form (the implicit ``main``
feature). :func:`xml_to_document` produces the document shape validated by
``repository.schema.json``, so both formats share one validation path.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Any, Dict, List

from depfetch.core.exceptions import ManifestError

ROOT_TAG = "repository"


def _dependency(elem: ET.Element) -> Dict[str, Any]:
    return dict(elem.attrib)


def _feature(elem: ET.Element, path: Path) -> Dict[str, Any]:
    feature: Dict[str, Any] = dict(elem.attrib)
    deps: List[Dict[str, Any]] = []
    for child in elem:
        if child.tag != "dependency":
            raise ManifestError(
                f"Invalid manifest {path}: unexpected <{child.tag}> inside <feature>",
                path=str(path),
            )
        deps.append(_dependency(child))
    feature["dependencies"] = deps
    return feature


def xml_to_document(root: ET.Element, path: Path) -> Dict[str, Any]:
    if root.tag != ROOT_TAG:
        raise ManifestError(
            f"Invalid manifest {path}: root element is <{root.tag}>, expected <{ROOT_TAG}>",
            path=str(path),
        )

    document: Dict[str, Any] = {}
    for child in root:
        if child.tag == "dependency":
            document.setdefault("dependencies", []).append(_dependency(child))
        elif child.tag == "feature":
            document.setdefault("features", []).append(_feature(child, path))
        else:
            raise ManifestError(
                f"Invalid manifest {path}: unexpected <{child.tag}> inside <{ROOT_TAG}>",
                path=str(path),
            )
    return document


def load_xml_document(path: Path) -> Dict[str, Any]:
    """Parse ``path`` and return its manifest document.

    Raises:
        ManifestError: When the file is not well-formed XML or has an unexpected layout.
    """
    try:
        tree = ET.parse(path)
    except ET.ParseError as exc:
        raise ManifestError(f"Invalid XML in manifest {path}: {exc}", path=str(path)) from exc
    return xml_to_document(tree.getroot(), path)


__all__ = ["load_xml_document", "xml_to_document"]
