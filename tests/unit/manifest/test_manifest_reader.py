"""Tests for reading repository manifests."""
from __future__ import annotations

from pathlib import Path

import pytest

from depfetch.core.exceptions import ManifestError
from depfetch.core.manifest import MAIN_FEATURE, DependencyEdge, find_manifest, parse_manifest, read_manifest
from helpers.manifests import dep, featured, write_manifest


def test_missing_manifest_returns_none(tmp_path: Path) -> None:
    assert read_manifest(tmp_path) is None


def test_featured_manifest_preserves_order(tmp_path: Path) -> None:
    write_manifest(
        tmp_path,
        featured(
            main=[dep("foo", "u1", "r1"), dep("bar", "u2")],
            extra=[dep("baz", "u3", features="docs")],
        ),
    )

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.path == tmp_path / "repository.yml"
    assert manifest.feature_names == ["main", "extra"]
    assert manifest.features[0].dependencies == (
        DependencyEdge("foo", "u1", "r1", ""),
        DependencyEdge("bar", "u2", None, ""),
    )
    assert manifest.features[1].dependencies[0].features == "docs"


def test_flat_dependencies_become_main_feature(tmp_path: Path) -> None:
    write_manifest(tmp_path, {"dependencies": [dep("foo", "u1")]})

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.feature_names == [MAIN_FEATURE]
    assert [e.name for _f, e in manifest.iter_edges()] == ["foo"]


def test_flat_main_is_placed_before_declared_features(tmp_path: Path) -> None:
    data = {"dependencies": [dep("foo")], **featured(tests=[dep("bar")])}
    write_manifest(tmp_path, data)

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.feature_names == ["main", "tests"]


def test_feature_list_is_joined_as_csv(tmp_path: Path) -> None:
    write_manifest(tmp_path, featured(main=[{"name": "foo", "url": "u1", "features": ["a", " b"]}]))

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.features[0].dependencies[0].features == "a,b"


def test_blank_revision_is_unpinned(tmp_path: Path) -> None:
    write_manifest(tmp_path, featured(main=[{"name": "foo", "url": "u1", "revision": "  "}]))

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.features[0].dependencies[0].revision is None


def test_empty_manifest_has_no_features(tmp_path: Path) -> None:
    (tmp_path / "repository.yml").write_text("", encoding="utf-8")

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.features == ()


def test_invalid_yaml_raises_manifest_error(tmp_path: Path) -> None:
    (tmp_path / "repository.yml").write_text("features: [\n", encoding="utf-8")

    with pytest.raises(ManifestError) as excinfo:
        read_manifest(tmp_path)

    assert excinfo.value.path == str(tmp_path / "repository.yml")


def test_missing_url_fails_schema(tmp_path: Path) -> None:
    write_manifest(tmp_path, featured(main=[{"name": "foo"}]))

    with pytest.raises(ManifestError) as excinfo:
        read_manifest(tmp_path)

    assert excinfo.value.issues
    assert any("url" in issue for issue in excinfo.value.issues)


def test_unknown_top_level_key_fails_schema(tmp_path: Path) -> None:
    write_manifest(tmp_path, {"dependencis": []})

    with pytest.raises(ManifestError):
        read_manifest(tmp_path)


@pytest.mark.parametrize("name", ["../escape", "a/b", "has space"])
def test_path_like_dependency_names_are_rejected(tmp_path: Path, name: str) -> None:
    write_manifest(tmp_path, featured(main=[{"name": name, "url": "u1"}]))

    with pytest.raises(ManifestError):
        read_manifest(tmp_path)


@pytest.mark.parametrize("name", [".", ".."])
def test_reserved_dependency_names_are_rejected(tmp_path: Path, name: str) -> None:
    with pytest.raises(ManifestError, match="reserved"):
        parse_manifest(featured(main=[{"name": name, "url": "u1"}]), tmp_path / "repository.yml")


def test_find_manifest_prefers_first_filename(tmp_path: Path) -> None:
    write_manifest(tmp_path, {}, filename="repository.yaml")
    write_manifest(tmp_path, {}, filename="repository.yml")

    assert find_manifest(tmp_path) == tmp_path / "repository.yml"
    assert find_manifest(tmp_path, ["repository.yaml"]) == tmp_path / "repository.yaml"


def test_custom_filenames(tmp_path: Path) -> None:
    write_manifest(tmp_path, featured(main=[dep("foo")]), filename="deps.yml")

    assert read_manifest(tmp_path) is None
    manifest = read_manifest(tmp_path, filenames=("deps.yml",))
    assert manifest is not None
    assert manifest.feature_names == ["main"]


def _write_xml(directory: Path, body: str) -> Path:
    path = directory / "repository.xml"
    path.write_text(body, encoding="utf-8")
    return path


def test_xml_flat_dependencies_become_main(tmp_path: Path) -> None:
    _write_xml(
        tmp_path,
        '<repository>\n'
        '  <dependency name="foo" url="u1" revision="r1"/>\n'
        '  <dependency name="bar" url="u2"/>\n'
        '</repository>\n',
    )

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.path == tmp_path / "repository.xml"
    assert manifest.feature_names == [MAIN_FEATURE]
    assert manifest.features[0].dependencies == (
        DependencyEdge("foo", "u1", "r1", ""),
        DependencyEdge("bar", "u2", None, ""),
    )


def test_xml_featured_manifest(tmp_path: Path) -> None:
    _write_xml(
        tmp_path,
        '<repository>\n'
        '  <feature name="main">\n'
        '    <dependency name="foo" url="u1" features="extra, docs"/>\n'
        '  </feature>\n'
        '  <feature name="tests">\n'
        '    <dependency name="kit" url="u3" revision="v2"/>\n'
        '  </feature>\n'
        '</repository>\n',
    )

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.feature_names == ["main", "tests"]
    assert manifest.features[0].dependencies[0].features == "extra, docs"
    assert manifest.features[1].dependencies == (DependencyEdge("kit", "u3", "v2", ""),)


def test_yaml_manifest_wins_over_xml(tmp_path: Path) -> None:
    write_manifest(tmp_path, featured(main=[dep("foo")]))
    _write_xml(tmp_path, "<repository/>")

    manifest = read_manifest(tmp_path)

    assert manifest is not None
    assert manifest.path.name == "repository.yml"


@pytest.mark.parametrize(
    "body,match",
    [
        ("<repository><dependency name='foo'", "Invalid XML"),
        ("<project/>", "expected <repository>"),
        ("<repository><module name='x'/></repository>", "unexpected <module>"),
        ("<repository><feature name='f'><feature name='g'/></feature></repository>", "unexpected <feature>"),
        ("<repository><dependency name='foo'/></repository>", "url"),
        ("<repository><dependency name='foo' url='u' branch='b'/></repository>", "branch"),
    ],
)
def test_invalid_xml_manifests(tmp_path: Path, body: str, match: str) -> None:
    _write_xml(tmp_path, body)

    with pytest.raises(ManifestError, match=match):
        read_manifest(tmp_path)
