"""Tests for `depfetch validate`."""
from __future__ import annotations

import json
from pathlib import Path

from depfetch.cli._dispatcher import main as cli_main
from helpers.manifests import dep, featured, write_manifest


def test_validate_lists_features(isolated_project_env: Path, capsys) -> None:
    write_manifest(
        isolated_project_env,
        featured(main=[dep("foo", "u1", "r1")], extra=[dep("bar", "u2", features="docs")]),
    )

    rc = cli_main(["validate"])

    lines = capsys.readouterr().out.splitlines()
    assert rc == 0
    assert lines == [
        f"{isolated_project_env.resolve() / 'repository.yml'}: valid",
        "feature main",
        "  foo: u1#r1",
        "feature extra",
        "  bar: u2#(default) [docs]",
    ]


def test_validate_json(isolated_project_env: Path, capsys) -> None:
    write_manifest(isolated_project_env, {"dependencies": [dep("foo", "u1")]})

    rc = cli_main(["validate", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert payload["status"] == "valid"
    assert payload["features"] == [
        {
            "name": "main",
            "dependencies": [{"name": "foo", "url": "u1", "revision": None, "features": ""}],
        }
    ]


def test_validate_other_directory(isolated_project_env: Path, tmp_path: Path, capsys) -> None:
    other = tmp_path / "lib"
    write_manifest(other, featured(main=[]))

    rc = cli_main(["validate", str(other)])

    assert rc == 0
    assert capsys.readouterr().out.startswith(f"{other.resolve() / 'repository.yml'}: valid")


def test_validate_missing_manifest(isolated_project_env: Path, capsys) -> None:
    rc = cli_main(["validate"])

    assert rc == 0
    assert capsys.readouterr().out.strip() == f"No manifest in {isolated_project_env.resolve()}"


def test_validate_invalid_manifest(isolated_project_env: Path, capsys) -> None:
    write_manifest(isolated_project_env, featured(main=[{"name": "foo"}]))

    rc = cli_main(["validate", "--json"])

    payload = json.loads(capsys.readouterr().err)
    assert rc == 1
    assert payload["error"] == "validate_error"
    assert payload["code"] == "ManifestError"
    assert payload["context"]["issues"]
