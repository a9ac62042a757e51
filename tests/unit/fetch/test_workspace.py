from __future__ import annotations

import stat
from pathlib import Path

import pytest

from depfetch.core.exceptions import WorkspaceError
from depfetch.core.fetch import dependency_dir, ensure_workspace


def test_creates_missing_workspace(tmp_path: Path) -> None:
    target = tmp_path / "a" / "deps"

    result = ensure_workspace(target)

    assert result == target.resolve()
    assert result.is_dir()
    # Group/other write bits are never granted.
    assert not stat.S_IMODE(result.stat().st_mode) & 0o022


def test_existing_directory_is_reused(tmp_path: Path) -> None:
    (tmp_path / "deps").mkdir()
    (tmp_path / "deps" / "keep.txt").write_text("x", encoding="utf-8")

    result = ensure_workspace(tmp_path / "deps")

    assert (result / "keep.txt").exists()


def test_file_in_the_way_is_an_error(tmp_path: Path) -> None:
    (tmp_path / "deps").write_text("x", encoding="utf-8")

    with pytest.raises(WorkspaceError) as excinfo:
        ensure_workspace(tmp_path / "deps")

    assert str(excinfo.value) == f"{(tmp_path / 'deps').resolve()} should be directory"
    assert isinstance(excinfo.value, NotADirectoryError)


def test_dependency_dir(tmp_path: Path) -> None:
    assert dependency_dir(tmp_path, "foo") == tmp_path / "foo"
