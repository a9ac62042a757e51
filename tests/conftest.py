import os
import shutil
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'depfetch' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_depfetch_caches
from helpers.fetchers import RecordingFetcher


def pytest_collection_modifyitems(config, items):  # type: ignore[no-untyped-def]
    """Skip ``requires_git`` tests when no git binary is available."""
    if shutil.which("git") is not None:
        return
    skip = pytest.mark.skip(reason="git executable not found")
    for item in items:
        if "requires_git" in item.keywords:
            item.add_marker(skip)


@pytest.fixture(autouse=True)
def _reset_depfetch_state(monkeypatch):
    """Ensure config caches, logging handlers and DEPFETCH_* env are fresh per test."""
    # Tests must be deterministic regardless of developer environment.
    for key in list(os.environ):
        if key.startswith("DEPFETCH_"):
            monkeypatch.delenv(key, raising=False)
    reset_depfetch_caches()
    yield
    reset_depfetch_caches()


@pytest.fixture
def isolated_project_env(tmp_path, monkeypatch) -> Path:
    """
    Isolated project directory for tests; also the current working directory.

    The root manifest and `.depfetch/` config are written here by tests.
    """
    root = tmp_path / "project"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Empty workspace directory for fetchers."""
    ws = tmp_path / "deps"
    ws.mkdir()
    return ws


@pytest.fixture
def fetcher(workspace: Path) -> RecordingFetcher:
    """Fake fetcher that records materialize() calls without running git."""
    return RecordingFetcher(workspace)


@pytest.fixture(scope="session")
def repo_root() -> Path:
    """Repository root path for tests."""
    return REPO_ROOT
