import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'stitcher' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from stitcher.core.logging_config import reset_logging_for_tests
from helpers.tree import write_tree


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Drop STITCHER_* overrides from the developer's shell."""
    import os

    for key in list(os.environ):
        if key.startswith("STITCHER_"):
            monkeypatch.delenv(key, raising=False)
    yield
    reset_logging_for_tests()


@pytest.fixture
def site(tmp_path: Path):
    """Return a writer for small source trees: ``site({"index.html": "..."})``."""

    def _write(files: dict) -> Path:
        return write_tree(tmp_path / "site", files)

    return _write
