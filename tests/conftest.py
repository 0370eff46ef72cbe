import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'loadorder' and tests/ importable for 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from loadorder.core.logging import reset_logging_for_tests  # noqa: E402


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch):
    """Each test starts without a deprecation override or CLI log handler."""
    monkeypatch.delenv("LOADORDER_DEPRECATED_HANDLING", raising=False)
    yield
    reset_logging_for_tests()


@pytest.fixture
def mods_root(tmp_path: Path) -> Path:
    root = tmp_path / "mods"
    root.mkdir()
    return root
