import sys
from pathlib import Path

import pytest
import structlog

# flat module layout: make the repo root importable when pytest runs from anywhere
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from scan import SourceFile  # noqa: E402


def sf(name, size):
    """SourceFile that doesn't need to exist on disk (planning only)."""
    return SourceFile(f"/data/{name}", name, size)


@pytest.fixture(autouse=True)
def reset_structlog():
    """main() configures structlog process-wide; start every test from the defaults."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def make_tree(tmp_path):
    """Write {relative path: bytes} under tmp_path/'in' and return that root."""
    root = tmp_path / "in"

    def _make(layout):
        for rel, data in layout.items():
            p = root / rel
            p.parent.mkdir(parents=True, exist_ok=True)
            p.write_bytes(data)
        root.mkdir(exist_ok=True)
        return root

    return _make


@pytest.fixture
def plenty_of_memory():
    return lambda: 64 * 1024 ** 3


@pytest.fixture
def no_memory():
    return lambda: 0


@pytest.fixture
def staging_dir(tmp_path):
    d = tmp_path / "staging"
    d.mkdir()
    return d
