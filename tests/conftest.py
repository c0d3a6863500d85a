"""
Shared fixtures for the fsprune test suite.
"""
import os

# Must be set before fsprune configures logging on import
os.environ["FSPRUNE_ENVIRONMENT"] = "testing"
os.environ.pop("FSPRUNE_LOG_DIR", None)

import pytest


BASE_MTIME = 1_700_000_000


def create_file(file_path, size: int, mtime: float = None) -> str:
    """Helper function to create a file of `size` bytes with an explicit mtime."""
    os.makedirs(os.path.dirname(str(file_path)), exist_ok=True)
    with open(file_path, "wb") as f:
        f.write(b"x" * size)
    if mtime is not None:
        os.utime(file_path, (mtime, mtime))
    return str(file_path)


@pytest.fixture
def file_factory():
    """Create files of a given size and modification time."""
    return create_file


@pytest.fixture
def abc_dir(tmp_path):
    """Directory holding a, b, c: 100 bytes each, modified in that order."""
    d = tmp_path / "d"
    d.mkdir()
    for offset, name in enumerate(["a", "b", "c"]):
        create_file(d / name, 100, BASE_MTIME + offset * 60)
    return d


