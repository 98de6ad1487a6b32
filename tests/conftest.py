"""
Shared fixtures for scan-and-clean tests.
Creates isolated temporary directory trees with controlled duplicate layouts.
"""
import pytest
import tempfile
from pathlib import Path
from typing import Dict

from dupescope.core.models import DuplicateGroup, FileRecord


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def dup_tree(temp_dir) -> Dict[str, Path]:
    """
    Creates two sibling trees:
      keep/  - protected directory (never authorized for deletion)
      del/   - directory authorized for deletion

    Content layout:
      - A: one copy in keep/, one copy in del/       (protected copy exists)
      - B: three copies, all in del/                 (no protected copy)
      - C: two copies, both in keep/                 (nothing deletable)
      - unique file in del/
    """
    keep = temp_dir / "keep"
    delete = temp_dir / "del"
    (delete / "nested").mkdir(parents=True)
    keep.mkdir()

    files = {"keep": keep, "del": delete}

    files["a_keep"] = keep / "A.txt"
    files["a_del"] = delete / "A_copy.txt"
    for key in ("a_keep", "a_del"):
        files[key].write_bytes(b"A" * 1024)

    files["b1"] = delete / "B1.txt"
    files["b2"] = delete / "B2.txt"
    files["b3"] = delete / "nested" / "B3.txt"
    for key in ("b1", "b2", "b3"):
        files[key].write_bytes(b"B" * 2048)

    files["c1"] = keep / "C1.txt"
    files["c2"] = keep / "C2.txt"
    for key in ("c1", "c2"):
        files[key].write_bytes(b"C" * 512)

    files["unique"] = delete / "unique.txt"
    files["unique"].write_bytes(b"U" * 300)

    return files


@pytest.fixture
def make_group():
    """Factory building a DuplicateGroup straight from paths (no disk access)."""
    def _make(*paths, fingerprint: str = "abc123") -> DuplicateGroup:
        return DuplicateGroup(fingerprint=fingerprint, files=tuple(FileRecord(path=str(p)) for p in paths))
    return _make
