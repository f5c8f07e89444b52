from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    root.mkdir(parents=True, exist_ok=True)
    return root


def _snapshot(root: Path) -> dict[str, bytes | None]:
    """Map every relative path under root to its bytes (None for directories)."""
    return {
        p.relative_to(root).as_posix(): (None if p.is_dir() else p.read_bytes())
        for p in sorted(root.rglob("*"))
    }


@pytest.fixture
def make_tree() -> Callable[[Path, dict[str, str]], Path]:
    """Create files (with parent directories) from a {relative path: text} mapping."""
    return _write_tree


@pytest.fixture
def snapshot() -> Callable[[Path], dict[str, bytes | None]]:
    return _snapshot


@pytest.fixture
def src_tree(tmp_path: Path) -> Path:
    """The /tmp/src scenario: a.txt and sub/b.txt."""
    return _write_tree(tmp_path / "src", {"a.txt": "hello", "sub/b.txt": "world"})
