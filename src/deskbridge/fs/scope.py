"""Filesystem scope: which paths the host has granted read or write access to."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import ValidationError

from deskbridge.fs.types import FsScope
from deskbridge.infrastructure.config import expand_home
from deskbridge.infrastructure.logger import logger


def load_fs_scope(path: Path) -> FsScope | None:
    """Load the scope file. Returns None if missing or unreadable."""
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text())
        return FsScope(**data)
    except (OSError, ValueError, TypeError, ValidationError) as err:
        logger.warning("Failed to load filesystem scope", path=str(path), error=str(err))
        return None


def _resolve(p: str) -> Path:
    return Path(expand_home(p)).resolve()


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def check_access(path: str, scope: FsScope | None, write: bool) -> bool:
    """Check a path against the scope.

    No scope means everything is allowed. Blocked patterns win over allowed roots,
    and writes need a root with allow_write.

    Only the given path is checked. Symlinks inside a copied tree are followed by
    the copy itself, so a link pointing into a blocked location is not caught here.
    """
    if scope is None:
        return True

    resolved = _resolve(path)

    for pattern in scope.blocked_patterns:
        if _is_within(resolved, _resolve(pattern)):
            return False

    for root in scope.allowed_roots:
        if _is_within(resolved, _resolve(root.path)):
            if write and not root.allow_write:
                continue
            return True

    return False
