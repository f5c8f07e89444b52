"""Copy error kinds and OSError translation."""

from __future__ import annotations

import errno
from pathlib import Path
from typing import Literal

ErrorKind = Literal["input", "permission", "resource", "conflict", "io"]

_PERMISSION_ERRNOS = {errno.EACCES, errno.EPERM, errno.EROFS}
_RESOURCE_ERRNOS = {errno.ENOSPC, getattr(errno, "EDQUOT", errno.ENOSPC), errno.EMFILE, errno.ENFILE, errno.ENOMEM, errno.EFBIG}
_CONFLICT_ERRNOS = {errno.EEXIST, errno.EISDIR, errno.ENOTDIR, errno.ENOTEMPTY}


class CopyError(Exception):
    """Base class for directory copy failures.

    ``str(err)`` is the human-readable message handed back across the command boundary.
    """

    kind: ErrorKind = "io"

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class SourceError(CopyError):
    kind: ErrorKind = "input"


class CopyPermissionError(CopyError):
    kind: ErrorKind = "permission"


class ResourceError(CopyError):
    kind: ErrorKind = "resource"


class ConflictError(CopyError):
    kind: ErrorKind = "conflict"


class CopyIOError(CopyError):
    kind: ErrorKind = "io"


def from_os_error(err: OSError, action: str, path: Path) -> CopyError:
    """Translate an OSError raised while performing ``action`` on ``path``."""
    reason = err.strerror or str(err)
    message = f"Failed to {action} {path}: {reason}"
    code = err.errno

    if code in _PERMISSION_ERRNOS:
        return CopyPermissionError(message, path)
    if code in _RESOURCE_ERRNOS:
        return ResourceError(message, path)
    if code in _CONFLICT_ERRNOS:
        return ConflictError(message, path)
    return CopyIOError(message, path)
