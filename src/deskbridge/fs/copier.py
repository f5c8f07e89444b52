"""Recursive directory copy with merge-into-destination semantics."""

from __future__ import annotations

import errno
import shutil
import stat
from pathlib import Path

from deskbridge.fs.errors import ConflictError, SourceError, from_os_error
from deskbridge.fs.types import CopyOptions
from deskbridge.infrastructure.logger import logger


def _check_source(src: Path) -> None:
    try:
        st = src.stat()
    except OSError as err:
        if err.errno in (errno.ENOENT, errno.ENOTDIR):
            raise SourceError(f"Source path does not exist: {src}", src) from err
        raise from_os_error(err, "read source", src) from err
    if not stat.S_ISDIR(st.st_mode):
        raise SourceError(f"Source path is not a directory: {src}", src)


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


def _ensure_dir(path: Path, src: Path) -> None:
    if path.exists() and not path.is_dir():
        raise ConflictError(f"Cannot copy directory {src} over existing file {path}", path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise from_os_error(err, "create directory", path) from err


def copy_directory(source: str | Path, destination: str | Path, options: CopyOptions | None = None) -> int:
    """Recursively copy the directory ``source`` into ``destination``.

    With the default options the *contents* of source land directly in destination,
    which is created (with parents) when missing and merged into when present.
    Colliding files are overwritten; unrelated destination entries are left alone.

    Stops at the first failure and raises a CopyError subclass. Entries copied
    before the failure stay on disk. Returns the number of file bytes copied.
    """
    options = options or CopyOptions()
    src = Path(source)
    dest = Path(destination)

    _check_source(src)

    target = dest if options.copy_inside else dest / src.name
    resolved_target, resolved_src = target.resolve(), src.resolve()
    if _is_within(resolved_target, resolved_src):
        raise SourceError(f"Destination {target} is inside source {src}", target)
    # Merging into an ancestor of source would write over source's own entries
    if _is_within(resolved_src, resolved_target):
        raise SourceError(f"Source {src} is inside destination {target}", src)

    _ensure_dir(target, src)
    return _copy_tree(src, target, options, level=1)


def _copy_tree(src: Path, dest: Path, options: CopyOptions, level: int) -> int:
    try:
        entries = list(src.iterdir())
    except OSError as err:
        raise from_os_error(err, "read directory", src) from err

    copied = 0
    for entry in entries:
        target = dest / entry.name

        if entry.is_dir():
            _ensure_dir(target, entry)
            if options.depth == 0 or level < options.depth:
                copied += _copy_tree(entry, target, options, level + 1)
            continue

        copied += _copy_file(entry, target, options)

    return copied


def _copy_file(src: Path, target: Path, options: CopyOptions) -> int:
    if target.is_dir():
        raise ConflictError(f"Cannot copy file {src} over existing directory {target}", target)

    if target.exists() and not options.overwrite:
        if options.skip_exist:
            logger.debug("Skipping existing file", path=str(target))
            return 0
        raise ConflictError(f"Destination file already exists: {target}", target)

    try:
        size = src.stat().st_size
        shutil.copy2(src, target)
    except OSError as err:
        raise from_os_error(err, "copy file", src) from err
    return size
