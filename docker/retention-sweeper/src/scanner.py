from __future__ import annotations

import logging
import os
from typing import Callable, Iterator

from .filesystem import FileSystem
from .models import FileCandidate


LOGGER = logging.getLogger("retention_sweeper")

ScanErrorHandler = Callable[[str, OSError], None]


def _list_entries(directory: str, fs: FileSystem, on_error: ScanErrorHandler | None) -> Iterator[str] | None:
    try:
        names = fs.list_dir(directory)
    except OSError as exc:
        LOGGER.warning("[SWEEP]: Cannot read directory %s: %s", directory, exc)
        if on_error is not None:
            on_error(directory, exc)
        return None
    return iter([os.path.join(directory, name) for name in names])


def iter_files(root: str, fs: FileSystem, on_error: ScanErrorHandler | None = None) -> Iterator[FileCandidate]:
    """Yield every regular file below ``root``, depth first in listing order.

    The walk keeps an explicit stack of directory iterators, so nesting depth
    is bounded by memory rather than the interpreter recursion limit.
    Symlinks are neither followed nor yielded, so link cycles cannot recurse.
    Unreadable directories and entries that fail to stat are logged, passed to
    ``on_error`` and skipped; only ``OSError`` is absorbed here.
    """
    first = _list_entries(root, fs, on_error)
    if first is None:
        return
    stack = [first]

    while stack:
        path = next(stack[-1], None)
        if path is None:
            stack.pop()
            continue

        try:
            entry = fs.stat(path)
        except OSError as exc:
            LOGGER.warning("[SWEEP]: Cannot stat %s: %s", path, exc)
            if on_error is not None:
                on_error(path, exc)
            continue

        if entry.is_symlink:
            LOGGER.debug("[SWEEP]: Skipping symlink %s", path)
            continue
        if entry.is_dir:
            children = _list_entries(path, fs, on_error)
            if children is not None:
                stack.append(children)
        elif entry.is_file:
            yield FileCandidate(path=path, mtime=entry.mtime, size=entry.size)
