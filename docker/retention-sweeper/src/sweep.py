from __future__ import annotations

import logging
import time

from .config import SweepConfig
from .deleter import delete_candidate
from .filesystem import FileSystem, LocalFileSystem
from .models import SweepStats
from .retention import is_eligible
from .scanner import iter_files
from .volumes import RootResolver, VolumeRootResolver


LOGGER = logging.getLogger("retention_sweeper")


def run_sweep(
    config: SweepConfig,
    *,
    fs: FileSystem | None = None,
    now: float | None = None,
    resolver: RootResolver | None = None,
) -> SweepStats:
    """Run one retention pass over every configured root and return its statistics.

    Per-item failures are logged and counted; anything other than an
    ``OSError`` raised while scanning or deleting propagates to the caller.
    """
    fs = fs or LocalFileSystem()
    resolver = resolver or VolumeRootResolver()
    now = time.time() if now is None else float(now)
    stats = SweepStats()

    def _count_error(path: str, exc: OSError) -> None:
        stats.errors += 1

    for root in config.directories:
        target = resolver(root)
        if target is None or not fs.exists(target):
            LOGGER.warning("[SWEEP]: Directory does not exist: %s", root)
            stats.missing_roots += 1
            continue

        LOGGER.info("[SWEEP]: Scanning %s", target)
        for candidate in iter_files(target, fs, _count_error):
            stats.files_scanned += 1
            if is_eligible(candidate, config, now):
                delete_candidate(candidate, dry_run=config.dry_run, stats=stats, fs=fs)

    LOGGER.info(
        "[SWEEP]: Finished: scanned=%d deleted=%d freed=%d would_delete=%d errors=%d",
        stats.files_scanned,
        stats.files_deleted,
        stats.bytes_freed,
        stats.files_would_delete,
        stats.errors,
    )
    return stats
