from __future__ import annotations

import logging

from .filesystem import FileSystem
from .models import (
    OUTCOME_DELETE_FAILED,
    OUTCOME_DELETED,
    OUTCOME_WOULD_DELETE,
    FileCandidate,
    SweepStats,
)


LOGGER = logging.getLogger("retention_sweeper")


def delete_candidate(candidate: FileCandidate, *, dry_run: bool, stats: SweepStats, fs: FileSystem) -> str:
    if dry_run:
        LOGGER.info("[SWEEP]: [DRY RUN] Would delete %s (%d bytes)", candidate.path, candidate.size)
        stats.files_would_delete += 1
        stats.bytes_would_free += candidate.size
        return OUTCOME_WOULD_DELETE

    try:
        fs.remove(candidate.path)
    except OSError as exc:
        LOGGER.warning("[SWEEP]: Failed to delete %s: %s", candidate.path, exc)
        stats.errors += 1
        return OUTCOME_DELETE_FAILED

    LOGGER.info("[SWEEP]: Deleted %s (%d bytes)", candidate.path, candidate.size)
    stats.files_deleted += 1
    stats.bytes_freed += candidate.size
    return OUTCOME_DELETED
