from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


OUTCOME_DELETED = "deleted"
OUTCOME_WOULD_DELETE = "would_delete"
OUTCOME_DELETE_FAILED = "delete_failed"


@dataclass(frozen=True)
class FileCandidate:
    path: str
    mtime: float
    size: int


@dataclass
class SweepStats:
    files_scanned: int = 0
    files_deleted: int = 0
    bytes_freed: int = 0
    files_would_delete: int = 0
    bytes_would_free: int = 0
    errors: int = 0
    missing_roots: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
