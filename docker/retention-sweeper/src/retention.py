from __future__ import annotations

from typing import Iterable

from .config import SweepConfig
from .models import FileCandidate


SECONDS_PER_DAY = 60 * 60 * 24


def matches_pattern(path: str, patterns: Iterable[str]) -> bool:
    return any(pattern in path for pattern in patterns)


def age_days(mtime: float, now: float) -> float:
    return (now - mtime) / SECONDS_PER_DAY


def is_eligible(candidate: FileCandidate, config: SweepConfig, now: float) -> bool:
    """Return True when the candidate matches a pattern and is strictly older than the threshold."""
    if not matches_pattern(candidate.path, config.patterns):
        return False
    return age_days(candidate.mtime, now) > config.days_old
