from __future__ import annotations

from .models import SweepStats


RULE = "=" * 50


def format_bytes_mb(num_bytes: int) -> str:
    return f"{num_bytes / 1024 / 1024:.2f} MB"


def format_summary(stats: SweepStats, *, dry_run: bool = False) -> str:
    lines = [
        RULE,
        "CLEANUP SUMMARY (dry run)" if dry_run else "CLEANUP SUMMARY",
        RULE,
        f"Files scanned: {stats.files_scanned}",
        f"Files deleted: {stats.files_deleted}",
        f"Space freed: {format_bytes_mb(stats.bytes_freed)}",
    ]
    if dry_run:
        lines.append(f"Files that would be deleted: {stats.files_would_delete}")
        lines.append(f"Space that would be freed: {format_bytes_mb(stats.bytes_would_free)}")
    if stats.missing_roots:
        lines.append(f"Missing directories: {stats.missing_roots}")
    if stats.errors:
        lines.append(f"Errors: {stats.errors}")
    lines.append(RULE)
    return "\n".join(lines)
