"""Run a single retention sweep from the command line.

With no arguments the configuration comes from the built-in defaults, an
optional YAML file named by ``SWEEP_CONFIG_PATH`` and ``SWEEP_*`` environment
variables. The summary is printed to stdout; per-item failures never change
the exit code.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from .config import load_config, load_log_level
from .report import format_summary
from .sweep import run_sweep


LOGGER = logging.getLogger("retention_sweeper")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Delete files older than the retention window")
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (overrides SWEEP_CONFIG_PATH)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report eligible files without deleting them",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        log_level = load_log_level()
        config = load_config(args.config)
    except (OSError, ValueError) as exc:
        print(f"[retention-sweeper] Invalid configuration: {exc}", file=sys.stderr)
        return EXIT_BAD_CONFIG

    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        stream=sys.stdout,
        format="%(message)s",
    )

    if args.dry_run:
        config = replace(config, dry_run=True)

    try:
        stats = run_sweep(config)
    except Exception:
        LOGGER.error("[SWEEP]: Sweep aborted", exc_info=True)
        return EXIT_FAILURE

    print(format_summary(stats, dry_run=config.dry_run))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
