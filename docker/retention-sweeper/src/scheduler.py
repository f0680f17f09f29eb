from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone

from apscheduler.schedulers.background import BackgroundScheduler

from .config import SweepConfig
from .filesystem import FileSystem
from .models import SweepStats
from .sweep import run_sweep


LOGGER = logging.getLogger("retention_sweeper")


class SweepScheduler:
    def __init__(self, config: SweepConfig, *, check_interval_seconds: int = 3600, fs: FileSystem | None = None):
        self._config = config
        self._fs = fs
        self._check_interval_seconds = int(check_interval_seconds)
        self._scheduler = BackgroundScheduler()
        self._running = False
        self._lock = threading.Lock()
        self.last_stats: SweepStats | None = None
        self.last_run_at: str | None = None
        self.last_error: str | None = None
        self._scheduler.add_job(self.run_once, "interval", seconds=self._check_interval_seconds)

    @property
    def config(self) -> SweepConfig:
        return self._config

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running:
            return
        self._scheduler.start()
        self._running = True

    def stop(self) -> None:
        if not self._running:
            return
        self._scheduler.shutdown(wait=False)
        self._running = False

    def run_once(self, *, dry_run: bool | None = None) -> SweepStats | None:
        config = self._config if dry_run is None else replace(self._config, dry_run=dry_run)
        with self._lock:
            try:
                stats = run_sweep(config, fs=self._fs)
            except Exception as exc:
                LOGGER.warning("[SWEEP]: Scheduled sweep failed", exc_info=True)
                self.last_error = str(exc)
                self.last_run_at = datetime.now(timezone.utc).isoformat()
                return None

            self.last_stats = stats
            self.last_error = None
            self.last_run_at = datetime.now(timezone.utc).isoformat()
            return stats
