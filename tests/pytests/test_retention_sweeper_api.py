from __future__ import annotations

import importlib
import os
import sys
import time
from pathlib import Path

from flask import Flask


REPO_ROOT = Path(__file__).parents[2]
SWEEPER_ROOT = REPO_ROOT / "docker" / "retention-sweeper"
if str(SWEEPER_ROOT) not in sys.path:
    sys.path.append(str(SWEEPER_ROOT))

api = importlib.import_module("src.api")
config_module = importlib.import_module("src.config")
scheduler_module = importlib.import_module("src.scheduler")


def _write_old_file(path: Path, size: int) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    timestamp = time.time() - 60 * 60 * 24 * 30
    os.utime(path, (timestamp, timestamp))


def _build_test_client(root: Path):
    config = config_module.SweepConfig(directories=(str(root),), patterns=(".log",), days_old=7)
    scheduler = scheduler_module.SweepScheduler(config, check_interval_seconds=999)
    app = Flask(__name__)
    app.register_blueprint(api.create_api_blueprint(scheduler=scheduler), url_prefix="/api")
    return app.test_client()


def test_health_reports_scheduler_state(tmp_path: Path) -> None:
    client = _build_test_client(tmp_path)

    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.get_json() == {"status": "ok", "scheduler_running": False}


def test_config_endpoint_returns_active_config(tmp_path: Path) -> None:
    client = _build_test_client(tmp_path)

    payload = client.get("/api/config").get_json()
    assert payload["directories"] == [str(tmp_path)]
    assert payload["patterns"] == [".log"]
    assert payload["days_old"] == 7
    assert payload["dry_run"] is False


def test_stats_returns_404_before_first_sweep(tmp_path: Path) -> None:
    client = _build_test_client(tmp_path)

    response = client.get("/api/stats")
    assert response.status_code == 404
    assert response.get_json()["error"] == "no sweep has run yet"


def test_dry_run_sweep_then_real_sweep(tmp_path: Path) -> None:
    old_log = tmp_path / "old.log"
    _write_old_file(old_log, 512)
    client = _build_test_client(tmp_path)

    dry = client.post("/api/sweep", json={"dry_run": True})
    assert dry.status_code == 200
    assert dry.get_json()["stats"]["files_would_delete"] == 1
    assert old_log.exists() is True

    real = client.post("/api/sweep")
    assert real.status_code == 200
    assert real.get_json()["stats"]["files_deleted"] == 1
    assert real.get_json()["stats"]["bytes_freed"] == 512
    assert old_log.exists() is False

    stats = client.get("/api/stats").get_json()
    assert stats["stats"]["files_deleted"] == 1
    assert stats["last_error"] is None


def test_sweep_rejects_non_boolean_dry_run(tmp_path: Path) -> None:
    client = _build_test_client(tmp_path)

    response = client.post("/api/sweep", json={"dry_run": "yes"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "dry_run must be a boolean"


def test_create_app_wires_scheduler_from_environment(tmp_path: Path, monkeypatch) -> None:
    app_module = importlib.import_module("src.app")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SWEEP_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("SWEEP_CHECK_INTERVAL_SECONDS", "120")
    monkeypatch.setenv("SWEEP_API_PORT", "9300")

    created = []

    class _RecordingScheduler(scheduler_module.SweepScheduler):
        def __init__(self, config, *, check_interval_seconds: int = 3600, fs=None):
            super().__init__(config, check_interval_seconds=check_interval_seconds, fs=fs)
            created.append((config, check_interval_seconds))

        def start(self) -> None:
            self._running = True

    monkeypatch.setattr(app_module, "SweepScheduler", _RecordingScheduler)

    app = app_module.create_app()

    assert app.config["SWEEP_API_PORT"] == 9300
    assert created[0][0].directories == (str(tmp_path),)
    assert created[0][1] == 120
    health = app.test_client().get("/api/health").get_json()
    assert health["scheduler_running"] is True
