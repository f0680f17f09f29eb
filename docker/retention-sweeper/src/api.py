from __future__ import annotations

from flask import Blueprint, jsonify, request

from .scheduler import SweepScheduler


def _parse_sweep_payload(payload: dict) -> bool | None:
    if not isinstance(payload, dict):
        raise ValueError("body must be an object")
    dry_run = payload.get("dry_run")
    if dry_run is not None and not isinstance(dry_run, bool):
        raise ValueError("dry_run must be a boolean")
    return dry_run


def create_api_blueprint(*, scheduler: SweepScheduler) -> Blueprint:
    blueprint = Blueprint("retention_sweeper_api", __name__)

    @blueprint.get("/health")
    def health() -> tuple:
        return (
            jsonify(
                {
                    "status": "ok",
                    "scheduler_running": scheduler.is_running,
                }
            ),
            200,
        )

    @blueprint.get("/config")
    def show_config() -> tuple:
        return jsonify(scheduler.config.to_dict()), 200

    @blueprint.get("/stats")
    def last_stats() -> tuple:
        if scheduler.last_run_at is None:
            return jsonify({"error": "no sweep has run yet"}), 404
        return (
            jsonify(
                {
                    "last_run_at": scheduler.last_run_at,
                    "stats": scheduler.last_stats.to_dict() if scheduler.last_stats else None,
                    "last_error": scheduler.last_error,
                }
            ),
            200,
        )

    @blueprint.post("/sweep")
    def trigger_sweep() -> tuple:
        payload = request.get_json(silent=True) or {}
        try:
            dry_run = _parse_sweep_payload(payload)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        stats = scheduler.run_once(dry_run=dry_run)
        if stats is None:
            return jsonify({"error": scheduler.last_error or "sweep failed"}), 500
        return jsonify({"status": "ok", "stats": stats.to_dict()}), 200

    return blueprint
