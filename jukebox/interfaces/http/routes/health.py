from __future__ import annotations

from flask import Blueprint, current_app, jsonify

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    checks = {}

    collaborator = current_app.extensions.get("spotify_collaborator")
    checks["spotify"] = "ok" if collaborator else "unavailable"

    service = current_app.extensions.get("playlist_service")
    checks["playlist"] = service.playlist.id if service else "unavailable"

    checks["voting"] = "ok" if current_app.extensions.get("vote_aggregator") else "unavailable"

    healthy = all(value != "unavailable" for value in checks.values())
    status = 200 if healthy else 503
    return jsonify({"status": "ok" if healthy else "degraded", "checks": checks}), status
