from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, generate_latest

from jukebox.domain.voting import VoteOutcome

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

VOTES = Counter(
    "jukebox_votes_total",
    "Skip/keep votes received by the API.",
    ["kind"],
)
VOTE_OUTCOMES = Counter(
    "jukebox_vote_outcomes_total",
    "Resolved skip windows by outcome.",
    ["outcome"],
)
TRACK_REQUESTS = Counter(
    "jukebox_tracks_added_total",
    "Add-to-playlist requests by result.",
    ["result"],
)


def record_vote(kind: str) -> None:
    VOTES.labels(kind=kind).inc()


def record_vote_outcome(outcome: VoteOutcome) -> None:
    VOTE_OUTCOMES.labels(outcome="skipped" if outcome.skipped else "kept").inc()


def record_track_request(result: str) -> None:
    TRACK_REQUESTS.labels(result=result).inc()


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
