"""Skip voting routes. Votes are fire-and-forget; the window resolves on its own."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from jukebox.observability.metrics import record_vote

votes_bp = Blueprint('votes_bp', __name__, url_prefix='/api/votes')


def _aggregator():
    return current_app.extensions.get('vote_aggregator')


def _unavailable():
    return jsonify({
        'error': 'voting_unavailable',
        'message': 'Skip voting is not configured.',
    }), 503


@votes_bp.route('', methods=['GET'])
def vote_status():
    aggregator = _aggregator()
    if aggregator is None:
        return _unavailable()
    return jsonify(aggregator.snapshot().to_dict())


@votes_bp.route('/skip', methods=['POST'])
def vote_skip():
    aggregator = _aggregator()
    if aggregator is None:
        return _unavailable()
    aggregator.record_skip()
    record_vote('skip')
    return jsonify(aggregator.snapshot().to_dict()), 202


@votes_bp.route('/keep', methods=['POST'])
def vote_keep():
    aggregator = _aggregator()
    if aggregator is None:
        return _unavailable()
    aggregator.record_keep()
    record_vote('keep')
    return jsonify(aggregator.snapshot().to_dict()), 202


@votes_bp.route('/reset', methods=['POST'])
def vote_reset():
    """Called by whoever observes the track change."""
    aggregator = _aggregator()
    if aggregator is None:
        return _unavailable()
    aggregator.reset()
    return jsonify(aggregator.snapshot().to_dict())
