"""Shared playlist routes: queue a track by title/artist, check membership."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from jukebox.errors import AmbiguousSearchResult, CollaboratorError, DuplicateTrack
from jukebox.observability.metrics import record_track_request

logger = logging.getLogger(__name__)

playlist_bp = Blueprint('playlist_bp', __name__, url_prefix='/api/playlist')


def _service():
    return current_app.extensions.get('playlist_service')


def _unavailable():
    return jsonify({
        'error': 'playlist_unavailable',
        'message': 'Playlist service is not configured.',
    }), 503


@playlist_bp.route('/tracks', methods=['POST'])
def add_track():
    service = _service()
    if service is None:
        return _unavailable()

    payload = request.get_json(silent=True) or {}
    title = str(payload.get('title') or '').strip()
    artist = str(payload.get('artist') or '').strip()
    if not title or not artist:
        return jsonify({'error': 'invalid_request', 'message': 'title and artist are required'}), 400

    try:
        track = service.add_to_playlist(title, artist)
    except DuplicateTrack as exc:
        record_track_request('duplicate')
        return jsonify({**exc.to_dict(), 'track_id': exc.track_id}), 409
    except AmbiguousSearchResult as exc:
        record_track_request('ambiguous')
        return jsonify({
            **exc.to_dict(),
            'candidates': [candidate.to_dict() for candidate in exc.candidates],
        }), 422
    except CollaboratorError as exc:
        record_track_request('error')
        logger.error("Adding %r by %r failed: %s", title, artist, exc)
        return jsonify(exc.to_dict()), 502

    if track is None:
        record_track_request('ignored')
        return jsonify({'status': 'ignored', 'message': 'Search did not match exactly one track.'}), 200

    record_track_request('added')
    return jsonify({'status': 'added', 'track': track.to_dict()}), 201


@playlist_bp.route('/tracks/<track_id>', methods=['GET'])
def track_membership(track_id: str):
    service = _service()
    if service is None:
        return _unavailable()
    return jsonify({'track_id': track_id, 'in_playlist': service.contains(track_id)})
