#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    # Spotify API
    SPOTIPY_CLIENT_ID = os.environ.get('SPOTIPY_CLIENT_ID')
    SPOTIPY_CLIENT_SECRET = os.environ.get('SPOTIPY_CLIENT_SECRET')
    # Skipping and playlist edits need a user token; without a redirect URI we
    # fall back to client credentials (read-only catalog access).
    SPOTIPY_REDIRECT_URI = os.environ.get('SPOTIPY_REDIRECT_URI')
    SPOTIFY_OAUTH_CACHE_PATH = os.getenv(
        'SPOTIFY_OAUTH_CACHE_PATH', os.path.join(basedir, '.spotify-token-cache')
    )

    # Shared playlist: reuse an existing one by ID, or create one by name
    SPOTIFY_PLAYLIST_ID = os.getenv('SPOTIFY_PLAYLIST_ID') or None
    SPOTIFY_PLAYLIST_NAME = os.getenv('SPOTIFY_PLAYLIST_NAME', 'echo office playlist')

    # Skip voting
    # Seconds, fractions allowed; AppSettings coerces and clamps the raw value
    SKIP_VOTE_WINDOW_SECONDS = os.getenv('SKIP_VOTE_WINDOW_SECONDS', '10')

    # 'ignore' drops searches that do not match exactly one track, 'raise' reports them
    AMBIGUOUS_SEARCH_POLICY = os.getenv('AMBIGUOUS_SEARCH_POLICY', 'ignore')

    # HTTP
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', 'http://localhost:3000')
    PORT = _get_int('PORT', 5000)

    # Runtime behavior
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
