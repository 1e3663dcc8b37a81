"""Route blueprints exposed via Flask."""

from .playlist import playlist_bp
from .votes import votes_bp
from .health import health_bp

__all__ = [
    "playlist_bp",
    "votes_bp",
    "health_bp",
]
