"""Clients for external services."""

from .spotify import SpotifyCollaborator, open_playlist

__all__ = ["SpotifyCollaborator", "open_playlist"]
