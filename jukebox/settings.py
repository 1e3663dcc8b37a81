#!/usr/bin/env python
"""
Centralized configuration schema.

Merges defaults from config.Config with runtime overrides and validates
the values the jukebox services depend on.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from config import Config

AMBIGUOUS_POLICIES = {"ignore", "raise"}


class AppSettings(BaseModel):
    """Application-wide settings for the Spotify collaborator and voting."""

    model_config = ConfigDict(extra="ignore")

    # Spotify credentials
    spotify_client_id: Optional[str] = None
    spotify_client_secret: Optional[str] = None
    spotify_redirect_uri: Optional[str] = None
    spotify_oauth_cache_path: Optional[str] = None
    spotify_scopes: List[str] = Field(
        default_factory=lambda: [
            "playlist-modify-private",
            "playlist-modify-public",
            "user-modify-playback-state",
        ]
    )

    # Shared playlist
    playlist_id: Optional[str] = None
    playlist_name: str = "echo office playlist"

    # Voting and search
    skip_vote_window_seconds: float = 10.0
    ambiguous_search_policy: str = "ignore"

    @field_validator("skip_vote_window_seconds", mode="before")
    @classmethod
    def _coerce_window(cls, value: object) -> float:
        try:
            seconds = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            return 10.0
        return max(1.0, seconds)

    @field_validator("ambiguous_search_policy", mode="before")
    @classmethod
    def _validate_policy(cls, value: object) -> str:
        normalized = str(value or "").strip().lower()
        if normalized not in AMBIGUOUS_POLICIES:
            return "ignore"
        return normalized

    @field_validator("playlist_id", "spotify_redirect_uri", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @property
    def uses_user_auth(self) -> bool:
        return bool(self.spotify_redirect_uri)


def load_app_settings(overrides: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Load settings merging config defaults with optional runtime overrides."""
    data: Dict[str, Any] = {
        "spotify_client_id": Config.SPOTIPY_CLIENT_ID,
        "spotify_client_secret": Config.SPOTIPY_CLIENT_SECRET,
        "spotify_redirect_uri": Config.SPOTIPY_REDIRECT_URI,
        "spotify_oauth_cache_path": Config.SPOTIFY_OAUTH_CACHE_PATH,
        "playlist_id": Config.SPOTIFY_PLAYLIST_ID,
        "playlist_name": Config.SPOTIFY_PLAYLIST_NAME,
        "skip_vote_window_seconds": Config.SKIP_VOTE_WINDOW_SECONDS,
        "ambiguous_search_policy": Config.AMBIGUOUS_SEARCH_POLICY,
    }
    if overrides:
        data.update(overrides)
    return AppSettings.model_validate(data)


__all__ = [
    "AppSettings",
    "load_app_settings",
]
