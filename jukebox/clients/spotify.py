# jukebox/clients/spotify.py
import logging
import threading
from typing import Any, Callable, List, Sequence

import spotipy
from spotipy.exceptions import SpotifyException
from spotipy.oauth2 import SpotifyClientCredentials, SpotifyOAuth

from jukebox.errors import CollaboratorError, EndOfPages
from jukebox.models import PlaylistPage, PlaylistRef, Track
from jukebox.settings import AppSettings

logger = logging.getLogger(__name__)

PLAYLIST_DESCRIPTION = "echo office playlist"


class SpotifyCollaborator:
    """Thin call-through to the Spotify Web API used by the jukebox services.

    Every failure surfaces as CollaboratorError so the domain layer never sees
    spotipy types. A 401 gets one credential refresh before giving up.
    """

    def __init__(self, settings: AppSettings, spotify_client=None):
        self._settings = settings
        self._spotify_client_lock = threading.RLock()

        self.sp = spotify_client
        if not self.sp:
            self.authenticate()
        else:
            logger.info("Spotipy client injected into SpotifyCollaborator.")

    def authenticate(self, *, log_success_as_debug: bool = False) -> "spotipy.Spotify":
        """Build a spotipy client from settings, replacing any previous one."""
        settings = self._settings
        if not settings.spotify_client_id or not settings.spotify_client_secret:
            raise CollaboratorError("Spotify client ID and secret are not configured")
        with self._spotify_client_lock:
            try:
                if settings.uses_user_auth:
                    auth_manager = SpotifyOAuth(
                        client_id=settings.spotify_client_id,
                        client_secret=settings.spotify_client_secret,
                        redirect_uri=settings.spotify_redirect_uri,
                        scope=" ".join(settings.spotify_scopes),
                        cache_path=settings.spotify_oauth_cache_path,
                        open_browser=False,
                    )
                else:
                    auth_manager = SpotifyClientCredentials(
                        client_id=settings.spotify_client_id,
                        client_secret=settings.spotify_client_secret,
                    )
                client = spotipy.Spotify(auth_manager=auth_manager)
            except Exception as exc:
                logger.error("Failed to initialize Spotipy client: %s", exc, exc_info=True)
                raise CollaboratorError(f"Spotify authentication failed: {exc}", cause=exc) from exc
            self.sp = client
            message = "Spotipy client initialized (%s)."
            mode = "user auth" if settings.uses_user_auth else "client credentials"
            if log_success_as_debug:
                logger.debug(message, mode)
            else:
                logger.info(message, mode)
            return client

    def _call_spotify(self, action: str, call: Callable[[], Any]) -> Any:
        try:
            return call()
        except SpotifyException as exc:
            if exc.http_status == 401:
                logger.warning('Spotify token expired during %s. Attempting to refresh credentials.', action)
                self.authenticate(log_success_as_debug=True)
                try:
                    return call()
                except SpotifyException as retry_exc:
                    logger.error('Spotify API call failed after token refresh during %s: %s', action, retry_exc)
                    raise CollaboratorError(
                        f"Spotify API call failed during {action}: {retry_exc.msg}",
                        http_status=retry_exc.http_status,
                        cause=retry_exc,
                    ) from retry_exc
            logger.error('Spotify API call failed during %s: %s', action, exc)
            raise CollaboratorError(
                f"Spotify API call failed during {action}: {exc.msg}",
                http_status=exc.http_status,
                cause=exc,
            ) from exc
        except CollaboratorError:
            raise
        except Exception as exc:
            logger.error('Unexpected error during %s: %s', action, exc, exc_info=True)
            raise CollaboratorError(f"Unexpected error during {action}: {exc}", cause=exc) from exc

    def current_user_id(self) -> str:
        user = self._call_spotify('fetch current user', lambda: self.sp.current_user())
        return user['id']

    def search(self, query: str) -> List[Track]:
        results = self._call_spotify(
            f'search tracks for {query!r}',
            lambda: self.sp.search(q=query, type='track'),
        )
        tracks = (results or {}).get('tracks')
        if not tracks:
            return []
        return [Track.from_payload(item) for item in tracks.get('items', []) if item and item.get('id')]

    def get_playlist(self, playlist_id: str) -> PlaylistRef:
        payload = self._call_spotify(
            f'fetch playlist {playlist_id}',
            lambda: self.sp.playlist(playlist_id),
        )
        return PlaylistRef.from_payload(payload)

    def create_playlist(self, owner_id: str, name: str, description: str = PLAYLIST_DESCRIPTION) -> PlaylistRef:
        payload = self._call_spotify(
            f'create playlist {name!r}',
            lambda: self.sp.user_playlist_create(owner_id, name, public=False, description=description),
        )
        logger.info("Created playlist %s (%s) for user %s", payload.get('name'), payload.get('id'), owner_id)
        return PlaylistRef.from_payload(payload)

    def next_page(self, page: PlaylistPage) -> PlaylistPage:
        """Fetch the page after `page`; raises EndOfPages when there is none."""
        if not page.next_url or page.raw is None:
            raise EndOfPages()
        payload = self._call_spotify('fetch next playlist page', lambda: self.sp.next(page.raw))
        if not payload:
            raise EndOfPages()
        return PlaylistPage.from_payload(payload)

    def add_tracks(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        self._call_spotify(
            f'add {len(track_ids)} track(s) to playlist {playlist_id}',
            lambda: self.sp.playlist_add_items(playlist_id, list(track_ids)),
        )

    def skip_current_track(self) -> None:
        self._call_spotify('skip current track', lambda: self.sp.next_track())


def open_playlist(collaborator: SpotifyCollaborator, settings: AppSettings) -> PlaylistRef:
    """Resolve the shared playlist: fetch it by ID, or create it for the current user."""
    if settings.playlist_id:
        playlist = collaborator.get_playlist(settings.playlist_id)
        logger.info("Using existing playlist %r", playlist)
        return playlist
    owner_id = collaborator.current_user_id()
    return collaborator.create_playlist(owner_id, settings.playlist_name)


__all__ = ["SpotifyCollaborator", "open_playlist", "PLAYLIST_DESCRIPTION"]
