"""Shared test stubs for the Spotify collaborator, spotipy and timers."""

from typing import Dict, Iterable, List, Optional, Sequence

from jukebox.errors import CollaboratorError, EndOfPages
from jukebox.models import PlaylistPage, PlaylistRef, Track


def make_track(track_id: str, title: str = "Song", artist: str = "Artist") -> Track:
    return Track(id=track_id, title=title, artists=[artist], uri=f"spotify:track:{track_id}")


def make_playlist(pages: Sequence[Sequence[str]], playlist_id: str = "pl1") -> PlaylistRef:
    """Chain `pages` of track IDs into PlaylistPages linked by next_url."""
    built: List[PlaylistPage] = []
    for index, track_ids in enumerate(pages):
        has_next = index + 1 < len(pages)
        built.append(PlaylistPage(
            track_ids=list(track_ids),
            next_url=f"page-{index + 1}" if has_next else None,
            raw={"page": index},
        ))
    first = built[0] if built else PlaylistPage(track_ids=[])
    playlist = PlaylistRef(id=playlist_id, name="Office", first_page=first)
    return playlist, built


class FakeCollaborator:
    """In-memory collaborator with call counters for the domain services."""

    def __init__(
        self,
        search_results: Optional[Iterable[Track]] = None,
        pages: Optional[Sequence[PlaylistPage]] = None,
        page_error_at: Optional[int] = None,
        search_error: Optional[Exception] = None,
        add_error: Optional[Exception] = None,
        skip_error: Optional[Exception] = None,
    ):
        self.search_results = list(search_results or [])
        self.pages = list(pages or [])
        self.page_error_at = page_error_at
        self.search_error = search_error
        self.add_error = add_error
        self.skip_error = skip_error

        self.search_calls: List[str] = []
        self.next_page_calls = 0
        self.add_calls: List[tuple] = []
        self.skip_calls = 0

    def search(self, query: str) -> List[Track]:
        self.search_calls.append(query)
        if self.search_error:
            raise self.search_error
        return list(self.search_results)

    def next_page(self, page: PlaylistPage) -> PlaylistPage:
        self.next_page_calls += 1
        if not page.next_url:
            raise EndOfPages()
        index = page.raw["page"] + 1
        if self.page_error_at is not None and index >= self.page_error_at:
            raise CollaboratorError("page fetch failed", http_status=500)
        return self.pages[index]

    def add_tracks(self, playlist_id: str, track_ids: Sequence[str]) -> None:
        self.add_calls.append((playlist_id, list(track_ids)))
        if self.add_error:
            raise self.add_error

    def skip_current_track(self) -> None:
        self.skip_calls += 1
        if self.skip_error:
            raise self.skip_error


class ManualTimer:
    def __init__(self, interval: float, callback):
        self.interval = interval
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        """Run the callback as the timer thread would, even if cancelled."""
        self.callback()


class ManualTimerFactory:
    """Records every timer the aggregator arms so tests can fire them by hand."""

    def __init__(self):
        self.timers: List[ManualTimer] = []

    def __call__(self, interval: float, callback) -> ManualTimer:
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> ManualTimer:
        return self.timers[-1]


def track_payload(track_id: str, name: str = "Song", artist: str = "Artist") -> Dict:
    return {
        "id": track_id,
        "name": name,
        "artists": [{"name": artist}],
        "uri": f"spotify:track:{track_id}",
    }


class SpotipyStub:
    """Minimal spotipy.Spotify stand-in recording the calls the collaborator makes."""

    def __init__(self, search_response=None, playlist_response=None, next_responses=None, error=None):
        self.search_response = search_response or {"tracks": {"items": []}}
        self.playlist_response = playlist_response
        self.next_responses = list(next_responses or [])
        self.error = error
        self.calls: List[tuple] = []

    def _record(self, *call):
        self.calls.append(call)
        if self.error:
            raise self.error

    def current_user(self):
        self._record("current_user")
        return {"id": "owner-1"}

    def search(self, q, type=None, **kwargs):
        self._record("search", q, type)
        return self.search_response

    def playlist(self, playlist_id):
        self._record("playlist", playlist_id)
        return self.playlist_response

    def user_playlist_create(self, user, name, public=True, description=""):
        self._record("user_playlist_create", user, name, public, description)
        return {"id": "new-pl", "name": name, "tracks": {"items": [], "next": None}}

    def next(self, result):
        self._record("next", result.get("next"))
        return self.next_responses.pop(0) if self.next_responses else None

    def playlist_add_items(self, playlist_id, items):
        self._record("playlist_add_items", playlist_id, items)
        return {"snapshot_id": "snap"}

    def next_track(self, device_id=None):
        self._record("next_track")
