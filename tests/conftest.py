import os
import sys

import pytest

# Ensure project root is on sys.path so 'app', 'config', and 'jukebox' import correctly
_TESTS_DIR = os.path.dirname(__file__)
_ROOT_DIR = os.path.abspath(os.path.join(_TESTS_DIR, os.pardir))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from tests.support import stubs as test_stubs


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Ensure a clean env for tests; no real Spotify credentials or playlist."""
    monkeypatch.setenv("SPOTIPY_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "test-client-secret")
    monkeypatch.delenv("SPOTIPY_REDIRECT_URI", raising=False)
    monkeypatch.delenv("SPOTIFY_PLAYLIST_ID", raising=False)
    monkeypatch.delenv("AMBIGUOUS_SEARCH_POLICY", raising=False)
    yield


@pytest.fixture
def timers():
    return test_stubs.ManualTimerFactory()


@pytest.fixture
def playlist_pages():
    return test_stubs.make_playlist([["t1", "t2"], ["t3"], ["t4", "t5"]])


@pytest.fixture
def collaborator(playlist_pages):
    _, pages = playlist_pages
    return test_stubs.FakeCollaborator(pages=pages)


@pytest.fixture
def app(collaborator, playlist_pages, timers):
    import app as app_module
    from jukebox.settings import load_app_settings

    playlist, _ = playlist_pages
    application = app_module.create_app(
        settings=load_app_settings({"skip_vote_window_seconds": 10}),
        collaborator=collaborator,
        playlist=playlist,
        timer_factory=timers,
    )
    yield application


@pytest.fixture
def client(app):
    return app.test_client()
