import importlib


def test_load_app_settings_uses_current_config(monkeypatch):
    # Set overrides before (re)importing modules that read env
    monkeypatch.setenv("SPOTIPY_CLIENT_ID", "abc")
    monkeypatch.setenv("SPOTIPY_CLIENT_SECRET", "def")
    monkeypatch.setenv("SPOTIPY_REDIRECT_URI", "http://127.0.0.1:8888/callback")
    monkeypatch.setenv("SPOTIFY_PLAYLIST_ID", "pl42")
    monkeypatch.setenv("SKIP_VOTE_WINDOW_SECONDS", "15")
    monkeypatch.setenv("AMBIGUOUS_SEARCH_POLICY", "raise")

    import config as _config
    importlib.reload(_config)
    import jukebox.settings as settings
    importlib.reload(settings)

    s = settings.load_app_settings()

    assert s.spotify_client_id == _config.Config.SPOTIPY_CLIENT_ID == "abc"
    assert s.spotify_client_secret == "def"
    assert s.uses_user_auth is True
    assert s.playlist_id == "pl42"
    assert s.skip_vote_window_seconds == 15
    assert s.ambiguous_search_policy == "raise"


def test_defaults_without_env(monkeypatch):
    for name in (
        "SPOTIPY_REDIRECT_URI",
        "SPOTIFY_PLAYLIST_ID",
        "SPOTIFY_PLAYLIST_NAME",
        "SKIP_VOTE_WINDOW_SECONDS",
        "AMBIGUOUS_SEARCH_POLICY",
    ):
        monkeypatch.delenv(name, raising=False)

    import config as _config
    importlib.reload(_config)
    import jukebox.settings as settings
    importlib.reload(settings)

    s = settings.load_app_settings()
    assert s.uses_user_auth is False
    assert s.playlist_id is None
    assert s.playlist_name == "echo office playlist"
    assert s.skip_vote_window_seconds == 10
    assert s.ambiguous_search_policy == "ignore"


def test_invalid_window_env_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("SKIP_VOTE_WINDOW_SECONDS", "soon")

    import config as _config
    importlib.reload(_config)
    import jukebox.settings as settings
    importlib.reload(settings)

    assert settings.load_app_settings().skip_vote_window_seconds == 10.0


def test_fractional_window_env_is_kept(monkeypatch):
    monkeypatch.setenv("SKIP_VOTE_WINDOW_SECONDS", "2.5")

    import config as _config
    importlib.reload(_config)
    import jukebox.settings as settings
    importlib.reload(settings)

    assert _config.Config.SKIP_VOTE_WINDOW_SECONDS == "2.5"
    assert settings.load_app_settings().skip_vote_window_seconds == 2.5
