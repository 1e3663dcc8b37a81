import os
import logging
from datetime import datetime
from uuid import uuid4

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Flask specific imports ---
from flask import Flask, request, g
from flask_cors import CORS

from config import Config
from jukebox.clients import SpotifyCollaborator, open_playlist
from jukebox.domain.playlist import PlaylistService
from jukebox.domain.voting import VoteAggregator
from jukebox.errors import CollaboratorError
from jukebox.interfaces.http.routes import health_bp, playlist_bp, votes_bp
from jukebox.observability import configure_structured_logging, metrics_blueprint, record_vote_outcome
from jukebox.settings import load_app_settings


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is set
      - Werkzeug/Flask loggers routed to root (no extra console spam)

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def create_app(settings=None, collaborator=None, playlist=None, timer_factory=None):
    """Build the Flask app. Collaborator, playlist and timer factory may be injected."""
    app = Flask(__name__)
    app.config.from_object(Config)
    settings = settings or load_app_settings()
    app.extensions['settings'] = settings
    configure_structured_logging(app)

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get('X-Request-ID') or uuid4().hex

    @app.after_request
    def _inject_request_id(response):
        if getattr(g, 'request_id', None):
            response.headers.setdefault('X-Request-ID', g.request_id)
        return response

    allowed_origins = sorted({
        origin.strip()
        for origin in Config.CORS_ALLOWED_ORIGINS
        if origin and origin.strip() and origin.strip() != "*"
    })
    CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

    app.extensions['spotify_collaborator'] = None
    app.extensions['playlist_service'] = None
    app.extensions['vote_aggregator'] = None
    try:
        if collaborator is None:
            collaborator = SpotifyCollaborator(settings)
        if playlist is None:
            playlist = open_playlist(collaborator, settings)
    except CollaboratorError as e:
        app.logger.warning(
            "Spotify collaborator not initialized; playlist and voting features unavailable: %s",
            e,
        )
    else:
        app.extensions['spotify_collaborator'] = collaborator
        app.extensions['playlist_service'] = PlaylistService(
            collaborator,
            playlist,
            ambiguous_search_policy=settings.ambiguous_search_policy,
        )
        app.extensions['vote_aggregator'] = VoteAggregator(
            collaborator,
            window_seconds=settings.skip_vote_window_seconds,
            timer_factory=timer_factory,
            on_resolved=record_vote_outcome,
        )
        app.logger.info(
            "Jukebox ready: playlist=%r, skip window=%.1fs",
            playlist, settings.skip_vote_window_seconds,
        )

    # --- Register Blueprints ---
    app.register_blueprint(playlist_bp)
    app.register_blueprint(votes_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    return app


if __name__ == '__main__':
    # In debug with reloader, only configure file logging in the child process
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'log')
    if not Config.DEBUG or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    if not Config.SPOTIPY_CLIENT_ID or not Config.SPOTIPY_CLIENT_SECRET:
        logger.warning("Spotify API client ID or client secret not found in environment variables.")
        logger.warning("Please set SPOTIPY_CLIENT_ID and SPOTIPY_CLIENT_SECRET for full functionality.")
    if not Config.SPOTIPY_REDIRECT_URI:
        logger.warning("SPOTIPY_REDIRECT_URI not set; skipping and playlist edits need a user token.")

    app = create_app()
    # Route app.logger through root handlers, keep levels consistent
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True
    logger.info("Starting Flask application...")
    # Threaded so vote requests are served while add-to-playlist calls wait on Spotify
    app.run(debug=Config.DEBUG, host='0.0.0.0', port=Config.PORT, threaded=True)
