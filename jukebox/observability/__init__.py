# noqa: D104 - package initialization
from .logging import configure_structured_logging  # noqa: F401
from .metrics import metrics_blueprint, record_track_request, record_vote, record_vote_outcome  # noqa: F401
