"""Error taxonomy shared by the domain services and the HTTP layer."""

from __future__ import annotations

from typing import Any, Optional, Sequence


class JukeboxError(Exception):
    """Base class for errors reported back to jukebox callers."""

    error_code = "jukebox_error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.error_code, "message": self.message}


class DuplicateTrack(JukeboxError):
    error_code = "duplicate_track"

    def __init__(self, track_id: str) -> None:
        super().__init__("Track already in playlist")
        self.track_id = track_id


class InsufficientVotes(JukeboxError):
    """Skip window closed without a strict majority. Informational, not a failure."""

    error_code = "insufficient_votes"

    def __init__(self, skip_count: int, keep_count: int) -> None:
        super().__init__("Not enough skip votes!")
        self.skip_count = skip_count
        self.keep_count = keep_count


class AmbiguousSearchResult(JukeboxError):
    error_code = "ambiguous_search"

    def __init__(self, query: str, candidates: Sequence[Any]) -> None:
        super().__init__(f"Search for {query!r} matched {len(candidates)} tracks")
        self.query = query
        self.candidates = list(candidates)


class CollaboratorError(JukeboxError):
    """Wraps any failure raised by the remote catalog/playlist service."""

    error_code = "collaborator_error"

    def __init__(
        self,
        message: str,
        *,
        http_status: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.http_status = http_status
        self.cause = cause


class EndOfPages(CollaboratorError):
    error_code = "end_of_pages"

    def __init__(self) -> None:
        super().__init__("No more pages")


__all__ = [
    "JukeboxError",
    "DuplicateTrack",
    "InsufficientVotes",
    "AmbiguousSearchResult",
    "CollaboratorError",
    "EndOfPages",
]
