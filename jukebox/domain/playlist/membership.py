"""Lazy, page-by-page membership checks against the remote playlist."""

from __future__ import annotations

import enum
import logging
from typing import Iterator

from jukebox.errors import EndOfPages
from jukebox.models import PlaylistPage, PlaylistRef

logger = logging.getLogger(__name__)


class Membership(enum.Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


class _LookupFailed(Exception):
    pass


class MembershipChecker:
    """Answers "is this track already queued?" without loading the whole playlist.

    Each lookup restarts from the playlist's cached first page and fetches
    further pages only while the track has not been found.
    """

    def __init__(self, pager):
        self._pager = pager

    def iter_pages(self, playlist: PlaylistRef) -> Iterator[PlaylistPage]:
        """Yield pages starting at the cached first page.

        Stops quietly at the last page. Any other paging failure is raised as
        _LookupFailed once the pages fetched so far have been consumed.
        """
        page = playlist.first_page
        while True:
            yield page
            try:
                page = self._pager.next_page(page)
            except EndOfPages:
                return
            except Exception as exc:
                raise _LookupFailed(str(exc)) from exc

    def check(self, track_id: str, playlist: PlaylistRef) -> Membership:
        pages_scanned = 0
        try:
            for page in self.iter_pages(playlist):
                pages_scanned += 1
                if track_id in page.track_ids:
                    logger.debug("Track %s found on page %d of %r", track_id, pages_scanned, playlist)
                    return Membership.FOUND
        except _LookupFailed as exc:
            logger.warning(
                "Playlist lookup for track %s failed after %d page(s): %s",
                track_id, pages_scanned, exc,
            )
            return Membership.LOOKUP_FAILED
        return Membership.NOT_FOUND

    def contains(self, track_id: str, playlist: PlaylistRef) -> bool:
        # A failed lookup reads as "not in playlist"
        return self.check(track_id, playlist) is Membership.FOUND


__all__ = ["Membership", "MembershipChecker"]
