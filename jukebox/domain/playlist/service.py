#!/usr/bin/env python
"""
Add-to-playlist orchestration: search the catalog, dedupe, then append.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote_plus

from jukebox.errors import AmbiguousSearchResult, DuplicateTrack
from jukebox.models import PlaylistRef, Track
from .membership import MembershipChecker

logger = logging.getLogger(__name__)


def build_search_query(title: str, artist: str) -> str:
    return quote_plus(f"{title} - {artist}")


class PlaylistService:
    def __init__(
        self,
        collaborator,
        playlist: PlaylistRef,
        membership: Optional[MembershipChecker] = None,
        ambiguous_search_policy: str = "ignore",
    ):
        self.collaborator = collaborator
        self.playlist = playlist
        self.membership = membership or MembershipChecker(collaborator)
        self.ambiguous_search_policy = ambiguous_search_policy

    def add_to_playlist(self, title: str, artist: str) -> Optional[Track]:
        """Queue the single catalog match for `title` by `artist`.

        Returns the added track, or None when the search did not match exactly
        one track and the policy is "ignore". Raises DuplicateTrack when the
        match is already queued. Collaborator errors propagate unchanged.
        """
        query = build_search_query(title, artist)
        candidates = self.collaborator.search(query)

        if len(candidates) != 1:
            if self.ambiguous_search_policy == "raise":
                raise AmbiguousSearchResult(query, candidates)
            logger.info("Search %r matched %d tracks; nothing queued", query, len(candidates))
            return None

        track = candidates[0]
        if self.membership.contains(track.id, self.playlist):
            raise DuplicateTrack(track.id)

        self.collaborator.add_tracks(self.playlist.id, [track.id])
        logger.info("Queued %r on %r", track, self.playlist)
        return track

    def contains(self, track_id: str) -> bool:
        return self.membership.contains(track_id, self.playlist)


__all__ = ["PlaylistService", "build_search_query"]
