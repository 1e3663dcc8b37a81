"""Shared playlist services (membership, add-to-playlist)."""

from .membership import Membership, MembershipChecker
from .service import PlaylistService, build_search_query

__all__ = ["Membership", "MembershipChecker", "PlaylistService", "build_search_query"]
