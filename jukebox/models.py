# jukebox/models.py

import dataclasses
from typing import Any, Dict, List, Optional


@dataclasses.dataclass(eq=False)
class Track:
    """
    A catalog track. Identity is the Spotify ID; title and artists are display only.
    """
    id: str
    title: str
    artists: List[str] = dataclasses.field(default_factory=list)
    uri: str | None = None

    def __eq__(self, other):
        if not isinstance(other, Track):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return f"Track(id='{self.id}', title='{self.title}', artists={', '.join(self.artists)})"

    @classmethod
    def from_payload(cls, item: Dict[str, Any]) -> "Track":
        return cls(
            id=item['id'],
            title=item.get('name', 'Unknown Title'),
            artists=[a.get('name', 'Unknown Artist') for a in item.get('artists', [])],
            uri=item.get('uri'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True)
class PlaylistPage:
    """
    One page of a playlist's track listing plus the cursor to the next page.
    """
    track_ids: List[str]
    next_url: Optional[str] = None
    # Raw collaborator payload, handed back to it when fetching the next page
    raw: Optional[Dict[str, Any]] = dataclasses.field(default=None, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PlaylistPage":
        track_ids = []
        for item in payload.get('items', []):
            # Local files and removed tracks come back with track=None or id=None
            track = item.get('track') or {}
            if track.get('id'):
                track_ids.append(track['id'])
        return cls(track_ids=track_ids, next_url=payload.get('next'), raw=payload)


@dataclasses.dataclass(frozen=True)
class PlaylistRef:
    """
    Handle to the shared remote playlist: its ID plus the cached first page.
    """
    id: str
    name: str
    first_page: PlaylistPage

    def __repr__(self):
        return f"PlaylistRef(id='{self.id}', name='{self.name}')"

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PlaylistRef":
        return cls(
            id=payload['id'],
            name=payload.get('name', ''),
            first_page=PlaylistPage.from_payload(payload.get('tracks') or {}),
        )
