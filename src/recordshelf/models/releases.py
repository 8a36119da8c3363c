"""
Release and track models.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..core.config import DEFAULTS


@dataclass
class Track:
    """One downloadable audio file belonging to a release."""
    id: Any
    title: str
    duration: Optional[float] = None
    track_number: int = 0
    path: Optional[str] = None  # Local /audio/ path once downloaded
    url: Optional[str] = None  # Remote audio URL before download

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the catalog's JSON shape."""
        data = {
            "id": self.id,
            "title": self.title,
            "duration": self.duration,
        }
        if self.path:
            data["path"] = self.path
        elif self.url:
            data["url"] = self.url
        data["trackNumber"] = self.track_number
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Track":
        return cls(
            id=data.get("id", data.get("trackId")),
            title=data.get("title", ""),
            duration=data.get("duration"),
            track_number=data.get("trackNumber", 0),
            path=data.get("path"),
            url=data.get("url"),
        )


@dataclass
class Release:
    """One catalog entry: an album, EP, single, or compilation."""
    id: str
    title: str
    artist: str
    url: str
    cover: str = ""
    type: str = DEFAULTS["RELEASE_TYPE"]
    release_date: str = DEFAULTS["RELEASE_DATE"]
    duration: str = DEFAULTS["DURATION"]
    tracks: Optional[List[Track]] = None
    # Keys from a persisted catalog that this model does not know about
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_single(self) -> bool:
        """Whether the release points at a single-track page."""
        return self.type == "single" or "/track/" in (self.url or "")

    @property
    def has_tracks(self) -> bool:
        return bool(self.tracks)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the catalog's JSON shape (camelCase keys)."""
        data = {
            "id": self.id,
            "title": self.title,
            "artist": self.artist,
            "releaseDate": self.release_date,
            "cover": self.cover,
            "url": self.url,
            "duration": self.duration,
            "type": self.type,
        }
        if self.tracks is not None:
            data["tracks"] = [track.to_dict() for track in self.tracks]
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Release":
        known = {"id", "title", "artist", "releaseDate", "cover", "url", "duration", "type", "tracks"}
        tracks = data.get("tracks")
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            artist=data.get("artist", ""),
            url=data.get("url", ""),
            cover=data.get("cover", ""),
            type=data.get("type", DEFAULTS["RELEASE_TYPE"]),
            release_date=data.get("releaseDate", DEFAULTS["RELEASE_DATE"]),
            duration=data.get("duration", DEFAULTS["DURATION"]),
            tracks=[Track.from_dict(t) for t in tracks] if tracks is not None else None,
            extra={k: v for k, v in data.items() if k not in known},
        )
