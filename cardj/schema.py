"""
Entity records and insert payloads shared by both storage backends.

Records are what the storage layer returns; the ``New*`` payloads are what
callers pass in (every field except generated ids and timestamps).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional


@dataclass
class NewUser:
    username: str
    email: str
    password: str


@dataclass
class UserRecord:
    id: int
    username: str
    email: str
    password: str
    created_at: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class NewPlatform:
    name: str
    icon: str
    api_key: Optional[str] = None
    active: bool = True


@dataclass
class PlatformRecord:
    id: int
    name: str
    icon: str
    api_key: Optional[str] = None
    active: bool = True

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class NewPlaylist:
    name: str
    user_id: Optional[int] = None
    platform_id: Optional[int] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    song_count: int = 0
    external_id: Optional[str] = None


@dataclass
class PlaylistRecord:
    id: int
    name: str
    user_id: Optional[int]
    platform_id: Optional[int]
    description: Optional[str]
    cover_image: Optional[str]
    song_count: int
    external_id: Optional[str]
    created_at: float
    updated_at: float

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class NewTrack:
    title: str
    artist: str
    album: Optional[str] = None
    cover_image: Optional[str] = None
    genre: Optional[str] = None
    duration: Optional[int] = None
    platform_id: Optional[int] = None
    external_id: Optional[str] = None
    audio_url: Optional[str] = None


@dataclass
class TrackRecord:
    id: int
    title: str
    artist: str
    album: Optional[str] = None
    cover_image: Optional[str] = None
    genre: Optional[str] = None
    duration: Optional[int] = None
    platform_id: Optional[int] = None
    external_id: Optional[str] = None
    audio_url: Optional[str] = None

    def as_dict(self) -> dict:
        return asdict(self)


@dataclass
class PlaylistTrackRecord:
    id: int
    playlist_id: int
    track_id: int
    position: int


@dataclass
class NewRecommendation:
    user_id: int
    track_id: int
    reason: Optional[str] = None
    is_liked: bool = False


@dataclass
class RecommendationRecord:
    id: int
    user_id: int
    track_id: int
    reason: Optional[str]
    is_liked: bool
    created_at: float
