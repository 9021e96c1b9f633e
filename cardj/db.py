"""
Database abstraction for a SQL store and an in-memory fallback implementation.
"""

from __future__ import annotations

import logging
import time
from dataclasses import replace
from itertools import chain
from typing import Dict, Iterable, Optional, Protocol

from sqlalchemy import (
    Boolean,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    create_engine,
    event,
    make_url,
    select,
    text,
)
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from cardj.schema import (
    NewPlatform,
    NewPlaylist,
    NewRecommendation,
    NewTrack,
    NewUser,
    PlatformRecord,
    PlaylistRecord,
    PlaylistTrackRecord,
    RecommendationRecord,
    TrackRecord,
    UserRecord,
)
from cardj.sessions import (
    DEFAULT_CHECK_PERIOD_SECONDS,
    DEFAULT_TTL_SECONDS,
    InMemorySessionStore,
    SessionStore,
    SqlSessionStore,
)

logger = logging.getLogger(__name__)

RECOMMENDATION_LIMIT = 5


class ConstraintViolationError(Exception):
    """An insert collided with a uniqueness or foreign-key constraint."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class DbClient(Protocol):
    """Interface for database access."""

    mode: str
    session_store: SessionStore

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        ...

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        ...

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    def create_user(self, data: NewUser) -> UserRecord:
        ...

    def get_platforms(self) -> list[PlatformRecord]:
        ...

    def get_platform_by_id(self, platform_id: int) -> Optional[PlatformRecord]:
        ...

    def create_platform(self, data: NewPlatform) -> PlatformRecord:
        ...

    def get_playlists(self) -> list[PlaylistRecord]:
        ...

    def get_playlist_by_id(self, playlist_id: int) -> Optional[PlaylistRecord]:
        ...

    def get_playlists_by_user_id(self, user_id: int) -> list[PlaylistRecord]:
        ...

    def get_playlists_by_platform_id(self, platform_id: int) -> list[PlaylistRecord]:
        ...

    def create_playlist(self, data: NewPlaylist) -> PlaylistRecord:
        ...

    def get_tracks(self) -> list[TrackRecord]:
        ...

    def get_track_by_id(self, track_id: int) -> Optional[TrackRecord]:
        ...

    def get_tracks_by_playlist_id(self, playlist_id: int) -> list[TrackRecord]:
        ...

    def create_track(self, data: NewTrack) -> TrackRecord:
        ...

    def add_track_to_playlist(
        self, playlist_id: int, track_id: int, position: int
    ) -> PlaylistTrackRecord:
        ...

    def move_playlist_track(
        self, playlist_id: int, track_id: int, position: int
    ) -> Optional[PlaylistTrackRecord]:
        ...

    def get_recommendations_for_user(self, user_id: int) -> list[TrackRecord]:
        ...

    def create_recommendation(self, data: NewRecommendation) -> RecommendationRecord:
        ...


def pad_recommendations(
    explicit: list[TrackRecord],
    pool: Iterable[TrackRecord],
    limit: int = RECOMMENDATION_LIMIT,
) -> list[TrackRecord]:
    """
    Append tracks from ``pool`` to ``explicit`` until ``limit`` is reached.
    A track appears at most once, at its first occurrence.
    """
    result: list[TrackRecord] = []
    seen: set[int] = set()
    for track in chain(explicit, pool):
        if len(result) >= limit:
            break
        if track.id in seen:
            continue
        seen.add(track.id)
        result.append(track)
    return result


class InMemoryDbClient:
    """Dict-backed database used when no SQL store is reachable, and in tests."""

    mode = "in_memory"

    def __init__(
        self,
        session_ttl_seconds: int = DEFAULT_TTL_SECONDS,
        session_check_period_seconds: int = DEFAULT_CHECK_PERIOD_SECONDS,
    ):
        self.users: Dict[int, UserRecord] = {}
        self.platforms: Dict[int, PlatformRecord] = {}
        self.playlists: Dict[int, PlaylistRecord] = {}
        self.tracks: Dict[int, TrackRecord] = {}
        self.playlist_tracks: Dict[int, PlaylistTrackRecord] = {}
        self.recommendations: Dict[int, RecommendationRecord] = {}
        self._sequences: Dict[str, int] = {}
        self.session_store = InMemorySessionStore(
            ttl_seconds=session_ttl_seconds,
            check_period_seconds=session_check_period_seconds,
        )

    def _next_id(self, table: str) -> int:
        next_id = self._sequences.get(table, 0) + 1
        self._sequences[table] = next_id
        return next_id

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.users.clear()
        self.platforms.clear()
        self.playlists.clear()
        self.tracks.clear()
        self.playlist_tracks.clear()
        self.recommendations.clear()
        self._sequences.clear()
        self.session_store.sessions.clear()

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        user = self.users.get(user_id)
        return replace(user) if user else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.username == username:
                return replace(user)
        return None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        for user in self.users.values():
            if user.email == email:
                return replace(user)
        return None

    def create_user(self, data: NewUser) -> UserRecord:
        if self.get_user_by_email(data.email):
            raise ConstraintViolationError("email already registered", field="email")
        if self.get_user_by_username(data.username):
            raise ConstraintViolationError(
                "username already registered", field="username"
            )
        record = UserRecord(
            id=self._next_id("users"),
            username=data.username,
            email=data.email,
            password=data.password,
            created_at=time.time(),
        )
        self.users[record.id] = record
        return replace(record)

    # Platforms

    def get_platforms(self) -> list[PlatformRecord]:
        return [replace(p) for p in self.platforms.values() if p.active]

    def get_platform_by_id(self, platform_id: int) -> Optional[PlatformRecord]:
        platform = self.platforms.get(platform_id)
        return replace(platform) if platform else None

    def create_platform(self, data: NewPlatform) -> PlatformRecord:
        record = PlatformRecord(
            id=self._next_id("platforms"),
            name=data.name,
            icon=data.icon,
            api_key=data.api_key,
            active=data.active,
        )
        self.platforms[record.id] = record
        return replace(record)

    # Playlists

    def get_playlists(self) -> list[PlaylistRecord]:
        return [replace(p) for p in self.playlists.values()]

    def get_playlist_by_id(self, playlist_id: int) -> Optional[PlaylistRecord]:
        playlist = self.playlists.get(playlist_id)
        return replace(playlist) if playlist else None

    def get_playlists_by_user_id(self, user_id: int) -> list[PlaylistRecord]:
        return [replace(p) for p in self.playlists.values() if p.user_id == user_id]

    def get_playlists_by_platform_id(self, platform_id: int) -> list[PlaylistRecord]:
        return [
            replace(p) for p in self.playlists.values() if p.platform_id == platform_id
        ]

    def create_playlist(self, data: NewPlaylist) -> PlaylistRecord:
        if data.user_id is not None and data.user_id not in self.users:
            raise ConstraintViolationError("user does not exist", field="user_id")
        if data.platform_id is not None and data.platform_id not in self.platforms:
            raise ConstraintViolationError(
                "platform does not exist", field="platform_id"
            )
        now = time.time()
        record = PlaylistRecord(
            id=self._next_id("playlists"),
            name=data.name,
            user_id=data.user_id,
            platform_id=data.platform_id,
            description=data.description,
            cover_image=data.cover_image,
            song_count=data.song_count,
            external_id=data.external_id,
            created_at=now,
            updated_at=now,
        )
        self.playlists[record.id] = record
        return replace(record)

    # Tracks

    def get_tracks(self) -> list[TrackRecord]:
        return [replace(t) for t in self.tracks.values()]

    def get_track_by_id(self, track_id: int) -> Optional[TrackRecord]:
        track = self.tracks.get(track_id)
        return replace(track) if track else None

    def get_tracks_by_playlist_id(self, playlist_id: int) -> list[TrackRecord]:
        entries = sorted(
            (pt for pt in self.playlist_tracks.values() if pt.playlist_id == playlist_id),
            key=lambda pt: (pt.position, pt.id),
        )
        return [
            replace(self.tracks[pt.track_id])
            for pt in entries
            if pt.track_id in self.tracks
        ]

    def create_track(self, data: NewTrack) -> TrackRecord:
        if data.platform_id is not None and data.platform_id not in self.platforms:
            raise ConstraintViolationError(
                "platform does not exist", field="platform_id"
            )
        record = TrackRecord(id=self._next_id("tracks"), **vars(data))
        self.tracks[record.id] = record
        return replace(record)

    def _find_playlist_track(
        self, playlist_id: int, track_id: int
    ) -> Optional[PlaylistTrackRecord]:
        for entry in self.playlist_tracks.values():
            if entry.playlist_id == playlist_id and entry.track_id == track_id:
                return entry
        return None

    def add_track_to_playlist(
        self, playlist_id: int, track_id: int, position: int
    ) -> PlaylistTrackRecord:
        playlist = self.playlists.get(playlist_id)
        if playlist is None:
            raise ConstraintViolationError(
                "playlist does not exist", field="playlist_id"
            )
        if track_id not in self.tracks:
            raise ConstraintViolationError("track does not exist", field="track_id")
        if self._find_playlist_track(playlist_id, track_id):
            raise ConstraintViolationError(
                "track already in playlist", field="track_id"
            )
        record = PlaylistTrackRecord(
            id=self._next_id("playlist_tracks"),
            playlist_id=playlist_id,
            track_id=track_id,
            position=position,
        )
        self.playlist_tracks[record.id] = record
        playlist.song_count += 1
        playlist.updated_at = time.time()
        return replace(record)

    def move_playlist_track(
        self, playlist_id: int, track_id: int, position: int
    ) -> Optional[PlaylistTrackRecord]:
        entry = self._find_playlist_track(playlist_id, track_id)
        if entry is None:
            return None
        entry.position = position
        self.playlists[playlist_id].updated_at = time.time()
        return replace(entry)

    # Recommendations

    def get_recommendations_for_user(self, user_id: int) -> list[TrackRecord]:
        rows = sorted(
            (r for r in self.recommendations.values() if r.user_id == user_id),
            key=lambda r: (r.created_at, r.id),
            reverse=True,
        )[:RECOMMENDATION_LIMIT]
        explicit = [self.tracks[r.track_id] for r in rows if r.track_id in self.tracks]
        return [replace(t) for t in pad_recommendations(explicit, self.tracks.values())]

    def create_recommendation(self, data: NewRecommendation) -> RecommendationRecord:
        if data.user_id not in self.users:
            raise ConstraintViolationError("user does not exist", field="user_id")
        if data.track_id not in self.tracks:
            raise ConstraintViolationError("track does not exist", field="track_id")
        record = RecommendationRecord(
            id=self._next_id("recommendations"),
            user_id=data.user_id,
            track_id=data.track_id,
            reason=data.reason,
            is_liked=data.is_liked,
            created_at=time.time(),
        )
        self.recommendations[record.id] = record
        return replace(record)


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    mode = "persistent"

    def __init__(
        self,
        database_url: str,
        pool_size: int = 10,
        session_ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlDbClient")
        url = make_url(database_url)
        is_sqlite = url.get_backend_name() == "sqlite"
        engine_kwargs: dict = {"future": True, "pool_pre_ping": True}
        if is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # In-memory SQLite lives and dies with a single connection.
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["pool_recycle"] = 1800
        self.engine = create_engine(database_url, **engine_kwargs)

        if is_sqlite:

            @event.listens_for(self.engine, "connect")
            def _enable_foreign_keys(dbapi_connection, _):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys = ON")
                cursor.close()

        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)
        self.session_store = SqlSessionStore(
            self.engine, ttl_seconds=session_ttl_seconds
        )
        logger.info("SQL database connection established (%s)", url.get_backend_name())

    def _commit(self, session: Session) -> None:
        try:
            session.commit()
        except IntegrityError as exc:
            session.rollback()
            raise ConstraintViolationError(str(exc.orig)) from exc

    def _to_user(self, row: "UserRow") -> UserRecord:
        return UserRecord(
            id=row.id,
            username=row.username,
            email=row.email,
            password=row.password,
            created_at=row.created_at,
        )

    def _to_platform(self, row: "PlatformRow") -> PlatformRecord:
        return PlatformRecord(
            id=row.id,
            name=row.name,
            icon=row.icon,
            api_key=row.api_key,
            active=row.active,
        )

    def _to_playlist(self, row: "PlaylistRow") -> PlaylistRecord:
        return PlaylistRecord(
            id=row.id,
            name=row.name,
            user_id=row.user_id,
            platform_id=row.platform_id,
            description=row.description,
            cover_image=row.cover_image,
            song_count=row.song_count,
            external_id=row.external_id,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def _to_track(self, row: "TrackRow") -> TrackRecord:
        return TrackRecord(
            id=row.id,
            title=row.title,
            artist=row.artist,
            album=row.album,
            cover_image=row.cover_image,
            genre=row.genre,
            duration=row.duration,
            platform_id=row.platform_id,
            external_id=row.external_id,
            audio_url=row.audio_url,
        )

    def _to_playlist_track(self, row: "PlaylistTrackRow") -> PlaylistTrackRecord:
        return PlaylistTrackRecord(
            id=row.id,
            playlist_id=row.playlist_id,
            track_id=row.track_id,
            position=row.position,
        )

    # Users

    def get_user(self, user_id: int) -> Optional[UserRecord]:
        with self.Session() as session:
            row = session.get(UserRow, user_id)
            return self._to_user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[UserRecord]:
        with self.Session() as session:
            stmt = select(UserRow).where(UserRow.username == username)
            row = session.execute(stmt).scalars().first()
            return self._to_user(row) if row else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        with self.Session() as session:
            stmt = select(UserRow).where(UserRow.email == email)
            row = session.execute(stmt).scalars().first()
            return self._to_user(row) if row else None

    def _user_conflict(self, session: Session, data: NewUser) -> Optional[str]:
        """Name the unique user column ``data`` collides with, if any."""
        if session.execute(
            select(UserRow.id).where(UserRow.email == data.email)
        ).first():
            return "email"
        if session.execute(
            select(UserRow.id).where(UserRow.username == data.username)
        ).first():
            return "username"
        return None

    def create_user(self, data: NewUser) -> UserRecord:
        with self.Session() as session:
            field = self._user_conflict(session, data)
            if field:
                raise ConstraintViolationError(f"{field} already registered", field=field)
            row = UserRow(
                username=data.username,
                email=data.email,
                password=data.password,
                created_at=time.time(),
            )
            session.add(row)
            try:
                self._commit(session)
            except ConstraintViolationError as exc:
                # Lost a race with a concurrent insert.
                with self.Session() as check:
                    exc.field = self._user_conflict(check, data)
                raise
            return self._to_user(row)

    # Platforms

    def get_platforms(self) -> list[PlatformRecord]:
        with self.Session() as session:
            stmt = (
                select(PlatformRow)
                .where(PlatformRow.active.is_(True))
                .order_by(PlatformRow.id.asc())
            )
            return [self._to_platform(row) for row in session.execute(stmt).scalars()]

    def get_platform_by_id(self, platform_id: int) -> Optional[PlatformRecord]:
        with self.Session() as session:
            row = session.get(PlatformRow, platform_id)
            return self._to_platform(row) if row else None

    def create_platform(self, data: NewPlatform) -> PlatformRecord:
        with self.Session() as session:
            row = PlatformRow(
                name=data.name,
                icon=data.icon,
                api_key=data.api_key,
                active=data.active,
            )
            session.add(row)
            self._commit(session)
            return self._to_platform(row)

    # Playlists

    def _list_playlists(self, *criteria) -> list[PlaylistRecord]:
        with self.Session() as session:
            stmt = select(PlaylistRow).where(*criteria).order_by(PlaylistRow.id.asc())
            return [self._to_playlist(row) for row in session.execute(stmt).scalars()]

    def get_playlists(self) -> list[PlaylistRecord]:
        return self._list_playlists()

    def get_playlist_by_id(self, playlist_id: int) -> Optional[PlaylistRecord]:
        with self.Session() as session:
            row = session.get(PlaylistRow, playlist_id)
            return self._to_playlist(row) if row else None

    def get_playlists_by_user_id(self, user_id: int) -> list[PlaylistRecord]:
        return self._list_playlists(PlaylistRow.user_id == user_id)

    def get_playlists_by_platform_id(self, platform_id: int) -> list[PlaylistRecord]:
        return self._list_playlists(PlaylistRow.platform_id == platform_id)

    def create_playlist(self, data: NewPlaylist) -> PlaylistRecord:
        with self.Session() as session:
            if data.user_id is not None and not session.get(UserRow, data.user_id):
                raise ConstraintViolationError("user does not exist", field="user_id")
            if data.platform_id is not None and not session.get(
                PlatformRow, data.platform_id
            ):
                raise ConstraintViolationError(
                    "platform does not exist", field="platform_id"
                )
            now = time.time()
            row = PlaylistRow(
                name=data.name,
                user_id=data.user_id,
                platform_id=data.platform_id,
                description=data.description,
                cover_image=data.cover_image,
                song_count=data.song_count,
                external_id=data.external_id,
                created_at=now,
                updated_at=now,
            )
            session.add(row)
            self._commit(session)
            return self._to_playlist(row)

    # Tracks

    def get_tracks(self) -> list[TrackRecord]:
        with self.Session() as session:
            stmt = select(TrackRow).order_by(TrackRow.id.asc())
            return [self._to_track(row) for row in session.execute(stmt).scalars()]

    def get_track_by_id(self, track_id: int) -> Optional[TrackRecord]:
        with self.Session() as session:
            row = session.get(TrackRow, track_id)
            return self._to_track(row) if row else None

    def get_tracks_by_playlist_id(self, playlist_id: int) -> list[TrackRecord]:
        with self.Session() as session:
            stmt = (
                select(TrackRow)
                .join(PlaylistTrackRow, PlaylistTrackRow.track_id == TrackRow.id)
                .where(PlaylistTrackRow.playlist_id == playlist_id)
                .order_by(PlaylistTrackRow.position.asc(), PlaylistTrackRow.id.asc())
            )
            return [self._to_track(row) for row in session.execute(stmt).scalars()]

    def create_track(self, data: NewTrack) -> TrackRecord:
        with self.Session() as session:
            if data.platform_id is not None and not session.get(
                PlatformRow, data.platform_id
            ):
                raise ConstraintViolationError(
                    "platform does not exist", field="platform_id"
                )
            row = TrackRow(**vars(data))
            session.add(row)
            self._commit(session)
            return self._to_track(row)

    def add_track_to_playlist(
        self, playlist_id: int, track_id: int, position: int
    ) -> PlaylistTrackRecord:
        with self.Session() as session:
            playlist = session.get(PlaylistRow, playlist_id)
            if playlist is None:
                raise ConstraintViolationError(
                    "playlist does not exist", field="playlist_id"
                )
            if not session.get(TrackRow, track_id):
                raise ConstraintViolationError(
                    "track does not exist", field="track_id"
                )
            existing = session.execute(
                select(PlaylistTrackRow.id).where(
                    PlaylistTrackRow.playlist_id == playlist_id,
                    PlaylistTrackRow.track_id == track_id,
                )
            ).first()
            if existing:
                raise ConstraintViolationError(
                    "track already in playlist", field="track_id"
                )
            row = PlaylistTrackRow(
                playlist_id=playlist_id, track_id=track_id, position=position
            )
            session.add(row)
            playlist.song_count = (playlist.song_count or 0) + 1
            playlist.updated_at = time.time()
            self._commit(session)
            return self._to_playlist_track(row)

    def move_playlist_track(
        self, playlist_id: int, track_id: int, position: int
    ) -> Optional[PlaylistTrackRecord]:
        with self.Session() as session:
            stmt = select(PlaylistTrackRow).where(
                PlaylistTrackRow.playlist_id == playlist_id,
                PlaylistTrackRow.track_id == track_id,
            )
            row = session.execute(stmt).scalars().first()
            if row is None:
                return None
            row.position = position
            playlist = session.get(PlaylistRow, playlist_id)
            playlist.updated_at = time.time()
            session.commit()
            return self._to_playlist_track(row)

    # Recommendations

    def get_recommendations_for_user(self, user_id: int) -> list[TrackRecord]:
        with self.Session() as session:
            stmt = (
                select(TrackRow)
                .join(RecommendationRow, RecommendationRow.track_id == TrackRow.id)
                .where(RecommendationRow.user_id == user_id)
                .order_by(
                    RecommendationRow.created_at.desc(), RecommendationRow.id.desc()
                )
                .limit(RECOMMENDATION_LIMIT)
            )
            explicit = pad_recommendations(
                [self._to_track(row) for row in session.execute(stmt).scalars()], ()
            )
            if len(explicit) >= RECOMMENDATION_LIMIT:
                return explicit

            seen = {track.id for track in explicit}
            padding_stmt = (
                select(TrackRow)
                .where(TrackRow.id.not_in(sorted(seen)))
                .order_by(TrackRow.id.asc())
                .limit(RECOMMENDATION_LIMIT - len(explicit))
            )
            padding = [
                self._to_track(row) for row in session.execute(padding_stmt).scalars()
            ]
            return pad_recommendations(explicit, padding)

    def create_recommendation(self, data: NewRecommendation) -> RecommendationRecord:
        with self.Session() as session:
            if not session.get(UserRow, data.user_id):
                raise ConstraintViolationError("user does not exist", field="user_id")
            if not session.get(TrackRow, data.track_id):
                raise ConstraintViolationError(
                    "track does not exist", field="track_id"
                )
            row = RecommendationRow(
                user_id=data.user_id,
                track_id=data.track_id,
                reason=data.reason,
                is_liked=data.is_liked,
                created_at=time.time(),
            )
            session.add(row)
            self._commit(session)
            return RecommendationRecord(
                id=row.id,
                user_id=row.user_id,
                track_id=row.track_id,
                reason=row.reason,
                is_liked=row.is_liked,
                created_at=row.created_at,
            )


Base = declarative_base()


class UserRow(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, nullable=False, unique=True, index=True)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)
    created_at = Column(Float, nullable=False)


class PlatformRow(Base):
    __tablename__ = "platforms"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    api_key = Column(String, nullable=True)
    active = Column(Boolean, nullable=False, default=True)


class PlaylistRow(Base):
    __tablename__ = "playlists"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    platform_id = Column(
        Integer, ForeignKey("platforms.id"), nullable=True, index=True
    )
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    cover_image = Column(String, nullable=True)
    song_count = Column(Integer, nullable=False, default=0)
    external_id = Column(String, nullable=True)
    created_at = Column(Float, nullable=False)
    updated_at = Column(Float, nullable=False)


class TrackRow(Base):
    __tablename__ = "tracks"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    artist = Column(String, nullable=False)
    album = Column(String, nullable=True)
    cover_image = Column(String, nullable=True)
    genre = Column(String, nullable=True)
    duration = Column(Integer, nullable=True)
    platform_id = Column(Integer, ForeignKey("platforms.id"), nullable=True)
    external_id = Column(String, nullable=True)
    audio_url = Column(String, nullable=True)


class PlaylistTrackRow(Base):
    __tablename__ = "playlist_tracks"
    __table_args__ = (UniqueConstraint("playlist_id", "track_id"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    playlist_id = Column(
        Integer, ForeignKey("playlists.id"), nullable=False, index=True
    )
    track_id = Column(Integer, ForeignKey("tracks.id"), nullable=False)
    position = Column(Integer, nullable=False)


class RecommendationRow(Base):
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    track_id = Column(Integer, ForeignKey("tracks.id"), nullable=False)
    reason = Column(String, nullable=True)
    is_liked = Column(Boolean, nullable=False, default=False)
    created_at = Column(Float, nullable=False)
