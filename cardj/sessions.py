"""
Session stores for the auth layer: a SQL table and an in-process fallback.

Both map a session id to a JSON-serialisable blob with a TTL. Expired
sessions are never returned.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Protocol

from sqlalchemy import JSON, Column, Float, String, delete
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 86400
# Prune expired entries every 24h.
DEFAULT_CHECK_PERIOD_SECONDS = 86400


class SessionStore(Protocol):
    """Key -> session blob storage with TTL-based expiry."""

    def get(self, sid: str) -> Optional[dict]:
        ...

    def set(self, sid: str, data: dict, ttl_seconds: int | None = None) -> None:
        ...

    def destroy(self, sid: str) -> None:
        ...

    def prune(self) -> int:
        ...


@dataclass
class InMemorySessionStore:
    """Process-local sessions; lost on restart."""

    ttl_seconds: int = DEFAULT_TTL_SECONDS
    check_period_seconds: int = DEFAULT_CHECK_PERIOD_SECONDS
    clock: Callable[[], float] = time.time
    sessions: Dict[str, tuple[dict, float]] = field(default_factory=dict)

    def __post_init__(self):
        self._last_prune = self.clock()

    def _maybe_prune(self) -> None:
        if self.clock() - self._last_prune >= self.check_period_seconds:
            self.prune()

    def get(self, sid: str) -> Optional[dict]:
        self._maybe_prune()
        entry = self.sessions.get(sid)
        if entry is None:
            return None
        data, expire = entry
        if expire <= self.clock():
            return None
        return dict(data)

    def set(self, sid: str, data: dict, ttl_seconds: int | None = None) -> None:
        self._maybe_prune()
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        self.sessions[sid] = (dict(data), self.clock() + ttl)

    def destroy(self, sid: str) -> None:
        self.sessions.pop(sid, None)

    def prune(self) -> int:
        now = self.clock()
        expired = [sid for sid, (_, expire) in self.sessions.items() if expire <= now]
        for sid in expired:
            del self.sessions[sid]
        self._last_prune = now
        if expired:
            logger.debug("Pruned %d expired sessions", len(expired))
        return len(expired)


SessionBase = declarative_base()


class SessionRow(SessionBase):
    __tablename__ = "session"

    sid = Column(String, primary_key=True)
    sess = Column(JSON, nullable=False)
    expire = Column(Float, nullable=False, index=True)


class SqlSessionStore:
    """
    Sessions kept in a ``session`` table on the application database.
    The table is created on construction if it does not exist.
    """

    def __init__(
        self,
        engine: Engine,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self.Session = sessionmaker(
            bind=engine, class_=Session, expire_on_commit=False, future=True
        )
        SessionRow.__table__.create(engine, checkfirst=True)

    def get(self, sid: str) -> Optional[dict]:
        with self.Session() as session:
            row = session.get(SessionRow, sid)
            if not row or row.expire <= self.clock():
                return None
            return dict(row.sess)

    def set(self, sid: str, data: dict, ttl_seconds: int | None = None) -> None:
        ttl = ttl_seconds if ttl_seconds is not None else self.ttl_seconds
        expire = self.clock() + ttl
        with self.Session() as session:
            row = session.get(SessionRow, sid)
            if row:
                row.sess = dict(data)
                row.expire = expire
            else:
                session.add(SessionRow(sid=sid, sess=dict(data), expire=expire))
            session.commit()

    def destroy(self, sid: str) -> None:
        with self.Session() as session:
            session.execute(delete(SessionRow).where(SessionRow.sid == sid))
            session.commit()

    def prune(self) -> int:
        with self.Session() as session:
            result = session.execute(
                delete(SessionRow).where(SessionRow.expire <= self.clock())
            )
            session.commit()
            return result.rowcount or 0
