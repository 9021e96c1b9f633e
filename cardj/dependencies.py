"""
Dependency wiring for the FastAPI app.

The storage backend is chosen once by ``select_db_client`` when the app is
built and kept on ``app.state``; handlers receive it through ``Depends``.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from cardj.config import Settings
from cardj.db import DbClient, InMemoryDbClient, SqlDbClient
from cardj.schema import UserRecord

logger = logging.getLogger(__name__)


def _in_memory(settings: Settings) -> InMemoryDbClient:
    return InMemoryDbClient(
        session_ttl_seconds=settings.session_ttl_seconds,
        session_check_period_seconds=settings.session_check_period_seconds,
    )


def select_db_client(settings: Settings) -> DbClient:
    """
    Build the SQL client, or fall back to in-memory storage when it cannot be
    constructed. There is no way back to SQL without a restart.
    """
    if settings.use_in_memory_backends:
        logger.info("In-memory backends requested; using in-memory storage")
        return _in_memory(settings)
    if not settings.database_url:
        logger.warning("DATABASE_URL is not set; using in-memory storage")
        return _in_memory(settings)

    logger.info("Attempting to connect to the SQL database...")
    try:
        return SqlDbClient(
            settings.database_url,
            pool_size=settings.db_pool_size,
            session_ttl_seconds=settings.session_ttl_seconds,
        )
    except Exception as exc:
        logger.error("Failed to connect to the SQL database: %s", exc)
        logger.warning("Falling back to in-memory storage; data will not persist")
        return _in_memory(settings)


def get_db_client(request: Request) -> DbClient:
    return request.app.state.db


def get_settings_from_app(request: Request) -> Settings:
    return request.app.state.settings


def get_current_user(
    request: Request,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings_from_app),
) -> Optional[UserRecord]:
    """
    Resolve the logged-in user from the session cookie.
    Returns None for anonymous requests or stale sessions.
    """
    sid = request.cookies.get(settings.session_cookie_name)
    if not sid:
        return None
    session = db.session_store.get(sid)
    if not session or "user_id" not in session:
        return None
    return db.get_user(session["user_id"])


def require_current_user(
    current_user: Optional[UserRecord] = Depends(get_current_user),
) -> UserRecord:
    """Raise 401 when there is no authenticated user."""
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return current_user
