"""
FastAPI application entry point for the CarDJ backend.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from cardj.config import Settings, get_settings
from cardj.db import DbClient
from cardj.dependencies import select_db_client
from cardj.routes import router
from cardj.seed import seed_demo_catalog


def create_app(
    settings: Settings | None = None, db: DbClient | None = None
) -> FastAPI:
    """
    Build the app around a storage backend.

    ``db`` is selected from settings when not supplied; tests pass their own.
    """
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    if db is None:
        db = select_db_client(settings)
    if settings.seed_demo_data:
        seed_demo_catalog(db)

    app = FastAPI(title="CarDJ Backend", version="0.1.0")
    app.state.settings = settings
    app.state.db = db
    app.include_router(router, prefix=settings.api_prefix)
    return app
