"""
HTTP routes for the CarDJ API.
"""

from __future__ import annotations

import logging
import secrets

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from cardj.config import Settings
from cardj.db import ConstraintViolationError, DbClient
from cardj.dependencies import (
    get_db_client,
    get_settings_from_app,
    require_current_user,
)
from cardj.schema import NewUser, UserRecord
from cardj.schemas import (
    HealthResponse,
    LoginRequest,
    PlatformResponse,
    PlaylistResponse,
    RegisterRequest,
    StatusResponse,
    TrackResponse,
    UserResponse,
)
from cardj.security import hash_password, verify_password

logger = logging.getLogger(__name__)

router = APIRouter()

_DUPLICATE_MESSAGES = {
    "email": "Email already registered",
    "username": "Username already registered",
}


def _user_response(user: UserRecord) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        created_at=user.created_at,
    )


def _start_session(
    response: Response, db: DbClient, settings: Settings, user: UserRecord
) -> None:
    sid = secrets.token_urlsafe(32)
    db.session_store.set(sid, {"user_id": user.id}, settings.session_ttl_seconds)
    response.set_cookie(
        settings.session_cookie_name,
        sid,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
    )


@router.get("/health", response_model=HealthResponse)
def health(db: DbClient = Depends(get_db_client)):
    return HealthResponse(status="ok", storage=db.mode)


@router.post(
    "/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED
)
def register(
    payload: RegisterRequest,
    response: Response,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings_from_app),
):
    try:
        user = db.create_user(
            NewUser(
                username=payload.username,
                email=payload.email,
                password=hash_password(payload.password),
            )
        )
    except ConstraintViolationError as exc:
        logger.info("Registration rejected: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=_DUPLICATE_MESSAGES.get(exc.field, "User already exists"),
        )
    logger.info("User registered: %s", user.username)
    _start_session(response, db, settings, user)
    return _user_response(user)


@router.post("/login", response_model=UserResponse)
def login(
    payload: LoginRequest,
    response: Response,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings_from_app),
):
    user = db.get_user_by_email(payload.email)
    if not user or not verify_password(payload.password, user.password):
        logger.warning("Failed login for %s", payload.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    _start_session(response, db, settings, user)
    return _user_response(user)


@router.post("/logout", response_model=StatusResponse)
def logout(
    request: Request,
    response: Response,
    db: DbClient = Depends(get_db_client),
    settings: Settings = Depends(get_settings_from_app),
):
    sid = request.cookies.get(settings.session_cookie_name)
    if sid:
        db.session_store.destroy(sid)
    response.delete_cookie(settings.session_cookie_name)
    return StatusResponse(status="ok")


@router.get("/user", response_model=UserResponse)
def current_user(user: UserRecord = Depends(require_current_user)):
    return _user_response(user)


@router.get("/user/playlists", response_model=list[PlaylistResponse])
def current_user_playlists(
    user: UserRecord = Depends(require_current_user),
    db: DbClient = Depends(get_db_client),
):
    return [PlaylistResponse(**p.as_dict()) for p in db.get_playlists_by_user_id(user.id)]


@router.get("/platforms", response_model=list[PlatformResponse])
def list_platforms(db: DbClient = Depends(get_db_client)):
    return [PlatformResponse(**p.as_dict()) for p in db.get_platforms()]


@router.get("/platforms/{platform_id}", response_model=PlatformResponse)
def get_platform(platform_id: int, db: DbClient = Depends(get_db_client)):
    platform = db.get_platform_by_id(platform_id)
    if not platform:
        raise HTTPException(status_code=404, detail="Platform not found")
    return PlatformResponse(**platform.as_dict())


@router.get("/platforms/{platform_id}/playlists", response_model=list[PlaylistResponse])
def list_platform_playlists(platform_id: int, db: DbClient = Depends(get_db_client)):
    if not db.get_platform_by_id(platform_id):
        raise HTTPException(status_code=404, detail="Platform not found")
    return [
        PlaylistResponse(**p.as_dict())
        for p in db.get_playlists_by_platform_id(platform_id)
    ]


@router.get("/playlists", response_model=list[PlaylistResponse])
def list_playlists(db: DbClient = Depends(get_db_client)):
    return [PlaylistResponse(**p.as_dict()) for p in db.get_playlists()]


@router.get("/playlists/{playlist_id}", response_model=PlaylistResponse)
def get_playlist(playlist_id: int, db: DbClient = Depends(get_db_client)):
    playlist = db.get_playlist_by_id(playlist_id)
    if not playlist:
        raise HTTPException(status_code=404, detail="Playlist not found")
    return PlaylistResponse(**playlist.as_dict())


@router.get("/playlists/{playlist_id}/tracks", response_model=list[TrackResponse])
def list_playlist_tracks(playlist_id: int, db: DbClient = Depends(get_db_client)):
    if not db.get_playlist_by_id(playlist_id):
        raise HTTPException(status_code=404, detail="Playlist not found")
    return [TrackResponse(**t.as_dict()) for t in db.get_tracks_by_playlist_id(playlist_id)]


@router.get("/tracks", response_model=list[TrackResponse])
def list_tracks(db: DbClient = Depends(get_db_client)):
    return [TrackResponse(**t.as_dict()) for t in db.get_tracks()]


@router.get("/tracks/{track_id}", response_model=TrackResponse)
def get_track(track_id: int, db: DbClient = Depends(get_db_client)):
    track = db.get_track_by_id(track_id)
    if not track:
        raise HTTPException(status_code=404, detail="Track not found")
    return TrackResponse(**track.as_dict())


@router.get("/recommendations", response_model=list[TrackResponse])
def list_recommendations(
    user: UserRecord = Depends(require_current_user),
    db: DbClient = Depends(get_db_client),
):
    return [
        TrackResponse(**t.as_dict()) for t in db.get_recommendations_for_user(user.id)
    ]
