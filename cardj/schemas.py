"""
Pydantic schemas for the CarDJ HTTP API.

Field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

MIN_PASSWORD_LENGTH = 8
# bcrypt rejects passwords longer than 72 bytes once encoded.
MAX_PASSWORD_BYTES = 72


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RegisterRequest(ApiModel):
    username: str = Field(..., min_length=1, max_length=64)
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)
    confirm_password: str

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return value

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self


class LoginRequest(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class UserResponse(ApiModel):
    id: int
    username: str
    email: str
    created_at: float


class PlatformResponse(ApiModel):
    id: int
    name: str
    icon: str
    active: bool


class PlaylistResponse(ApiModel):
    id: int
    name: str
    user_id: Optional[int] = None
    platform_id: Optional[int] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    song_count: int
    external_id: Optional[str] = None
    created_at: float
    updated_at: float


class TrackResponse(ApiModel):
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


class HealthResponse(BaseModel):
    status: Literal["ok"]
    storage: str


class StatusResponse(BaseModel):
    status: Literal["ok"]
