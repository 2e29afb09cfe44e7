import uuid
from datetime import datetime
from typing import List, Optional
from pydantic import EmailStr, Field, field_validator
from app.schemas.base import CamelModel
from app.config.constants import (
    MAX_USERNAME_LENGTH,
    MAX_NAME_LENGTH,
    MAX_URL_LENGTH,
    MAX_CAPTION_LENGTH,
    MIN_AGE,
    MAX_AGE,
    ALLOWED_THEMES,
)


# ========================
# Views
# ========================

class UserRef(CamelModel):
    """Reference-only view of a user."""
    id: uuid.UUID


class PhotoOut(CamelModel):
    id: uuid.UUID
    url: str
    caption: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    uploaded_at: Optional[datetime] = None


class PublicUser(CamelModel):
    """Expanded view of another user, safe to show to matches and partners."""
    id: uuid.UUID
    name: Optional[str] = None
    profile_picture: Optional[str] = None
    photos: List[PhotoOut] = Field(default_factory=list)


class Preferences(CamelModel):
    food: Optional[str] = None
    song: Optional[str] = None
    movie: Optional[str] = None


class NotificationSettings(CamelModel):
    matches: bool = True
    messages: bool = True


class UserSettings(CamelModel):
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    theme: str = "light"

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, v):
        if v not in ALLOWED_THEMES:
            raise ValueError(f"Invalid theme: {v}")
        return v


class UserOut(CamelModel):
    """The signed-in user's own profile, with the partner expanded."""
    id: uuid.UUID
    username: str
    email: str
    name: Optional[str] = None
    age: Optional[int] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    preferences: Preferences = Field(default_factory=Preferences)
    settings: UserSettings = Field(default_factory=UserSettings)
    photos: List[PhotoOut] = Field(default_factory=list)
    is_online: bool = False
    paired_with: Optional[PublicUser] = None
    created_at: Optional[datetime] = None

    @field_validator("preferences", "settings", mode="before")
    @classmethod
    def empty_json(cls, v):
        return v or {}


# ========================
# Requests
# ========================

class SignupRequest(CamelModel):
    username: str = Field(min_length=1, max_length=MAX_USERNAME_LENGTH)
    email: EmailStr
    password: str
    name: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    age: Optional[int] = Field(None, ge=MIN_AGE, le=MAX_AGE)
    invite_token: Optional[str] = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class ProfileUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, max_length=MAX_NAME_LENGTH)
    age: Optional[int] = Field(None, ge=MIN_AGE, le=MAX_AGE)
    bio: Optional[str] = None
    preferences: Optional[Preferences] = None


class SettingsUpdateRequest(CamelModel):
    settings: UserSettings


class PhotoCreateRequest(CamelModel):
    url: str = Field(min_length=1, max_length=MAX_URL_LENGTH)
    caption: Optional[str] = Field(None, max_length=MAX_CAPTION_LENGTH)
    tags: List[str] = Field(default_factory=list)


class ProfilePictureRequest(CamelModel):
    url: str = Field(min_length=1, max_length=MAX_URL_LENGTH)
