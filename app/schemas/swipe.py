import uuid
from datetime import datetime
from typing import Optional
from app.schemas.base import CamelModel
from app.schemas.user import PublicUser


class SwipeRequest(CamelModel):
    photo_id: uuid.UUID
    direction: str
    photo_owner_id: uuid.UUID


class CandidatePhoto(CamelModel):
    id: uuid.UUID
    url: str
    caption: Optional[str] = None
    owner_id: uuid.UUID
    owner_name: Optional[str] = None


class MatchRef(CamelModel):
    """Match with participants as plain ids."""
    id: uuid.UUID
    photo_id: Optional[uuid.UUID] = None
    user1_id: uuid.UUID
    user2_id: uuid.UUID
    matched_at: Optional[datetime] = None


class MatchOut(CamelModel):
    """Match with both participants expanded."""
    id: uuid.UUID
    photo_id: Optional[uuid.UUID] = None
    user1: PublicUser
    user2: PublicUser
    matched_at: Optional[datetime] = None


class SwipeResult(CamelModel):
    matched: bool
    match: Optional[MatchRef] = None
    already_matched: bool = False


class InviteRedeemRequest(CamelModel):
    token: str
