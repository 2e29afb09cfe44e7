import logging
import random
import uuid
from typing import Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.config.constants import SWIPE_DIRECTION_ALIASES
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import commit_or_raise
from app.models.photo import Photo
from app.models.swipe import Swipe, SwipeDirection
from app.models.user import User
from app.realtime.notifier import RealtimeNotifier
from app.schemas.swipe import CandidatePhoto, MatchRef, SwipeResult
from app.services.match_service import MatchService

logger = logging.getLogger(__name__)


def normalize_direction(direction: str) -> str:
    normalized = SWIPE_DIRECTION_ALIASES.get((direction or "").strip().lower())
    if normalized is None:
        raise ValidationError(f"Invalid swipe direction: {direction}")
    return normalized


def _candidate(photo: Photo, owner: User) -> CandidatePhoto:
    return CandidatePhoto(
        id=photo.id,
        url=photo.url,
        caption=photo.caption,
        owner_id=owner.id,
        owner_name=owner.name,
    )


class SwipeService:
    def __init__(self, session: AsyncSession, notifier: RealtimeNotifier):
        self.session = session
        self.notifier = notifier
        self.match_service = MatchService(session)

    async def record_swipe(
        self,
        actor_id: uuid.UUID,
        photo_id: uuid.UUID,
        photo_owner_id: uuid.UUID,
        direction: str,
    ) -> SwipeResult:
        """
        Append the swipe, then on a like look for the reciprocal like and create the match.

        The swipe is committed on its own before match detection; a failed match write
        never loses the swipe.
        """
        direction = normalize_direction(direction)

        if await self.session.get(User, actor_id) is None:
            raise NotFoundError("User not found")
        owner = await self.session.get(User, photo_owner_id)
        if owner is None:
            raise NotFoundError("Photo owner not found")
        if owner.id == actor_id:
            raise ValidationError("You cannot swipe on your own photo")

        photo = await self.session.get(Photo, photo_id)
        if photo is None or photo.user_id != owner.id:
            raise NotFoundError("Photo not found")

        self.session.add(Swipe(
            user_id=actor_id,
            photo_id=photo.id,
            photo_owner_id=owner.id,
            direction=direction,
        ))
        await commit_or_raise(self.session)
        logger.info(f"User {actor_id} swiped {direction} on photo {photo.id}")

        if direction != SwipeDirection.LIKE.value:
            return SwipeResult(matched=False)

        if not await self.match_service.has_reciprocal_like(actor_id, owner.id):
            return SwipeResult(matched=False)

        if await self.match_service.find_match(actor_id, owner.id):
            return SwipeResult(matched=False, already_matched=True)

        match = await self.match_service.create_match(photo.id, actor_id, owner.id)
        if match is None:
            return SwipeResult(matched=False, already_matched=True)

        match_ref = MatchRef.model_validate(match)
        await self.notifier.notify_match(match_ref)
        return SwipeResult(matched=True, match=match_ref)

    async def next_candidate(self, user: User) -> Tuple[CandidatePhoto, int]:
        """
        Pick a random photo to swipe on.
        Paired users skip discovery and always get their partner's photo.
        """
        if user.paired_with_id is not None:
            return await self.partner_photo(user, user.paired_with_id), 1

        stmt = (
            select(Photo, User)
            .join(User, Photo.user_id == User.id)
            .where(User.id != user.id, User.paired_with_id.is_(None))
        )
        result = await self.session.execute(stmt)
        rows = result.all()
        if not rows:
            raise NotFoundError("No photos available")

        photo, owner = random.choice(rows)
        return _candidate(photo, owner), len(rows)

    async def partner_photo(self, user: User, partner_id: uuid.UUID) -> CandidatePhoto:
        """Latest photo of the paired partner; anyone else's photos are not reachable here."""
        if user.paired_with_id is None or user.paired_with_id != partner_id:
            raise NotFoundError("Partner not found")

        partner = await self.session.get(User, partner_id)
        if partner is None:
            raise NotFoundError("Partner not found")

        stmt = (
            select(Photo)
            .where(Photo.user_id == partner.id)
            .order_by(Photo.uploaded_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        photo = result.scalars().first()
        if photo is None:
            raise NotFoundError("Partner has no photos yet")
        return _candidate(photo, partner)
