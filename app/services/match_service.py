from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload
from app.models.match import Match, ordered_pair
from app.models.swipe import Swipe, SwipeDirection
from app.models.user import User
from app.core.exceptions import StorageError
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)

class MatchService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_match(self, user_a: uuid.UUID, user_b: uuid.UUID) -> Optional[Match]:
        low, high = ordered_pair(user_a, user_b)
        stmt = select(Match).where(Match.pair_low_id == low, Match.pair_high_id == high)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def has_reciprocal_like(self, actor_id: uuid.UUID, owner_id: uuid.UUID) -> bool:
        """
        Has ``owner_id`` liked any photo owned by ``actor_id``?
        Only the latest swipe per photo counts, so a like followed by a pass is no like.
        """
        stmt = (
            select(Swipe.photo_id, Swipe.direction)
            .where(Swipe.user_id == owner_id, Swipe.photo_owner_id == actor_id)
            .order_by(Swipe.created_at.desc(), Swipe.id.desc())
        )
        result = await self.session.execute(stmt)

        latest = {}
        for photo_id, direction in result.all():
            latest.setdefault(photo_id, direction)
        return any(direction == SwipeDirection.LIKE.value for direction in latest.values())

    async def create_match(self, photo_id: uuid.UUID, actor_id: uuid.UUID, owner_id: uuid.UUID) -> Optional[Match]:
        """
        Insert the match for the unordered pair.
        Returns None when a concurrent request won the unique (pair_low_id, pair_high_id) slot.
        """
        low, high = ordered_pair(actor_id, owner_id)
        match = Match(
            photo_id=photo_id,
            user1_id=actor_id,
            user2_id=owner_id,
            pair_low_id=low,
            pair_high_id=high,
        )
        self.session.add(match)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.info(f"Match between {actor_id} and {owner_id} already created concurrently")
            return None
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise StorageError("Failed to create match") from e

        logger.info(f"Created match {match.id} between {actor_id} and {owner_id}")
        return match

    async def list_matches(self, user_id: uuid.UUID) -> List[Match]:
        stmt = (
            select(Match)
            .where(or_(Match.user1_id == user_id, Match.user2_id == user_id))
            .options(
                selectinload(Match.user1).selectinload(User.photos),
                selectinload(Match.user2).selectinload(User.photos),
            )
            .order_by(Match.matched_at.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()
