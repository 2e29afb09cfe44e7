"""Couple pairing through single-use invite tokens."""
import logging
import secrets
import uuid
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import InvalidTokenError, NotFoundError, StorageError, ValidationError, SwarshError
from app.config.constants import INVITE_TOKEN_ALPHABET, INVITE_TOKEN_MAX_ATTEMPTS
from app.db.session import commit_or_raise
from app.models.user import User

logger = logging.getLogger(__name__)


def generate_token(length: int = None) -> str:
    length = length or settings.INVITE_TOKEN_LENGTH
    return ''.join(secrets.choice(INVITE_TOKEN_ALPHABET) for _ in range(length))


class PairingService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def generate_invite(self, user_id: uuid.UUID) -> str:
        """Issue a fresh token, replacing any unconsumed one the user held."""
        user = await self.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.paired_with_id is not None:
            raise ValidationError("You are already paired")

        for _ in range(INVITE_TOKEN_MAX_ATTEMPTS):
            token = generate_token()
            taken = await self.session.execute(select(User.id).where(User.pair_token == token))
            if taken.scalar_one_or_none() is None:
                break
        else:
            raise StorageError("Could not allocate an invite token")

        user.pair_token = token
        await commit_or_raise(self.session)
        logger.info(f"Issued invite token for user {user_id}")
        return token

    async def link_with_token(self, redeemer: User, token: str) -> User:
        """
        Pair ``redeemer`` with the owner of ``token`` inside the caller's transaction.

        The owner row is claimed with a conditional UPDATE (token still present and
        owner still unpaired), so a token can be consumed exactly once.
        """
        token = (token or "").strip().upper()
        if not token:
            raise InvalidTokenError()

        result = await self.session.execute(select(User).where(User.pair_token == token))
        owner = result.scalar_one_or_none()
        if owner is None:
            raise InvalidTokenError()
        if owner.id == redeemer.id:
            raise ValidationError("You cannot redeem your own invite")
        if redeemer.paired_with_id is not None:
            raise ValidationError("You are already paired")

        claimed = await self.session.execute(
            update(User)
            .where(User.id == owner.id, User.pair_token == token, User.paired_with_id.is_(None))
            .values(pair_token=None, paired_with_id=redeemer.id)
        )
        if claimed.rowcount != 1:
            raise InvalidTokenError()

        linked = await self.session.execute(
            update(User)
            .where(User.id == redeemer.id, User.paired_with_id.is_(None))
            .values(paired_with_id=owner.id, pair_token=None)
        )
        if linked.rowcount != 1:
            raise ValidationError("You are already paired")

        logger.info(f"Paired users {owner.id} and {redeemer.id}")
        return owner

    async def redeem_invite(self, user_id: uuid.UUID, token: str) -> User:
        redeemer = await self.session.get(User, user_id)
        if not redeemer:
            raise NotFoundError("User not found")

        try:
            owner = await self.link_with_token(redeemer, token)
        except SwarshError:
            await self.session.rollback()
            raise

        await commit_or_raise(self.session)
        await self.session.refresh(owner)
        await self.session.refresh(redeemer)
        return owner
