import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple
from sqlalchemy import select, delete, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from werkzeug.security import generate_password_hash, check_password_hash
from app.core.config import settings
from app.core.exceptions import ConflictError, UnauthorizedError, ValidationError, SwarshError
from app.config.constants import MIN_PASSWORD_LENGTH
from app.db.session import commit_or_raise
from app.models.auth_session import AuthSession
from app.models.user import User
from app.services.pairing_service import PairingService

logger = logging.getLogger(__name__)


def _as_aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AuthService:
    def __init__(self, session: AsyncSession):
        self.session = session
        self.pairing = PairingService(session)

    async def signup(
        self,
        username: str,
        email: str,
        password: str,
        name: str = None,
        age: int = None,
        invite_token: str = None,
        user_agent: str = None,
    ) -> Tuple[User, AuthSession]:
        """
        Create an account and open a session.
        With an invite token the new user is paired with the token owner in the
        same transaction, so a bad token leaves no account behind.
        """
        username = (username or "").strip()
        email = (email or "").strip().lower()
        if not username or not email:
            raise ValidationError("Username and email are required")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        exists = await self.session.execute(
            select(User.id).where(or_(User.email == email, User.username == username))
        )
        if exists.first():
            raise ConflictError("User already exists")

        user = User(
            username=username,
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            age=age,
        )
        self.session.add(user)

        try:
            await self.session.flush()
            if invite_token:
                await self.pairing.link_with_token(user, invite_token)
            auth_session = self._new_session(user, user_agent)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("User already exists") from e
        except SwarshError:
            await self.session.rollback()
            raise

        await self.session.refresh(user)
        logger.info(f"Signed up user {user.id} (paired={user.is_paired})")
        return user, auth_session

    async def login(self, email: str, password: str, user_agent: str = None) -> Tuple[User, AuthSession]:
        result = await self.session.execute(select(User).where(User.email == (email or "").strip().lower()))
        user = result.scalar_one_or_none()
        if not user or not check_password_hash(user.password_hash, password or ""):
            raise UnauthorizedError("Invalid credentials")

        auth_session = self._new_session(user, user_agent)
        await commit_or_raise(self.session)
        return user, auth_session

    async def logout(self, token: str):
        await self.session.execute(delete(AuthSession).where(AuthSession.token == token))
        await commit_or_raise(self.session)

    async def resolve_session(self, token: Optional[str]) -> User:
        if not token:
            raise UnauthorizedError()

        result = await self.session.execute(select(AuthSession).where(AuthSession.token == token))
        auth_session = result.scalar_one_or_none()
        if not auth_session:
            raise UnauthorizedError()
        if _as_aware(auth_session.expires_at) < datetime.now(timezone.utc):
            raise UnauthorizedError("Session expired")

        user = await self.session.get(User, auth_session.user_id)
        if not user:
            raise UnauthorizedError()
        return user

    def _new_session(self, user: User, user_agent: str = None) -> AuthSession:
        auth_session = AuthSession(
            user_id=user.id,
            token=secrets.token_urlsafe(32),
            expires_at=datetime.now(timezone.utc) + timedelta(days=settings.SESSION_DAYS),
            user_agent=(user_agent or "")[:500] or None,
        )
        self.session.add(auth_session)
        return auth_session
