"""Request-scoped dependencies shared by the routers."""
import logging
from typing import Optional
from fastapi import Cookie, Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import UnauthorizedError
from app.db.session import get_db, AsyncSessionLocal
from app.models.user import User
from app.realtime.notifier import RealtimeNotifier
from app.realtime.registry import ConnectionRegistry
from app.services.auth_service import AuthService

logger = logging.getLogger(__name__)


def extract_token(authorization: Optional[str], cookie_token: Optional[str]) -> Optional[str]:
    """Bearer header wins over the session cookie."""
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return cookie_token or None


def get_session_token(
    authorization: Optional[str] = Header(None),
    session_cookie: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE_NAME),
) -> Optional[str]:
    return extract_token(authorization, session_cookie)


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    db: AsyncSession = Depends(get_db),
) -> Optional[User]:
    if not token:
        return None
    try:
        return await AuthService(db).resolve_session(token)
    except UnauthorizedError:
        return None


def require_user(user: Optional[User] = Depends(get_current_user)) -> User:
    if not user:
        raise UnauthorizedError("Authentication required")
    return user


def get_registry(request: Request) -> ConnectionRegistry:
    return request.app.state.registry


def get_notifier(request: Request) -> RealtimeNotifier:
    return request.app.state.notifier


def get_session_factory():
    """Factory for short-lived sessions opened outside the request scope (WebSocket)."""
    return AsyncSessionLocal
