"""Signup, login and session endpoints."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import require_user, get_session_token
from app.core.config import settings
from app.db.session import get_db
from app.models.user import User
from app.schemas.user import SignupRequest, LoginRequest, UserOut
from app.services.auth_service import AuthService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def set_session_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.SESSION_DAYS * 24 * 60 * 60,
        path="/",
    )


@router.post("/signup")
async def signup(
    req: SignupRequest,
    response: Response,
    user_agent: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    user, auth_session = await AuthService(db).signup(
        username=req.username,
        email=req.email,
        password=req.password,
        name=req.name,
        age=req.age,
        invite_token=req.invite_token,
        user_agent=user_agent,
    )
    set_session_cookie(response, auth_session.token)
    profile = await UserService(db).get_profile(user.id)
    return {"message": "Signup successful", "user": UserOut.model_validate(profile).to_json(), "token": auth_session.token}


@router.post("/login")
async def login(
    req: LoginRequest,
    response: Response,
    user_agent: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    user, auth_session = await AuthService(db).login(req.email, req.password, user_agent=user_agent)
    set_session_cookie(response, auth_session.token)
    profile = await UserService(db).get_profile(user.id)
    return {"message": "Login successful", "user": UserOut.model_validate(profile).to_json(), "token": auth_session.token}


@router.post("/logout")
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    db: AsyncSession = Depends(get_db),
):
    if token:
        await AuthService(db).logout(token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return {"message": "Logged out"}


@router.get("/me")
async def me(user: User = Depends(require_user), db: AsyncSession = Depends(get_db)):
    profile = await UserService(db).get_profile(user.id)
    return {"user": UserOut.model_validate(profile).to_json()}
