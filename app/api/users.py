"""Profile, settings and photo metadata of the signed-in user."""
import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import require_user, get_notifier
from app.db.session import get_db
from app.models.user import User
from app.realtime.notifier import RealtimeNotifier
from app.schemas.user import (
    UserOut,
    PhotoOut,
    ProfileUpdateRequest,
    SettingsUpdateRequest,
    PhotoCreateRequest,
    ProfilePictureRequest,
)
from app.services.swipe_service import SwipeService
from app.services.user_service import UserService

router = APIRouter(prefix="/api", tags=["users"])


@router.get("/user/profile")
async def get_profile(user: User = Depends(require_user), db: AsyncSession = Depends(get_db)):
    profile = await UserService(db).get_profile(user.id)
    return {"user": UserOut.model_validate(profile).to_json()}


@router.put("/user/profile")
async def update_profile(
    req: ProfileUpdateRequest,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await UserService(db).update_profile(
        user.id,
        name=req.name,
        age=req.age,
        bio=req.bio,
        preferences=req.preferences.model_dump() if req.preferences else None,
    )
    return {"user": UserOut.model_validate(profile).to_json()}


@router.put("/user/settings")
async def update_settings(
    req: SettingsUpdateRequest,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    profile = await UserService(db).update_settings(user.id, req.settings.model_dump())
    return {"user": UserOut.model_validate(profile).to_json()}


@router.post("/user/photos")
async def add_photo(
    req: PhotoCreateRequest,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    photo = await UserService(db).add_photo(user.id, req.url, caption=req.caption, tags=req.tags)
    return {"message": "Photo uploaded", "photo": PhotoOut.model_validate(photo).to_json()}


@router.post("/user/profile-picture")
async def set_profile_picture(
    req: ProfilePictureRequest,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    updated = await UserService(db).set_profile_picture(user.id, req.url)
    return {"message": "Profile picture updated", "url": updated.profile_picture}


@router.delete("/user/photos/{photo_id}")
async def delete_photo(
    photo_id: uuid.UUID,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    await UserService(db).delete_photo(user.id, photo_id)
    return {"message": "Photo deleted"}


@router.get("/users/{user_id}/photo")
async def get_partner_photo(
    user_id: uuid.UUID,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
    notifier: RealtimeNotifier = Depends(get_notifier),
):
    photo = await SwipeService(db, notifier).partner_photo(user, user_id)
    return {"photo": photo.to_json()}
