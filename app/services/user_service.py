from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload
from app.models.user import User
from app.models.photo import Photo
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import commit_or_raise
from typing import List, Optional
import uuid
import logging

logger = logging.getLogger(__name__)

class UserService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_user(self, user_id: uuid.UUID) -> User:
        user = await self.session.get(User, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def get_profile(self, user_id: uuid.UUID) -> User:
        """Load a user with photos and the paired partner (with photos) expanded."""
        stmt = (
            select(User)
            .where(User.id == user_id)
            .options(
                selectinload(User.photos),
                selectinload(User.paired_with).selectinload(User.photos),
            )
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user = result.scalar_one_or_none()
        if not user:
            raise NotFoundError("User not found")
        return user

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def update_profile(
        self,
        user_id: uuid.UUID,
        name: str = None,
        age: int = None,
        bio: str = None,
        preferences: dict = None,
    ) -> User:
        user = await self.get_user(user_id)
        if name is not None:
            user.name = name.strip() or None
        if age is not None:
            user.age = age
        if bio is not None:
            user.bio = bio
        if preferences is not None:
            current = dict(user.preferences) if user.preferences else {}
            current.update({k: v for k, v in preferences.items() if v is not None})
            user.preferences = current
        await commit_or_raise(self.session)
        return await self.get_profile(user_id)

    async def update_settings(self, user_id: uuid.UUID, settings: dict) -> User:
        user = await self.get_user(user_id)
        user.settings = settings
        await commit_or_raise(self.session)
        return await self.get_profile(user_id)

    async def add_photo(self, user_id: uuid.UUID, url: str, caption: str = None, tags: List[str] = None) -> Photo:
        await self.get_user(user_id)
        url = (url or "").strip()
        if not url:
            raise ValidationError("Photo URL is required")

        photo = Photo(
            user_id=user_id,
            url=url,
            caption=caption,
            tags=[t.strip() for t in (tags or []) if t and t.strip()],
        )
        self.session.add(photo)
        await commit_or_raise(self.session)
        await self.session.refresh(photo)
        logger.info(f"User {user_id} added photo {photo.id}")
        return photo

    async def set_profile_picture(self, user_id: uuid.UUID, url: str) -> User:
        url = (url or "").strip()
        if not url:
            raise ValidationError("Photo URL is required")
        user = await self.get_user(user_id)
        user.profile_picture = url
        await commit_or_raise(self.session)
        return user

    async def delete_photo(self, user_id: uuid.UUID, photo_id: uuid.UUID):
        photo = await self.session.get(Photo, photo_id)
        if not photo or photo.user_id != user_id:
            raise NotFoundError("Photo not found")
        await self.session.delete(photo)
        await commit_or_raise(self.session)
        logger.info(f"User {user_id} deleted photo {photo_id}")

    async def get_photo(self, photo_id: uuid.UUID) -> Photo:
        photo = await self.session.get(Photo, photo_id)
        if not photo:
            raise NotFoundError("Photo not found")
        return photo

    async def set_online(self, user_id: uuid.UUID, online: bool):
        user = await self.session.get(User, user_id)
        if user and user.is_online != online:
            user.is_online = online
            await commit_or_raise(self.session)
