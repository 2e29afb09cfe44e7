import logging
import uuid
from typing import List
from sqlalchemy import select, and_, or_, func
from sqlalchemy.ext.asyncio import AsyncSession
from app.core.config import settings
from app.core.exceptions import NotFoundError, ValidationError
from app.db.session import commit_or_raise
from app.models.message import Message
from app.models.user import User
from app.realtime.notifier import RealtimeNotifier
from app.schemas.message import MessageOut

logger = logging.getLogger(__name__)


class MessageService:
    def __init__(self, session: AsyncSession, notifier: RealtimeNotifier = None):
        self.session = session
        self.notifier = notifier

    async def send_message(
        self,
        sender_id: uuid.UUID,
        receiver_id: uuid.UUID,
        content: str,
        image_url: str = None,
    ) -> Message:
        """Persist a chat message and push it to the receiver if they are connected."""
        content = (content or "").strip()
        if not content:
            raise ValidationError("Message content cannot be empty")
        if len(content) > settings.MAX_MESSAGE_LENGTH:
            raise ValidationError(f"Message is longer than {settings.MAX_MESSAGE_LENGTH} characters")
        if sender_id == receiver_id:
            raise ValidationError("You cannot message yourself")

        if await self.session.get(User, sender_id) is None:
            raise NotFoundError("Sender not found")
        if await self.session.get(User, receiver_id) is None:
            raise NotFoundError("Receiver not found")

        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            image_url=image_url or None,
        )
        self.session.add(message)
        await commit_or_raise(self.session)
        await self.session.refresh(message)
        logger.info(f"Stored message {message.id} from {sender_id} to {receiver_id}")

        if self.notifier:
            await self.notifier.notify_message(MessageOut.model_validate(message))
        return message

    async def get_conversation(self, user_a: uuid.UUID, user_b: uuid.UUID) -> List[Message]:
        """All messages between the two users, oldest first. Argument order does not matter."""
        stmt = (
            select(Message)
            .where(or_(
                and_(Message.sender_id == user_a, Message.receiver_id == user_b),
                and_(Message.sender_id == user_b, Message.receiver_id == user_a),
            ))
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def mark_read(self, user_id: uuid.UUID, message_id: uuid.UUID) -> Message:
        message = await self.session.get(Message, message_id)
        if not message or message.receiver_id != user_id:
            raise NotFoundError("Message not found")
        if not message.read:
            message.read = True
            await commit_or_raise(self.session)
        return message

    async def unread_count(self, user_id: uuid.UUID) -> int:
        stmt = select(func.count(Message.id)).where(
            Message.receiver_id == user_id,
            Message.read == False,
        )
        return (await self.session.execute(stmt)).scalar() or 0
