"""Chat messages."""
import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from app.api.deps import require_user, get_notifier
from app.db.session import get_db
from app.models.user import User
from app.realtime.notifier import RealtimeNotifier
from app.schemas.message import MessageOut, SendMessageRequest
from app.services.message_service import MessageService

router = APIRouter(prefix="/api/message", tags=["messages"])


@router.get("/conversation/{other_user_id}")
async def get_conversation(
    other_user_id: uuid.UUID,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    messages = await MessageService(db).get_conversation(user.id, other_user_id)
    return {"messages": [MessageOut.model_validate(m).to_json() for m in messages]}


@router.post("")
async def send_message(
    req: SendMessageRequest,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
    notifier: RealtimeNotifier = Depends(get_notifier),
):
    message = await MessageService(db, notifier).send_message(
        sender_id=user.id,
        receiver_id=req.receiver_id,
        content=req.content,
        image_url=req.image_url,
    )
    return {"message": MessageOut.model_validate(message).to_json()}


@router.put("/read/{message_id}")
async def mark_read(
    message_id: uuid.UUID,
    user: User = Depends(require_user),
    db: AsyncSession = Depends(get_db),
):
    await MessageService(db).mark_read(user.id, message_id)
    return {"message": "Marked as read"}


@router.get("/unread-count")
async def unread_count(user: User = Depends(require_user), db: AsyncSession = Depends(get_db)):
    count = await MessageService(db).unread_count(user.id)
    return {"count": count}
