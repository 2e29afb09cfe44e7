import uuid
from datetime import datetime
from typing import Optional
from app.schemas.base import CamelModel


class MessageOut(CamelModel):
    id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    content: str
    image_url: Optional[str] = None
    read: bool = False
    created_at: Optional[datetime] = None


class SendMessageRequest(CamelModel):
    receiver_id: uuid.UUID
    content: str
    image_url: Optional[str] = None
