import uuid
from sqlalchemy import Column, String, Text, Boolean, ForeignKey, DateTime, Uuid, Index
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.models.user import utcnow


class Message(Base):
    __tablename__ = "messages"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    sender_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    receiver_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    content = Column(Text, nullable=False)
    image_url = Column(String(1000))
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    sender = relationship("User", foreign_keys=[sender_id])
    receiver = relationship("User", foreign_keys=[receiver_id])

    __table_args__ = (
        Index('ix_message_pair', 'sender_id', 'receiver_id'),
        Index('ix_message_receiver_read', 'receiver_id', 'read'),
    )
