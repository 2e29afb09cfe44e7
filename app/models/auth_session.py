import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.models.user import utcnow


class AuthSession(Base):
    __tablename__ = "auth_sessions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    token = Column(String(64), unique=True, nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    user_agent = Column(String(500))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User")
