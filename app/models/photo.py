import uuid
from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid, JSON
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.models.user import utcnow


class Photo(Base):
    """Metadata of an image hosted by the external image service."""
    __tablename__ = "photos"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(1000), nullable=False)
    caption = Column(String(500))
    tags = Column(JSON, default=list)
    uploaded_at = Column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", back_populates="photos")
