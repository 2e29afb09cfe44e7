import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, Integer, Boolean, ForeignKey, DateTime, Uuid, JSON
from sqlalchemy.orm import relationship
from app.db.base import Base


def utcnow():
    return datetime.now(timezone.utc)


def default_settings():
    return {
        "notifications": {"matches": True, "messages": True},
        "theme": "light",
    }


class User(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(80), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)

    # Profile
    name = Column(String(255))
    age = Column(Integer)
    bio = Column(Text)
    profile_picture = Column(String(1000))
    preferences = Column(JSON, default=dict)  # food / song / movie
    settings = Column(JSON, default=default_settings)
    is_online = Column(Boolean, default=False, nullable=False)

    # Pairing: symmetric, A.paired_with_id == B implies B.paired_with_id == A
    paired_with_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=True)
    pair_token = Column(String(32), unique=True, nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    paired_with = relationship("User", remote_side=[id], foreign_keys=[paired_with_id])
    photos = relationship(
        "Photo",
        back_populates="user",
        order_by="Photo.uploaded_at",
        cascade="all, delete-orphan",
    )

    @property
    def is_paired(self) -> bool:
        return self.paired_with_id is not None
