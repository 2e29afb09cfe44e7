import uuid
from sqlalchemy import Column, ForeignKey, DateTime, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base
from app.models.user import utcnow


def ordered_pair(a: uuid.UUID, b: uuid.UUID):
    """Normalise an unordered user pair so (a, b) and (b, a) share one key."""
    return (a, b) if str(a) <= str(b) else (b, a)


class Match(Base):
    __tablename__ = "matches"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    photo_id = Column(Uuid(as_uuid=True), ForeignKey("photos.id", ondelete="SET NULL"), nullable=True)
    user1_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    user2_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)

    pair_low_id = Column(Uuid(as_uuid=True), nullable=False)
    pair_high_id = Column(Uuid(as_uuid=True), nullable=False)

    matched_at = Column(DateTime(timezone=True), default=utcnow)

    user1 = relationship("User", foreign_keys=[user1_id])
    user2 = relationship("User", foreign_keys=[user2_id])

    __table_args__ = (
        UniqueConstraint('pair_low_id', 'pair_high_id', name='uq_match_pair'),
    )

    def other_user_id(self, user_id: uuid.UUID) -> uuid.UUID:
        return self.user2_id if self.user1_id == user_id else self.user1_id
