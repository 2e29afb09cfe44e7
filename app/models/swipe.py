import enum
from sqlalchemy import Column, String, ForeignKey, DateTime, Uuid, Index, BigInteger, Integer
from app.db.base import Base
from app.models.user import utcnow


class SwipeDirection(str, enum.Enum):
    LIKE = "like"
    PASS = "pass"


class Swipe(Base):
    """
    One row per swipe action. Never updated; repeated swipes are appended.
    ``id`` is a monotonic sequence so equal timestamps still order by insertion.
    ``photo_id`` keeps the swiped photo's id even after the photo is deleted.
    """
    __tablename__ = "swipes"

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    photo_id = Column(Uuid(as_uuid=True), nullable=False)
    photo_owner_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), nullable=False)
    direction = Column(String(10), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    __table_args__ = (
        # Reciprocal lookup: swipes by X on photos owned by Y
        Index('ix_swipe_user_owner', 'user_id', 'photo_owner_id'),
    )
