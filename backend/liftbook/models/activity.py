from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import JSON, DateTime, ForeignKey, Integer, func, Enum as SAEnum
from liftbook.db import Base

class ActivityType(str, Enum):
    WORKOUT_COMPLETED = "WORKOUT_COMPLETED"
    PR_ACHIEVED = "PR_ACHIEVED"
    ACHIEVEMENT_EARNED = "ACHIEVEMENT_EARNED"
    CHALLENGE_JOINED = "CHALLENGE_JOINED"
    CHALLENGE_COMPLETED = "CHALLENGE_COMPLETED"

class ActivityFeedItem(Base):
    """Append-only feed entry. The engine writes these; the feed service reads them."""
    __tablename__ = "activity_feed_items"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    activity_type: Mapped[ActivityType] = mapped_column(SAEnum(ActivityType, name="activity_type"), nullable=False)
    reference_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # "metadata" is reserved on declarative classes
    details: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)
    created_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now(), index=True)
