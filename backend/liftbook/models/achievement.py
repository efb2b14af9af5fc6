from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    Boolean, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, func, Enum as SAEnum,
)
from liftbook.db import Base

class AchievementCategory(str, Enum):
    MILESTONE = "MILESTONE"
    STREAK = "STREAK"
    PERSONAL_RECORD = "PERSONAL_RECORD"
    VOLUME = "VOLUME"
    CONSISTENCY = "CONSISTENCY"
    MUSCLE_FOCUS = "MUSCLE_FOCUS"

class AchievementRarity(str, Enum):
    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"

class Achievement(Base):
    __tablename__ = "achievements"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[AchievementCategory] = mapped_column(
        SAEnum(AchievementCategory, name="achievement_category"), nullable=False, index=True
    )
    rarity: Mapped[AchievementRarity] = mapped_column(
        SAEnum(AchievementRarity, name="achievement_rarity"), nullable=False, default=AchievementRarity.COMMON
    )
    icon: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    threshold: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_hidden: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

class UserAchievement(Base):
    __tablename__ = "user_achievements"
    __table_args__ = (
        UniqueConstraint("user_id", "achievement_id", name="uq_user_achievements_user_achievement"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    achievement_id: Mapped[int] = mapped_column(ForeignKey("achievements.id", ondelete="CASCADE"), index=True)
    earned_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    notified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    achievement = relationship("Achievement")
