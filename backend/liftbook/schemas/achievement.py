from datetime import datetime
from pydantic import BaseModel, Field

from liftbook.models import AchievementCategory, AchievementRarity

class AchievementRead(BaseModel):
    id: int
    code: str
    name: str
    description: str
    category: AchievementCategory
    rarity: AchievementRarity
    icon: str
    threshold: int
    sort_order: int

    model_config = {"from_attributes": True}

class UserAchievementRead(BaseModel):
    id: int
    achievement_id: int
    earned_at: datetime
    notified: bool
    achievement: AchievementRead

    model_config = {"from_attributes": True}

class AchievementOverview(BaseModel):
    earned: list[UserAchievementRead]
    all: list[AchievementRead]
    earned_count: int
    total_count: int

class NewlyEarnedRead(BaseModel):
    id: int
    user_achievement_id: int
    code: str
    name: str
    description: str
    rarity: AchievementRarity
    icon: str

    model_config = {"from_attributes": True}

class MarkNotified(BaseModel):
    achievement_ids: list[int] = Field(max_length=500)
