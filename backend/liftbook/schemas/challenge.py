from datetime import datetime
from pydantic import BaseModel

from liftbook.models import ChallengeStatus, ChallengeType

class ChallengeRead(BaseModel):
    id: int
    name: str
    description: str | None = None
    challenge_type: ChallengeType
    target_value: float
    exercise_id: int | None = None
    status: ChallengeStatus
    start_date: datetime
    end_date: datetime

    model_config = {"from_attributes": True}

class MyChallengeRead(BaseModel):
    challenge: ChallengeRead
    progress: float
    completed_at: datetime | None = None
