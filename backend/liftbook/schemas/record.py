from datetime import datetime
from pydantic import BaseModel

from liftbook.models import RecordKind

class RecordRead(BaseModel):
    id: int
    exercise_id: int
    record_kind: RecordKind
    value: float
    source_set_id: int
    previous_value: float | None = None
    achieved_at: datetime

    model_config = {"from_attributes": True}

class WeeklyCount(BaseModel):
    count: int

class RecalcRead(BaseModel):
    upserted: int
    deleted: int

    model_config = {"from_attributes": True}
