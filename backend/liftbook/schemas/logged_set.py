from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, model_validator

from liftbook.models import RecordKind

PosInt = Annotated[int, Field(ge=1)]
NonNegInt = Annotated[int, Field(ge=0)]
NonNegFloat = Annotated[float, Field(ge=0, le=2000)]

class SetCreate(BaseModel):
    exercise_id: PosInt
    set_number: PosInt | None = None
    weight: NonNegFloat | None = None
    reps: NonNegInt | None = None
    time_seconds: NonNegInt | None = None
    is_warmup: bool = False
    is_dropset: bool = False

    @model_validator(mode="after")
    def reps_or_time(self):
        # A set has to record something countable
        if not (self.reps or self.time_seconds):
            raise ValueError("set must have either reps or time recorded")
        return self

class SetUpdate(BaseModel):
    weight: NonNegFloat | None = None
    reps: NonNegInt | None = None
    time_seconds: NonNegInt | None = None
    is_warmup: bool | None = None
    is_dropset: bool | None = None

    @model_validator(mode="after")
    def not_both_cleared(self):
        # Only decidable here when both are sent; otherwise the merged row is checked on save
        if {"reps", "time_seconds"} <= self.model_fields_set and not (self.reps or self.time_seconds):
            raise ValueError("set must have either reps or time recorded")
        return self

class SetRead(BaseModel):
    id: int
    session_id: int
    exercise_id: int
    set_number: int
    weight: float | None = None
    reps: int | None = None
    time_seconds: int | None = None
    is_warmup: bool
    is_dropset: bool
    completed_at: datetime

    model_config = {"from_attributes": True}

class PRResultRead(BaseModel):
    is_new_pr: bool
    new_record: float | None = None
    previous_record: float | None = None
    record_kind: RecordKind | None = None
    weight: float | None = None
    reps: int | None = None
    time_seconds: int | None = None
    dominated: bool = False

    model_config = {"from_attributes": True}

class SetLogged(BaseModel):
    set: SetRead
    pr: PRResultRead
