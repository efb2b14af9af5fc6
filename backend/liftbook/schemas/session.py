from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, StringConstraints

from liftbook.schemas.achievement import NewlyEarnedRead

# Notes: trimmed, up to 500 chars
NotesStr = Annotated[str, StringConstraints(strip_whitespace=True, max_length=500)]

class SessionCreate(BaseModel):
    notes: NotesStr | None = None

class SessionComplete(BaseModel):
    notes: NotesStr | None = None
    duration_seconds: Annotated[int, Field(ge=0)] | None = None

class SessionRead(BaseModel):
    id: int
    user_id: int
    started_at: datetime
    completed_at: datetime | None = None
    duration_seconds: int | None = None
    notes: str | None = None

    model_config = {"from_attributes": True}

class SessionCompleted(BaseModel):
    session: SessionRead
    streak: int | None = None
    new_achievements: list[NewlyEarnedRead] = []
    completed_challenges: list[int] = []
    # Follow-ups that failed; safe to retry, the workout itself is saved
    failed: list[str] = []
