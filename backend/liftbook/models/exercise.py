from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Integer, String, Enum as SAEnum
from liftbook.db import Base

class MuscleGroup(str, Enum):
    CHEST = "CHEST"
    BACK = "BACK"
    LEGS = "LEGS"
    SHOULDERS = "SHOULDERS"
    ARMS = "ARMS"
    CORE = "CORE"
    CARDIO = "CARDIO"
    FULL_BODY = "FULL_BODY"

class Exercise(Base):
    """Catalog entry; CRUD for exercises lives outside this service."""
    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    muscle_group: Mapped[MuscleGroup] = mapped_column(SAEnum(MuscleGroup, name="muscle_group"), nullable=False)
    # Timed exercises (planks, carries) are scored on seconds, not reps
    is_timed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
