from enum import Enum
from types import MappingProxyType
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import DateTime, Float, ForeignKey, Integer, UniqueConstraint, Enum as SAEnum
from liftbook.db import Base, utcnow

class RecordKind(str, Enum):
    MAX_VOLUME = "MAX_VOLUME"   # weight x reps, or weight x seconds for timed work
    MAX_TIME = "MAX_TIME"       # bodyweight, timed
    MAX_REPS = "MAX_REPS"       # bodyweight, reps
    MAX_WEIGHT = "MAX_WEIGHT"   # legacy weight-only rows

    @property
    def tier(self) -> int:
        """Display priority; lower is more impressive. Kinds may share a tier."""
        return _TIERS[self]

    def outranks(self, other: "RecordKind") -> bool:
        return self.tier < other.tier

_TIERS = MappingProxyType({
    RecordKind.MAX_VOLUME: 0,
    RecordKind.MAX_TIME: 1,
    RecordKind.MAX_REPS: 1,
    RecordKind.MAX_WEIGHT: 2,
})

class PersonalRecord(Base):
    """Current best per (user, exercise, kind). Written by the PR engine only."""
    __tablename__ = "personal_records"
    __table_args__ = (
        UniqueConstraint("user_id", "exercise_id", "record_kind", name="uq_personal_records_user_exercise_kind"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    exercise_id: Mapped[int] = mapped_column(ForeignKey("exercises.id", ondelete="CASCADE"), index=True)
    record_kind: Mapped[RecordKind] = mapped_column(SAEnum(RecordKind, name="record_kind"), nullable=False)
    value: Mapped[float] = mapped_column(Float, nullable=False)
    source_set_id: Mapped[int] = mapped_column(ForeignKey("logged_sets.id", ondelete="CASCADE"), index=True)
    previous_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    achieved_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="personal_records")
    exercise = relationship("Exercise")
    source_set = relationship("LoggedSet", back_populates="personal_records")
