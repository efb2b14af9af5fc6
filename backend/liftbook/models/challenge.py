from enum import Enum
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import (
    DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint, func, Enum as SAEnum,
)
from liftbook.db import Base

class ChallengeType(str, Enum):
    TOTAL_WORKOUTS = "TOTAL_WORKOUTS"
    TOTAL_VOLUME = "TOTAL_VOLUME"
    TOTAL_SETS = "TOTAL_SETS"
    SPECIFIC_EXERCISE = "SPECIFIC_EXERCISE"
    WORKOUT_STREAK = "WORKOUT_STREAK"

class ChallengeStatus(str, Enum):
    UPCOMING = "UPCOMING"
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

class Challenge(Base):
    __tablename__ = "challenges"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    creator_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    challenge_type: Mapped[ChallengeType] = mapped_column(SAEnum(ChallengeType, name="challenge_type"), nullable=False)
    target_value: Mapped[float] = mapped_column(Float, nullable=False)
    # Only SPECIFIC_EXERCISE challenges carry one
    exercise_id: Mapped[int | None] = mapped_column(ForeignKey("exercises.id", ondelete="SET NULL"), nullable=True)
    status: Mapped[ChallengeStatus] = mapped_column(
        SAEnum(ChallengeStatus, name="challenge_status"), nullable=False, default=ChallengeStatus.UPCOMING, index=True
    )
    start_date: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[DateTime] = mapped_column(DateTime(timezone=True), nullable=False)

    participants = relationship("ChallengeParticipant", back_populates="challenge", cascade="all, delete-orphan")

class ChallengeParticipant(Base):
    __tablename__ = "challenge_participants"
    __table_args__ = (
        UniqueConstraint("challenge_id", "user_id", name="uq_challenge_participants_challenge_user"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    challenge_id: Mapped[int] = mapped_column(ForeignKey("challenges.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    progress: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    # Set once when progress reaches the target, never cleared
    completed_at: Mapped[DateTime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    joined_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    challenge = relationship("Challenge", back_populates="participants")
    events = relationship("ChallengeProgressEvent", back_populates="participant", cascade="all, delete-orphan")

class ChallengeProgressEvent(Base):
    """One row per session already counted towards a participant's progress."""
    __tablename__ = "challenge_progress_events"
    __table_args__ = (
        UniqueConstraint("participant_id", "session_id", name="uq_challenge_progress_events_participant_session"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    participant_id: Mapped[int] = mapped_column(ForeignKey("challenge_participants.id", ondelete="CASCADE"), index=True)
    # No FK: the ledger outlives a discarded session so the delta is never re-added
    session_id: Mapped[int] = mapped_column(Integer, nullable=False)
    delta: Mapped[float] = mapped_column(Float, nullable=False)
    applied_at: Mapped[DateTime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    participant = relationship("ChallengeParticipant", back_populates="events")
