from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select, func
from liftbook.models import Exercise, LoggedSet, WorkoutSession
from liftbook.repositories.base import BaseRepository

class SetRepository(BaseRepository[LoggedSet]):
    model = LoggedSet

    def get_for_user(self, set_id: int, user_id: int) -> Optional[LoggedSet]:
        stmt = select(LoggedSet).join(WorkoutSession, LoggedSet.session_id == WorkoutSession.id)\
                                .where(LoggedSet.id == set_id, WorkoutSession.user_id == user_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_session(self, session_id: int) -> list[LoggedSet]:
        stmt = select(LoggedSet).where(LoggedSet.session_id == session_id).order_by(LoggedSet.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def exercise_ids_for_session(self, session_id: int) -> list[int]:
        stmt = select(LoggedSet.exercise_id).where(LoggedSet.session_id == session_id).distinct()
        return list(self.db.execute(stmt).scalars().all())

    def list_qualifying_sets(self, user_id: int, exercise_id: int) -> list[LoggedSet]:
        """Every working set (no warmups, no dropsets) for one exercise across all sessions."""
        stmt = select(LoggedSet).join(WorkoutSession, LoggedSet.session_id == WorkoutSession.id)\
                                .where(
                                    WorkoutSession.user_id == user_id,
                                    LoggedSet.exercise_id == exercise_id,
                                    LoggedSet.is_warmup.is_(False),
                                    LoggedSet.is_dropset.is_(False),
                                )\
                                .order_by(LoggedSet.completed_at.asc(), LoggedSet.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def next_set_number(self, session_id: int, exercise_id: int) -> int:
        max_no = self.db.execute(
            select(func.max(LoggedSet.set_number)).where(
                LoggedSet.session_id == session_id, LoggedSet.exercise_id == exercise_id
            )
        ).scalar_one()
        return (max_no or 0) + 1

    def create(
        self,
        session_id: int,
        *,
        exercise_id: int,
        set_number: int | None = None,
        weight: float | None = None,
        reps: int | None = None,
        time_seconds: int | None = None,
        is_warmup: bool = False,
        is_dropset: bool = False,
        completed_at: datetime | None = None,
    ) -> LoggedSet:
        if set_number is None:
            set_number = self.next_set_number(session_id, exercise_id)
        s = LoggedSet(
            session_id=session_id,
            exercise_id=exercise_id,
            set_number=set_number,
            weight=weight,
            reps=reps,
            time_seconds=time_seconds,
            is_warmup=is_warmup,
            is_dropset=is_dropset,
        )
        if completed_at is not None:
            s.completed_at = completed_at
        return self.add_and_refresh(s)

    def update(self, s: LoggedSet, **changes) -> LoggedSet:
        for field, value in changes.items():
            setattr(s, field, value)
        self.db.flush()
        return s

    def delete(self, s: LoggedSet) -> None:
        self.db.delete(s)
        self.db.flush()

    # Aggregates for achievements and challenges (completed sessions unless noted)

    def total_volume(self, user_id: int) -> float:
        stmt = select(func.coalesce(func.sum(LoggedSet.weight * LoggedSet.reps), 0))\
            .join(WorkoutSession, LoggedSet.session_id == WorkoutSession.id)\
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.completed_at.is_not(None),
                LoggedSet.is_warmup.is_(False),
            )
        return float(self.db.execute(stmt).scalar_one())

    def muscle_group_set_counts(self, user_id: int) -> dict[str, int]:
        stmt = select(Exercise.muscle_group, func.count(LoggedSet.id))\
            .join(Exercise, LoggedSet.exercise_id == Exercise.id)\
            .join(WorkoutSession, LoggedSet.session_id == WorkoutSession.id)\
            .where(
                WorkoutSession.user_id == user_id,
                WorkoutSession.completed_at.is_not(None),
                LoggedSet.is_warmup.is_(False),
            )\
            .group_by(Exercise.muscle_group)
        return {mg.value: n for mg, n in self.db.execute(stmt).all()}

    def working_sets_for_session(self, session_id: int, *, exercise_id: int | None = None) -> list[LoggedSet]:
        """Non-warmup sets of one session, optionally for a single exercise."""
        stmt = select(LoggedSet).where(LoggedSet.session_id == session_id, LoggedSet.is_warmup.is_(False))
        if exercise_id is not None:
            stmt = stmt.where(LoggedSet.exercise_id == exercise_id)
        return list(self.db.execute(stmt.order_by(LoggedSet.id.asc())).scalars().all())
