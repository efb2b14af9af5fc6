from __future__ import annotations
from datetime import datetime
from typing import Optional
from sqlalchemy import select, func
from liftbook.models import WorkoutSession
from liftbook.repositories.base import BaseRepository

class SessionRepository(BaseRepository[WorkoutSession]):
    model = WorkoutSession

    def get_for_user(self, session_id: int, user_id: int) -> Optional[WorkoutSession]:
        stmt = select(WorkoutSession).where(
            WorkoutSession.id == session_id, WorkoutSession.user_id == user_id
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_by_user(self, user_id: int, *, limit: int = 50, offset: int = 0) -> list[WorkoutSession]:
        stmt = select(WorkoutSession).where(WorkoutSession.user_id == user_id)\
                                     .order_by(WorkoutSession.id.desc())\
                                     .limit(limit).offset(offset)
        return list(self.db.execute(stmt).scalars().all())

    def create(self, user_id: int, *, notes: str | None = None) -> WorkoutSession:
        return self.add_and_refresh(WorkoutSession(user_id=user_id, notes=notes))

    def complete(
        self,
        sess: WorkoutSession,
        *,
        completed_at: datetime,
        duration_seconds: int | None,
        notes: str | None = None,
    ) -> WorkoutSession:
        sess.completed_at = completed_at
        sess.duration_seconds = duration_seconds
        if notes is not None:
            sess.notes = notes
        self.db.flush()
        return sess

    def delete(self, sess: WorkoutSession) -> None:
        # ORM delete so the set -> record cascade runs on every backend
        self.db.delete(sess)
        self.db.flush()

    def completed_timestamps(self, user_id: int) -> list[datetime]:
        stmt = select(WorkoutSession.completed_at).where(
            WorkoutSession.user_id == user_id, WorkoutSession.completed_at.is_not(None)
        ).order_by(WorkoutSession.completed_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def count_completed(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(WorkoutSession).where(
            WorkoutSession.user_id == user_id, WorkoutSession.completed_at.is_not(None)
        )
        return self.db.execute(stmt).scalar_one()
