# liftbook/repositories/record_repo.py
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import select, func

from liftbook.models import PersonalRecord, RecordKind
from liftbook.repositories.base import BaseRepository

class RecordRepository(BaseRepository[PersonalRecord]):
    """Current-best table: at most one row per (user, exercise, kind)."""
    model = PersonalRecord

    # READS
    def find_best(
        self, user_id: int, exercise_id: int, kind: RecordKind, *, for_update: bool = False
    ) -> Optional[PersonalRecord]:
        stmt = select(PersonalRecord).where(
            PersonalRecord.user_id == user_id,
            PersonalRecord.exercise_id == exercise_id,
            PersonalRecord.record_kind == kind,
        )
        if for_update:
            # Two submissions racing on the same row serialise here
            stmt = stmt.with_for_update()
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_exercise(self, user_id: int, exercise_id: int) -> list[PersonalRecord]:
        stmt = select(PersonalRecord).where(
            PersonalRecord.user_id == user_id, PersonalRecord.exercise_id == exercise_id
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_by_user(self, user_id: int) -> list[PersonalRecord]:
        stmt = select(PersonalRecord).where(PersonalRecord.user_id == user_id)\
                                     .order_by(PersonalRecord.achieved_at.desc(), PersonalRecord.id.desc())
        return list(self.db.execute(stmt).scalars().all())

    def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(PersonalRecord).where(PersonalRecord.user_id == user_id)
        return self.db.execute(stmt).scalar_one()

    def count_since(self, user_id: int, since: datetime) -> int:
        stmt = select(func.count()).select_from(PersonalRecord).where(
            PersonalRecord.user_id == user_id, PersonalRecord.achieved_at >= since
        )
        return self.db.execute(stmt).scalar_one()

    # WRITES
    def upsert_best(
        self,
        user_id: int,
        exercise_id: int,
        kind: RecordKind,
        *,
        value: float,
        source_set_id: int,
        previous_value: float | None,
        achieved_at: datetime,
        existing: PersonalRecord | None = None,
    ) -> PersonalRecord:
        """Insert or overwrite the row for (user, exercise, kind).

        Pass ``existing`` when the caller already holds the (locked) row.
        """
        pr = existing if existing is not None else self.find_best(user_id, exercise_id, kind, for_update=True)
        if pr is None:
            pr = PersonalRecord(user_id=user_id, exercise_id=exercise_id, record_kind=kind)
            self.db.add(pr)
        pr.value = value
        pr.source_set_id = source_set_id
        pr.previous_value = previous_value
        pr.achieved_at = achieved_at
        self.db.flush()
        return pr

    def delete_best(self, pr: PersonalRecord) -> None:
        self.db.delete(pr)
        self.db.flush()
