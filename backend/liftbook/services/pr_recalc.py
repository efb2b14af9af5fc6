"""
Full rebuild of a user's records for one exercise.

Used after set edits, set deletes and session discards. The result depends
only on the sets currently stored, and a run that finds nothing to change
writes nothing.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from liftbook.models import Exercise, LoggedSet, RecordKind
from liftbook.repositories.record_repo import RecordRepository
from liftbook.repositories.set_repo import SetRepository
from liftbook.services.scoring import score_logged_set

log = logging.getLogger(__name__)


@dataclass(slots=True)
class RecalcResult:
    upserted: int = 0
    deleted: int = 0

    @property
    def writes(self) -> int:
        return self.upserted + self.deleted


def best_sets_by_kind(sets: list[LoggedSet], is_timed: bool) -> dict[RecordKind, tuple[float, LoggedSet]]:
    """Highest-scoring set per kind; on equal scores the earliest set keeps the title."""
    best: dict[RecordKind, tuple[float, LoggedSet]] = {}
    for s in sets:
        score = score_logged_set(s, is_timed)
        if score is None:
            continue
        current = best.get(score.kind)
        if current is None or score.value > current[0]:
            best[score.kind] = (score.value, s)
    return best


def recalculate_records(db: Session, user_id: int, exercise_id: int) -> RecalcResult:
    result = RecalcResult()
    exercise = db.get(Exercise, exercise_id)
    if exercise is None:
        return result

    records = RecordRepository(db)
    sets = SetRepository(db).list_qualifying_sets(user_id, exercise_id)
    best = best_sets_by_kind(sets, exercise.is_timed)
    stored = {pr.record_kind: pr for pr in records.list_for_exercise(user_id, exercise_id)}

    for kind in RecordKind:
        winner = best.get(kind)
        existing = stored.get(kind)

        if winner is None:
            if existing is not None:
                records.delete_best(existing)
                result.deleted += 1
            continue

        value, source = winner
        if existing is not None and existing.value == value and existing.source_set_id == source.id:
            continue

        if existing is not None and existing.source_set_id == source.id:
            # Same set, edited value: the moment it was achieved does not move
            achieved_at = existing.achieved_at
        else:
            achieved_at = source.completed_at

        records.upsert_best(
            user_id,
            exercise_id,
            kind,
            value=value,
            source_set_id=source.id,
            previous_value=existing.previous_value if existing is not None else None,
            achieved_at=achieved_at,
            existing=existing,
        )
        result.upserted += 1

    if result.writes:
        log.info("recalculated records user=%s exercise=%s upserted=%d deleted=%d",
                 user_id, exercise_id, result.upserted, result.deleted)
    return result
