"""
Fast-path PR check run when a set is logged.

Compares the new set against the stored best only; the full rebuild lives
in ``pr_recalc``. Runs inside the caller's transaction, after the set has
been flushed, and never commits.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from liftbook.models import ActivityType, LoggedSet, PersonalRecord, RecordKind
from liftbook.repositories.activity_repo import ActivityRepository
from liftbook.repositories.record_repo import RecordRepository
from liftbook.services.scoring import is_dominated, score_logged_set

log = logging.getLogger(__name__)


@dataclass(slots=True)
class PRResult:
    is_new_pr: bool = False
    new_record: Optional[float] = None
    previous_record: Optional[float] = None
    record_kind: Optional[RecordKind] = None
    weight: Optional[float] = None
    reps: Optional[int] = None
    time_seconds: Optional[int] = None
    # A higher-tier record already exists, so the UI should not celebrate this one
    dominated: bool = False


def _positive(v):
    return v if v else None


def _baseline_for(existing: PersonalRecord, logged_set: LoggedSet) -> Optional[float]:
    """
    The value the new record is shown as beating.

    Beating a record set earlier in this same session keeps that record's own
    baseline, so three escalating PRs in one workout all compare against the
    pre-workout best.
    """
    displaced_set = existing.source_set
    if displaced_set is not None and displaced_set.session_id == logged_set.session_id:
        return existing.previous_value
    return existing.value


def apply_new_set(db: Session, logged_set: LoggedSet, user_id: int) -> PRResult:
    exercise = logged_set.exercise
    score = score_logged_set(logged_set, exercise.is_timed)
    if score is None:
        return PRResult()

    records = RecordRepository(db)
    existing = records.find_best(user_id, logged_set.exercise_id, score.kind, for_update=True)
    if existing is not None and score.value <= existing.value:
        # ties do not create a new PR
        return PRResult()

    previous = _baseline_for(existing, logged_set) if existing is not None else None
    other_kinds = [
        pr.record_kind
        for pr in records.list_for_exercise(user_id, logged_set.exercise_id)
        if pr.record_kind != score.kind
    ]

    pr = records.upsert_best(
        user_id,
        logged_set.exercise_id,
        score.kind,
        value=score.value,
        source_set_id=logged_set.id,
        previous_value=previous,
        achieved_at=logged_set.completed_at,
        existing=existing,
    )

    weight = _positive(logged_set.weight)
    reps = _positive(logged_set.reps)
    time_seconds = _positive(logged_set.time_seconds)

    ActivityRepository(db).record(
        user_id,
        ActivityType.PR_ACHIEVED,
        reference_id=pr.id,
        metadata={
            "exercise_name": exercise.name,
            "record_kind": score.kind.value,
            "value": score.value,
            "weight": weight,
            "reps": reps,
            "time_seconds": time_seconds,
        },
    )
    log.info("new PR user=%s exercise=%s kind=%s value=%s previous=%s",
             user_id, logged_set.exercise_id, score.kind.value, score.value, previous)

    return PRResult(
        is_new_pr=True,
        new_record=score.value,
        previous_record=previous,
        record_kind=score.kind,
        weight=weight,
        reps=reps,
        time_seconds=time_seconds,
        dominated=is_dominated(score.kind, other_kinds),
    )
