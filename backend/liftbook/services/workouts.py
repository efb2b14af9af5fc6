"""
Session and set workflow.

Every public function here is one unit of work: the set/session write, the
PR consequence and any feed entry commit together or not at all. Post-commit
follow-ups (streak, challenges, achievements) are dispatched by the caller
through ``services.followups`` once these return.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from liftbook.db import utcnow
from liftbook.errors import InvalidStateError, NotFoundError
from liftbook.models import ActivityType, Exercise, LoggedSet, WorkoutSession
from liftbook.repositories.activity_repo import ActivityRepository
from liftbook.repositories.session_repo import SessionRepository
from liftbook.repositories.set_repo import SetRepository
from liftbook.repositories.user_repo import UserRepository
from liftbook.services.pr_incremental import PRResult, apply_new_set
from liftbook.services.pr_recalc import RecalcResult, recalculate_records

log = logging.getLogger(__name__)

# Fields a set edit may touch; exercise and session are fixed once logged
EDITABLE_SET_FIELDS = ("weight", "reps", "time_seconds", "is_warmup", "is_dropset")


@dataclass(slots=True)
class LoggedSetResult:
    logged_set: LoggedSet
    pr: PRResult


@dataclass(slots=True)
class DiscardResult:
    exercises: list[int] = field(default_factory=list)
    recalc: RecalcResult = field(default_factory=RecalcResult)


@contextmanager
def unit_of_work(db: Session) -> Iterator[Session]:
    """Commit on success; roll back and re-raise on any storage or domain failure."""
    try:
        yield db
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        log.exception("transaction rolled back")
        raise
    except Exception:
        db.rollback()
        raise


def _session_or_404(db: Session, session_id: int, user_id: int) -> WorkoutSession:
    sess = SessionRepository(db).get_for_user(session_id, user_id)
    if sess is None:
        raise NotFoundError("Session", session_id)
    return sess


def _set_or_404(db: Session, set_id: int, user_id: int) -> LoggedSet:
    s = SetRepository(db).get_for_user(set_id, user_id)
    if s is None:
        raise NotFoundError("Set", set_id)
    return s


def start_session(db: Session, user_id: int, *, notes: str | None = None) -> WorkoutSession:
    with unit_of_work(db):
        sess = SessionRepository(db).create(user_id, notes=notes)
    return sess


def log_set(
    db: Session,
    user_id: int,
    session_id: int,
    *,
    exercise_id: int,
    weight: float | None = None,
    reps: int | None = None,
    time_seconds: int | None = None,
    is_warmup: bool = False,
    is_dropset: bool = False,
    set_number: int | None = None,
    completed_at: datetime | None = None,
) -> LoggedSetResult:
    """Insert a set and run the incremental PR check in the same transaction."""
    with unit_of_work(db):
        UserRepository(db).lock(user_id)
        _session_or_404(db, session_id, user_id)
        if db.get(Exercise, exercise_id) is None:
            raise NotFoundError("Exercise", exercise_id)

        logged = SetRepository(db).create(
            session_id,
            exercise_id=exercise_id,
            set_number=set_number,
            weight=weight,
            reps=reps,
            time_seconds=time_seconds,
            is_warmup=is_warmup,
            is_dropset=is_dropset,
            completed_at=completed_at,
        )
        pr = apply_new_set(db, logged, user_id)
    return LoggedSetResult(logged_set=logged, pr=pr)


def edit_set(db: Session, user_id: int, set_id: int, **changes) -> tuple[LoggedSet, RecalcResult]:
    """Apply field changes to a set, then rebuild that exercise's records."""
    unknown = set(changes) - set(EDITABLE_SET_FIELDS)
    if unknown:
        raise InvalidStateError(f"fields not editable: {', '.join(sorted(unknown))}")

    with unit_of_work(db):
        UserRepository(db).lock(user_id)
        s = _set_or_404(db, set_id, user_id)
        SetRepository(db).update(s, **changes)
        if not (s.reps or s.time_seconds):
            raise InvalidStateError("set must have either reps or time recorded")
        result = recalculate_records(db, user_id, s.exercise_id)
    return s, result


def delete_set(db: Session, user_id: int, set_id: int) -> RecalcResult:
    with unit_of_work(db):
        UserRepository(db).lock(user_id)
        s = _set_or_404(db, set_id, user_id)
        exercise_id = s.exercise_id
        SetRepository(db).delete(s)
        result = recalculate_records(db, user_id, exercise_id)
    return result


def complete_session(
    db: Session,
    user_id: int,
    session_id: int,
    *,
    duration_seconds: int | None = None,
    notes: str | None = None,
    completed_at: datetime | None = None,
) -> WorkoutSession:
    """Mark the session done and post it to the feed. Follow-ups run after this returns."""
    with unit_of_work(db):
        sess = _session_or_404(db, session_id, user_id)
        if sess.completed_at is not None:
            raise InvalidStateError("Session already completed")

        finished = completed_at or utcnow()
        if duration_seconds is None and sess.started_at is not None:
            started = sess.started_at
            if started.tzinfo is None:
                started = started.replace(tzinfo=finished.tzinfo)
            duration_seconds = max(0, int((finished - started).total_seconds()))

        SessionRepository(db).complete(
            sess, completed_at=finished, duration_seconds=duration_seconds, notes=notes
        )
        ActivityRepository(db).record(
            user_id,
            ActivityType.WORKOUT_COMPLETED,
            reference_id=sess.id,
            metadata={"duration_seconds": duration_seconds},
        )
    log.info("session completed user=%s session=%s duration=%s", user_id, session_id, duration_seconds)
    return sess


def discard_session(db: Session, user_id: int, session_id: int) -> DiscardResult:
    """Delete a session with its sets and rebuild records for every exercise it touched."""
    out = DiscardResult()
    with unit_of_work(db):
        UserRepository(db).lock(user_id)
        sess = _session_or_404(db, session_id, user_id)
        out.exercises = SetRepository(db).exercise_ids_for_session(sess.id)
        SessionRepository(db).delete(sess)
        for exercise_id in out.exercises:
            r = recalculate_records(db, user_id, exercise_id)
            out.recalc.upserted += r.upserted
            out.recalc.deleted += r.deleted
    return out


def recalculate(db: Session, user_id: int, exercise_id: int) -> RecalcResult:
    """On-demand rebuild, e.g. from an admin repair script."""
    with unit_of_work(db):
        result = recalculate_records(db, user_id, exercise_id)
    return result


def session_sets(db: Session, user_id: int, session_id: int) -> list[LoggedSet]:
    sess = _session_or_404(db, session_id, user_id)
    return SetRepository(db).list_by_session(sess.id)
