"""Challenge progress from completed sessions."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.orm import Session

from liftbook.db import utcnow
from liftbook.models import (
    ActivityType, Challenge, ChallengeStatus, ChallengeType, LoggedSet,
)
from liftbook.repositories.activity_repo import ActivityRepository
from liftbook.repositories.challenge_repo import ChallengeRepository
from liftbook.repositories.set_repo import SetRepository

log = logging.getLogger(__name__)


def _volume(sets: list[LoggedSet]) -> float:
    return sum((s.weight or 0) * (s.reps or 0) for s in sets)


def session_delta(db: Session, challenge: Challenge, session_id: int) -> float:
    """How much one completed session moves a challenge forward."""
    sets = SetRepository(db)
    ctype = challenge.challenge_type
    if ctype == ChallengeType.TOTAL_WORKOUTS:
        return 1
    if ctype == ChallengeType.TOTAL_VOLUME:
        return _volume(sets.working_sets_for_session(session_id))
    if ctype == ChallengeType.TOTAL_SETS:
        return len(sets.working_sets_for_session(session_id))
    if ctype == ChallengeType.SPECIFIC_EXERCISE:
        if challenge.exercise_id is None:
            return 0
        return _volume(sets.working_sets_for_session(session_id, exercise_id=challenge.exercise_id))
    # WORKOUT_STREAK progress is not driven by individual sessions
    return 0


def apply_session_progress(db: Session, user_id: int, session_id: int) -> list[int]:
    """
    Add one session's contribution to each open challenge of the user.

    A session is counted at most once per participant, zero deltas are not
    written, and ``completed_at`` is set the first time progress reaches the
    target. Returns the ids of challenges completed by this call.
    """
    repo = ChallengeRepository(db)
    activity = ActivityRepository(db)
    completed: list[int] = []

    for participation in repo.open_participations(user_id):
        participant = repo.lock_participant(participation.id)
        if participant is None or participant.completed_at is not None:
            continue
        if repo.session_applied(participant.id, session_id):
            continue

        challenge = participant.challenge
        delta = session_delta(db, challenge, session_id)
        if not delta:
            continue

        repo.record_progress(participant, session_id, delta)
        if participant.progress >= challenge.target_value:
            participant.completed_at = utcnow()
            activity.record(
                user_id,
                ActivityType.CHALLENGE_COMPLETED,
                reference_id=challenge.id,
                metadata={"challenge_name": challenge.name},
            )
            completed.append(challenge.id)
            log.info("challenge completed user=%s challenge=%s progress=%s",
                     user_id, challenge.id, participant.progress)
        db.flush()

    db.commit()
    return completed


def list_user_challenges(db: Session, user_id: int, status: Optional[ChallengeStatus] = None) -> list[dict]:
    rows = []
    for p in ChallengeRepository(db).list_participations(user_id):
        if status is not None and p.challenge.status != status:
            continue
        rows.append({
            "challenge": p.challenge,
            "progress": p.progress,
            "completed_at": p.completed_at,
        })
    return rows
