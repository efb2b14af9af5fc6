"""
Post-commit fan-out.

Runs after the primary set/session transaction has committed. Each task
gets its own database session and transaction, so one failing task neither
rolls back the committed workout nor stops the others. All tasks are safe
to repeat, which makes retrying out-of-band a matter of calling them again.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session, sessionmaker

from liftbook.services.achievements import NewlyEarned, evaluate_achievements
from liftbook.services.challenges import apply_session_progress
from liftbook.services.streaks import current_streak

log = logging.getLogger(__name__)


@dataclass(slots=True)
class FollowupReport:
    streak: Optional[int] = None
    new_achievements: list[NewlyEarned] = field(default_factory=list)
    completed_challenges: list[int] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def refresh_streak(db: Session, user_id: int, session_id: int | None) -> int:
    return current_streak(db, user_id)


def check_achievements_after_workout(db: Session, user_id: int, session_id: int | None) -> list[NewlyEarned]:
    return evaluate_achievements(db, user_id, "workout_complete")


def check_achievements_after_pr(db: Session, user_id: int, session_id: int | None) -> list[NewlyEarned]:
    return evaluate_achievements(db, user_id, "pr_achieved")


def update_challenges(db: Session, user_id: int, session_id: int | None) -> list[int]:
    if session_id is None:
        return []
    return apply_session_progress(db, user_id, session_id)


Task = Callable[[Session, int, Optional[int]], Any]

# name -> (task, report attribute)
WORKOUT_COMPLETE_TASKS: tuple[tuple[str, Task, str], ...] = (
    ("streak", refresh_streak, "streak"),
    ("challenges", update_challenges, "completed_challenges"),
    ("achievements", check_achievements_after_workout, "new_achievements"),
)
PR_ACHIEVED_TASKS: tuple[tuple[str, Task, str], ...] = (
    ("achievements", check_achievements_after_pr, "new_achievements"),
)


def run_task(session_factory: sessionmaker, name: str, task: Task, user_id: int, session_id: int | None):
    """Run one task in its own session. Returns (ok, result)."""
    db = session_factory()
    try:
        return True, task(db, user_id, session_id)
    except Exception:
        db.rollback()
        log.exception("post-commit task %s failed user=%s session=%s", name, user_id, session_id)
        return False, None
    finally:
        db.close()


def dispatch(
    session_factory: sessionmaker,
    user_id: int,
    session_id: int | None,
    tasks: tuple[tuple[str, Task, str], ...] = WORKOUT_COMPLETE_TASKS,
) -> FollowupReport:
    report = FollowupReport()
    for name, task, attr in tasks:
        ok, result = run_task(session_factory, name, task, user_id, session_id)
        if ok:
            setattr(report, attr, result)
        else:
            report.failed.append(name)
    return report
