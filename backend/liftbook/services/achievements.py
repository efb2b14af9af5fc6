"""
Achievement evaluation.

Every catalog entry belongs to a category whose rule compares one aggregate
stat against a threshold looked up by the entry's code. Entries whose code
or category is unknown never unlock; they are logged and skipped so one bad
catalog row cannot abort the batch.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Literal, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from liftbook.models import (
    Achievement, AchievementCategory, AchievementRarity, ActivityType, MuscleGroup,
)
from liftbook.repositories.achievement_repo import AchievementRepository
from liftbook.repositories.activity_repo import ActivityRepository
from liftbook.repositories.record_repo import RecordRepository
from liftbook.repositories.session_repo import SessionRepository
from liftbook.repositories.set_repo import SetRepository
from liftbook.services.streaks import consistency_streak, current_streak
from liftbook.settings import get_settings

log = logging.getLogger(__name__)

Trigger = Literal["workout_complete", "pr_achieved", "manual"]

DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "achievements.json"

MILESTONE_THRESHOLDS = {
    "FIRST_WORKOUT": 1,
    "WORKOUTS_5": 5,
    "WORKOUTS_10": 10,
    "WORKOUTS_50": 50,
    "WORKOUTS_100": 100,
    "WORKOUTS_365": 365,
}
STREAK_THRESHOLDS = {
    "STREAK_1": 1,
    "STREAK_4": 4,
    "STREAK_13": 13,
    "STREAK_26": 26,
    "STREAK_52": 52,
}
PR_THRESHOLDS = {
    "FIRST_PR": 1,
    "PRS_5": 5,
    "PRS_10": 10,
    "PRS_25": 25,
    "PRS_50": 50,
}
VOLUME_THRESHOLDS = {
    "VOLUME_1000": 1000,
    "VOLUME_10000": 10000,
    "VOLUME_100000": 100000,
    "VOLUME_500000": 500000,
    "VOLUME_1000000": 1000000,
}
CONSISTENCY_THRESHOLDS = {
    "CONSISTENCY_3X4": 4,
    "CONSISTENCY_3X12": 12,
}
MUSCLE_FOCUS_TARGETS = {
    "MUSCLE_CHEST_50": (MuscleGroup.CHEST, 50),
    "MUSCLE_BACK_50": (MuscleGroup.BACK, 50),
    "MUSCLE_LEGS_50": (MuscleGroup.LEGS, 50),
    "MUSCLE_SHOULDERS_50": (MuscleGroup.SHOULDERS, 50),
    "MUSCLE_ARMS_50": (MuscleGroup.ARMS, 50),
    "MUSCLE_CORE_50": (MuscleGroup.CORE, 50),
}


@dataclass(slots=True)
class AchievementStats:
    total_workouts: int = 0
    total_prs: int = 0
    total_volume: float = 0.0
    current_streak: int = 0
    consistency_streak: int = 0
    muscle_group_sets: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True)
class NewlyEarned:
    id: int
    user_achievement_id: int
    code: str
    name: str
    description: str
    rarity: AchievementRarity
    icon: str


def gather_stats(db: Session, user_id: int, today: Optional[date] = None) -> AchievementStats:
    sets = SetRepository(db)
    return AchievementStats(
        total_workouts=SessionRepository(db).count_completed(user_id),
        total_prs=RecordRepository(db).count_for_user(user_id),
        total_volume=sets.total_volume(user_id),
        current_streak=current_streak(db, user_id, today),
        consistency_streak=consistency_streak(db, user_id, today),
        muscle_group_sets=sets.muscle_group_set_counts(user_id),
    )


def _reaches(value: float, table: dict[str, int], code: str) -> bool:
    threshold = table.get(code)
    if threshold is None:
        raise LookupError(code)
    return value >= threshold


def _muscle_focus(stats: AchievementStats, code: str) -> bool:
    target = MUSCLE_FOCUS_TARGETS.get(code)
    if target is None:
        raise LookupError(code)
    muscle, threshold = target
    return stats.muscle_group_sets.get(muscle.value, 0) >= threshold


RULES: dict[AchievementCategory, Callable[[AchievementStats, str], bool]] = {
    AchievementCategory.MILESTONE: lambda s, c: _reaches(s.total_workouts, MILESTONE_THRESHOLDS, c),
    AchievementCategory.STREAK: lambda s, c: _reaches(s.current_streak, STREAK_THRESHOLDS, c),
    AchievementCategory.PERSONAL_RECORD: lambda s, c: _reaches(s.total_prs, PR_THRESHOLDS, c),
    AchievementCategory.VOLUME: lambda s, c: _reaches(s.total_volume, VOLUME_THRESHOLDS, c),
    AchievementCategory.CONSISTENCY: lambda s, c: _reaches(s.consistency_streak, CONSISTENCY_THRESHOLDS, c),
    AchievementCategory.MUSCLE_FOCUS: _muscle_focus,
}


def is_earned(category, code: str, stats: AchievementStats) -> bool:
    """Evaluate one catalog entry. Anything unrecognised fails closed."""
    try:
        rule = RULES[AchievementCategory(category)]
        return bool(rule(stats, code))
    except LookupError:
        log.warning("skipping achievement with unknown code %r (category %s)", code, category)
    except (TypeError, ValueError):
        log.warning("skipping malformed achievement %r (category %r)", code, category)
    return False


def evaluate_achievements(
    db: Session,
    user_id: int,
    trigger: Trigger = "manual",
    *,
    today: Optional[date] = None,
) -> list[NewlyEarned]:
    """
    Unlock every catalog entry the user now qualifies for.

    Each unlock commits together with its feed entry. Running this again
    with unchanged stats unlocks nothing.
    """
    repo = AchievementRepository(db)
    activity = ActivityRepository(db)

    stats = gather_stats(db, user_id, today)
    earned_ids = repo.earned_ids(user_id)
    newly: list[NewlyEarned] = []

    for achievement in repo.list_catalog():
        if achievement.id in earned_ids:
            continue
        if not is_earned(achievement.category, achievement.code, stats):
            continue
        try:
            ua = repo.unlock(user_id, achievement.id)
            activity.record(
                user_id,
                ActivityType.ACHIEVEMENT_EARNED,
                reference_id=ua.id,
                metadata={
                    "achievement_name": achievement.name,
                    "achievement_icon": achievement.icon,
                    "achievement_rarity": achievement.rarity.value,
                },
            )
            db.commit()
        except IntegrityError:
            # Another evaluation for this user unlocked it first
            db.rollback()
            log.info("achievement %s already unlocked for user=%s", achievement.code, user_id)
            continue

        log.info("achievement unlocked user=%s code=%s trigger=%s", user_id, achievement.code, trigger)
        newly.append(NewlyEarned(
            id=achievement.id,
            user_achievement_id=ua.id,
            code=achievement.code,
            name=achievement.name,
            description=achievement.description,
            rarity=achievement.rarity,
            icon=achievement.icon,
        ))
    return newly


# Catalog and read side

def load_catalog(db: Session, path: str | Path | None = None) -> int:
    """Create or refresh catalog rows from a JSON list, keyed by code. Returns rows touched."""
    path = Path(path or get_settings().ACHIEVEMENT_CATALOG_PATH or DEFAULT_CATALOG)
    entries = json.loads(path.read_text(encoding="utf-8"))
    repo = AchievementRepository(db)
    touched = 0
    for order, entry in enumerate(entries):
        try:
            code = entry["code"]
            category = AchievementCategory(entry["category"])
            rarity = AchievementRarity(entry.get("rarity", "COMMON"))
            threshold = int(entry.get("threshold", 1))
        except (KeyError, TypeError, ValueError):
            log.warning("skipping malformed catalog entry %r", entry)
            continue
        row = repo.get_by_code(code)
        if row is None:
            row = Achievement(code=code)
            db.add(row)
        row.name = entry.get("name", code)
        row.description = entry.get("description", "")
        row.category = category
        row.rarity = rarity
        row.icon = entry.get("icon", "")
        row.threshold = threshold
        row.sort_order = entry.get("sort_order", order)
        row.is_hidden = bool(entry.get("is_hidden", False))
        touched += 1
    db.commit()
    log.info("achievement catalog loaded from %s (%d entries)", path, touched)
    return touched


def list_achievements(db: Session, user_id: int) -> dict:
    repo = AchievementRepository(db)
    earned = repo.list_earned(user_id)
    catalog = repo.list_catalog(include_hidden=False)
    return {
        "earned": earned,
        "all": catalog,
        "earned_count": len(earned),
        "total_count": len(catalog),
    }


def unnotified_achievements(db: Session, user_id: int):
    return AchievementRepository(db).list_unnotified(user_id)


def mark_notified(db: Session, user_id: int, ids: list[int]) -> int:
    n = AchievementRepository(db).mark_notified(user_id, ids)
    db.commit()
    return n
