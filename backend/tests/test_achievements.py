import json
import logging
import uuid

import pytest
from sqlalchemy import func, select

from liftbook.models import Achievement, AchievementCategory, ActivityType
from liftbook.repositories.activity_repo import ActivityRepository
from liftbook.services import workouts
from liftbook.services.achievements import (
    AchievementStats, evaluate_achievements, gather_stats, is_earned, list_achievements,
    load_catalog, mark_notified, unnotified_achievements,
)


@pytest.fixture
def catalog(db):
    return load_catalog(db)


def finish_workout(db, user, exercise, *sets):
    sess = workouts.start_session(db, user.id)
    for kw in sets:
        workouts.log_set(db, user.id, sess.id, exercise_id=exercise.id, **kw)
    workouts.complete_session(db, user.id, sess.id)
    return sess


def test_is_earned_thresholds():
    stats = AchievementStats(total_workouts=5, total_prs=1, total_volume=1200.0,
                             current_streak=4, consistency_streak=0,
                             muscle_group_sets={"CHEST": 50, "BACK": 49})
    assert is_earned(AchievementCategory.MILESTONE, "WORKOUTS_5", stats)
    assert not is_earned(AchievementCategory.MILESTONE, "WORKOUTS_10", stats)
    assert is_earned(AchievementCategory.STREAK, "STREAK_4", stats)
    assert is_earned(AchievementCategory.PERSONAL_RECORD, "FIRST_PR", stats)
    assert is_earned(AchievementCategory.VOLUME, "VOLUME_1000", stats)
    assert not is_earned(AchievementCategory.CONSISTENCY, "CONSISTENCY_3X4", stats)
    assert is_earned(AchievementCategory.MUSCLE_FOCUS, "MUSCLE_CHEST_50", stats)
    assert not is_earned(AchievementCategory.MUSCLE_FOCUS, "MUSCLE_BACK_50", stats)

def test_unknown_codes_fail_closed(caplog):
    stats = AchievementStats(total_workouts=1000, current_streak=1000)
    with caplog.at_level(logging.WARNING):
        assert not is_earned(AchievementCategory.MILESTONE, "WORKOUTS_9000", stats)
        # a code from another category's table is still unknown here
        assert not is_earned(AchievementCategory.MILESTONE, "STREAK_4", stats)
        assert not is_earned("NOT_A_CATEGORY", "FIRST_WORKOUT", stats)
    assert "WORKOUTS_9000" in caplog.text

def test_load_catalog_is_keyed_by_code(db):
    first = load_catalog(db)
    second = load_catalog(db)
    assert first == second == 29
    n = db.execute(select(func.count()).select_from(Achievement).where(Achievement.code == "FIRST_WORKOUT")).scalar_one()
    assert n == 1

def test_load_catalog_skips_malformed_entries(db, tmp_path):
    code = f"CUSTOM_{uuid.uuid4().hex[:8].upper()}"
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([
        {"code": code, "name": "Custom", "category": "MILESTONE", "threshold": 1},
        {"code": "BROKEN", "category": "NOT_A_CATEGORY"},
        {"name": "no code"},
    ]))
    assert load_catalog(db, path) == 1
    row = db.execute(select(Achievement).where(Achievement.code == code)).scalar_one()
    assert row.category == AchievementCategory.MILESTONE

def test_gather_stats_counts_completed_working_sets(db, user, bench):
    finish_workout(db, user, bench,
                   dict(weight=100, reps=5),
                   dict(weight=40, reps=10, is_warmup=True),
                   dict(weight=60, reps=10))
    # an unfinished session contributes nothing
    open_sess = workouts.start_session(db, user.id)
    workouts.log_set(db, user.id, open_sess.id, exercise_id=bench.id, weight=200, reps=10)

    stats = gather_stats(db, user.id)
    assert stats.total_workouts == 1
    assert stats.total_volume == 1100
    assert stats.muscle_group_sets == {"CHEST": 2}
    assert stats.current_streak == 1
    assert stats.total_prs == 1

def test_unlocks_once_with_feed_entries(db, user, bench, catalog):
    finish_workout(db, user, bench, dict(weight=100, reps=5))

    newly = evaluate_achievements(db, user.id, "workout_complete")
    assert {a.code for a in newly} == {"FIRST_WORKOUT", "STREAK_1", "FIRST_PR"}

    assert evaluate_achievements(db, user.id, "manual") == []

    feed = ActivityRepository(db).list_by_user(user.id, activity_type=ActivityType.ACHIEVEMENT_EARNED)
    assert sorted(f.reference_id for f in feed) == sorted(a.user_achievement_id for a in newly)
    assert {f.details["achievement_name"] for f in feed} == {a.name for a in newly}

def test_catalog_entry_with_unknown_code_never_unlocks(db, user, bench, catalog, tmp_path):
    code = f"MYSTERY_{uuid.uuid4().hex[:8].upper()}"
    path = tmp_path / "extra.json"
    path.write_text(json.dumps([{"code": code, "name": "Mystery", "category": "MILESTONE"}]))
    load_catalog(db, path)

    finish_workout(db, user, bench, dict(weight=100, reps=5))
    newly = evaluate_achievements(db, user.id)
    assert "FIRST_WORKOUT" in {a.code for a in newly}
    assert code not in {a.code for a in newly}

def test_notification_flow(db, user, bench, catalog):
    finish_workout(db, user, bench, dict(weight=100, reps=5))
    newly = evaluate_achievements(db, user.id)

    pending = unnotified_achievements(db, user.id)
    assert len(pending) == len(newly)

    overview = list_achievements(db, user.id)
    assert overview["earned_count"] == len(newly)
    assert overview["total_count"] >= 29

    assert mark_notified(db, user.id, [ua.id for ua in pending]) == len(pending)
    assert unnotified_achievements(db, user.id) == []
    assert mark_notified(db, user.id, []) == 0
