from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from liftbook.services import workouts
from liftbook.services.streaks import (
    consistency_streak, current_streak, local_date, streak_from_timestamps, week_start,
)

UTC = ZoneInfo("UTC")
MONDAY = date(2024, 1, 15)
WEDNESDAY = date(2024, 1, 17)

def at(d, hour=12):
    return datetime(d.year, d.month, d.day, hour, tzinfo=timezone.utc)

def test_week_start_is_monday():
    assert week_start(MONDAY, UTC) == MONDAY
    assert week_start(WEDNESDAY, UTC) == MONDAY
    # Sunday belongs to the week that started six days earlier
    assert week_start(date(2024, 1, 21), UTC) == MONDAY
    assert week_start(date(2024, 1, 14), UTC) == date(2024, 1, 8)

def test_local_date_uses_zone_and_reads_naive_as_utc():
    ny = ZoneInfo("America/New_York")
    # 02:00 UTC Monday is still Sunday evening in New York
    assert local_date(datetime(2024, 1, 15, 2, tzinfo=timezone.utc), ny) == date(2024, 1, 14)
    assert week_start(datetime(2024, 1, 15, 2, tzinfo=timezone.utc), ny) == date(2024, 1, 8)
    assert local_date(datetime(2024, 1, 15, 2), ny) == date(2024, 1, 14)
    assert local_date(date(2024, 1, 15), ny) == date(2024, 1, 15)

def test_session_this_week_counts():
    assert streak_from_timestamps([at(MONDAY)], WEDNESDAY, tz=UTC) >= 1

def test_three_consecutive_weeks():
    stamps = [at(WEDNESDAY), at(WEDNESDAY - timedelta(days=7)), at(WEDNESDAY - timedelta(days=14))]
    assert streak_from_timestamps(stamps, WEDNESDAY, tz=UTC) == 3

def test_gap_stops_the_count():
    stamps = [at(WEDNESDAY), at(WEDNESDAY - timedelta(days=21))]
    assert streak_from_timestamps(stamps, WEDNESDAY, tz=UTC) == 1

def test_several_sessions_in_one_week_are_one_week():
    stamps = [at(MONDAY, h) for h in (7, 12, 18)]
    assert streak_from_timestamps(stamps, WEDNESDAY, tz=UTC) == 1

def test_last_week_only_keeps_streak_alive():
    assert streak_from_timestamps([at(date(2024, 1, 10))], WEDNESDAY, tz=UTC) == 1

def test_fifteen_days_ago_is_broken():
    assert streak_from_timestamps([at(WEDNESDAY - timedelta(days=15))], WEDNESDAY, tz=UTC) == 0

def test_eight_days_ago_depends_on_weekday():
    # Evaluated on a Monday, eight days back is two weeks ago
    assert streak_from_timestamps([at(MONDAY - timedelta(days=8))], MONDAY, tz=UTC) == 0
    # Evaluated on a Wednesday, eight days back is still last week
    assert streak_from_timestamps([at(WEDNESDAY - timedelta(days=8))], WEDNESDAY, tz=UTC) == 1

def test_no_sessions():
    assert streak_from_timestamps([], WEDNESDAY, tz=UTC) == 0

def test_min_sessions_per_week():
    this_week = [at(MONDAY, h) for h in (7, 12, 18)]
    last_week_two = [at(date(2024, 1, 9)), at(date(2024, 1, 11))]
    assert streak_from_timestamps(this_week + last_week_two, WEDNESDAY, min_sessions=3, tz=UTC) == 1

    last_week_three = last_week_two + [at(date(2024, 1, 12))]
    assert streak_from_timestamps(this_week + last_week_three, WEDNESDAY, min_sessions=3, tz=UTC) == 2

def _completed_session(db, user, when):
    sess = workouts.start_session(db, user.id)
    workouts.complete_session(db, user.id, sess.id, completed_at=when)
    return sess

def test_streak_from_stored_sessions(db, user):
    _completed_session(db, user, at(WEDNESDAY))
    _completed_session(db, user, at(WEDNESDAY - timedelta(days=7)))
    # open sessions never count
    workouts.start_session(db, user.id)

    assert current_streak(db, user.id, today=WEDNESDAY) == 2
    assert consistency_streak(db, user.id, today=WEDNESDAY) == 0

def test_consistency_streak_from_stored_sessions(db, user):
    for h in (7, 12, 18):
        _completed_session(db, user, at(MONDAY, h))
    assert consistency_streak(db, user.id, today=WEDNESDAY) == 1
