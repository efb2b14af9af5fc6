"""
Weekly training streaks.

A streak counts consecutive Monday-start weeks that contain enough completed
sessions. It is derived on demand and never stored.
"""
from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from liftbook.repositories.session_repo import SessionRepository
from liftbook.settings import get_settings

ONE_WEEK = timedelta(days=7)


def local_date(value: date | datetime, tz: Optional[ZoneInfo] = None) -> date:
    """Calendar date of ``value`` in the configured zone. Naive datetimes are UTC."""
    if not isinstance(value, datetime):
        return value
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz or ZoneInfo(get_settings().TIMEZONE)).date()


def week_start(value: date | datetime, tz: Optional[ZoneInfo] = None) -> date:
    d = local_date(value, tz)
    # date.weekday(): Monday=0 .. Sunday=6, so Sunday steps back six days
    return d - timedelta(days=d.weekday())


def weekly_buckets(timestamps: Iterable[date | datetime], tz: Optional[ZoneInfo] = None) -> Counter:
    return Counter(week_start(ts, tz) for ts in timestamps if ts is not None)


def streak_from_timestamps(
    timestamps: Iterable[date | datetime],
    today: date | datetime,
    *,
    min_sessions: int = 1,
    tz: Optional[ZoneInfo] = None,
) -> int:
    """
    Consecutive qualifying weeks ending at this week or last week.

    A week qualifies with at least ``min_sessions`` sessions. The newest
    qualifying week may be last week (the current one is still open); any
    older and the streak is 0.
    """
    buckets = weekly_buckets(timestamps, tz)
    weeks = sorted((wk for wk, n in buckets.items() if n >= min_sessions), reverse=True)
    if not weeks:
        return 0

    this_week = week_start(today, tz)
    if weeks[0] not in (this_week, this_week - ONE_WEEK):
        return 0

    streak = 0
    expected = weeks[0]
    for wk in weeks:
        if wk != expected:
            break
        streak += 1
        expected -= ONE_WEEK
    return streak


def _today() -> date:
    return local_date(datetime.now(timezone.utc))


def current_streak(db: Session, user_id: int, today: Optional[date] = None) -> int:
    stamps = SessionRepository(db).completed_timestamps(user_id)
    return streak_from_timestamps(stamps, today or _today())


def consistency_streak(db: Session, user_id: int, today: Optional[date] = None) -> int:
    """Like ``current_streak`` but a week needs CONSISTENCY_MIN_SESSIONS workouts."""
    stamps = SessionRepository(db).completed_timestamps(user_id)
    return streak_from_timestamps(
        stamps, today or _today(), min_sessions=get_settings().CONSISTENCY_MIN_SESSIONS
    )
