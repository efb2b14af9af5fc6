"""
PR scoring and display ranking.

Both PR paths (the incremental check at logging time and the full
recalculation after edits/deletes) score sets through ``score_logged_set``
so they can never disagree about what a set is worth.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Protocol, Sequence, TypeVar

from liftbook.models import LoggedSet, RecordKind


@dataclass(frozen=True, slots=True)
class Score:
    value: float
    kind: RecordKind


def score_set(
    is_timed: bool,
    weight: float | None,
    reps: int | None,
    time_seconds: int | None,
) -> Optional[Score]:
    """
    Map raw set values to a (score, kind) pair, or None when no PR is possible.

    Timed exercises: weight x seconds (MAX_VOLUME), else seconds (MAX_TIME).
    Rep exercises:   weight x reps (MAX_VOLUME), else reps (MAX_REPS).
    Missing values count as zero.
    """
    weight = weight or 0
    reps = reps or 0
    time_seconds = time_seconds or 0

    if is_timed:
        if weight > 0 and time_seconds > 0:
            return Score(weight * time_seconds, RecordKind.MAX_VOLUME)
        if time_seconds > 0:
            return Score(float(time_seconds), RecordKind.MAX_TIME)
    else:
        if weight > 0 and reps > 0:
            return Score(weight * reps, RecordKind.MAX_VOLUME)
        if reps > 0:
            return Score(float(reps), RecordKind.MAX_REPS)
    return None


def score_logged_set(logged_set: LoggedSet, is_timed: bool) -> Optional[Score]:
    """Warmups and dropsets never score."""
    if logged_set.is_warmup or logged_set.is_dropset:
        return None
    return score_set(is_timed, logged_set.weight, logged_set.reps, logged_set.time_seconds)


class RankedRecord(Protocol):
    record_kind: RecordKind
    value: float
    achieved_at: datetime


R = TypeVar("R", bound=RankedRecord)


def _rank_key(record: RankedRecord):
    # max() over this key: best tier first, then value, then recency
    return (-record.record_kind.tier, record.value, record.achieved_at)


def select_display_record(records: Sequence[R]) -> Optional[R]:
    """
    From one exercise's records, pick the one to show.

    MAX_VOLUME beats MAX_TIME/MAX_REPS (same tier) which beat MAX_WEIGHT.
    Within a tier the higher value wins, then the more recent achievement.
    """
    if not records:
        return None
    return max(records, key=_rank_key)


def is_dominated(kind: RecordKind, existing_kinds: Iterable[RecordKind]) -> bool:
    """True when a strictly higher-tier record already exists for the exercise."""
    return any(other.outranks(kind) for other in existing_kinds)
