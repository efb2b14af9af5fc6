from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest

from liftbook.models import LoggedSet, RecordKind
from liftbook.services.scoring import (
    Score, is_dominated, score_logged_set, score_set, select_display_record,
)

T0 = datetime(2024, 1, 15, 12, 0)

def rec(kind, value, achieved_at=T0):
    return SimpleNamespace(record_kind=kind, value=value, achieved_at=achieved_at)

@pytest.mark.parametrize("is_timed,weight,reps,secs,expected", [
    (False, 100, 5, None, Score(500, RecordKind.MAX_VOLUME)),
    (False, None, 12, None, Score(12, RecordKind.MAX_REPS)),
    (False, 0, 12, None, Score(12, RecordKind.MAX_REPS)),
    (True, 20, None, 60, Score(1200, RecordKind.MAX_VOLUME)),
    (True, None, None, 90, Score(90, RecordKind.MAX_TIME)),
])
def test_score_set_kinds(is_timed, weight, reps, secs, expected):
    assert score_set(is_timed, weight, reps, secs) == expected

@pytest.mark.parametrize("is_timed,weight,reps,secs", [
    (False, 0, 0, None),
    (False, 100, None, 30),   # rep exercise ignores time
    (True, 50, 10, 0),        # timed exercise ignores reps
    (True, None, None, None),
])
def test_score_set_no_pr_possible(is_timed, weight, reps, secs):
    assert score_set(is_timed, weight, reps, secs) is None

def test_warmups_and_dropsets_never_score():
    warm = LoggedSet(weight=100, reps=5, is_warmup=True, is_dropset=False)
    drop = LoggedSet(weight=100, reps=5, is_warmup=False, is_dropset=True)
    work = LoggedSet(weight=100, reps=5, is_warmup=False, is_dropset=False)
    assert score_logged_set(warm, False) is None
    assert score_logged_set(drop, False) is None
    assert score_logged_set(work, False) == Score(500, RecordKind.MAX_VOLUME)

def test_kind_tiers():
    assert RecordKind.MAX_VOLUME.tier == 0
    assert RecordKind.MAX_TIME.tier == RecordKind.MAX_REPS.tier == 1
    assert RecordKind.MAX_WEIGHT.tier == 2
    assert RecordKind.MAX_VOLUME.outranks(RecordKind.MAX_REPS)
    assert not RecordKind.MAX_TIME.outranks(RecordKind.MAX_REPS)

def test_display_prefers_volume_over_larger_rep_count():
    volume = rec(RecordKind.MAX_VOLUME, 1000)
    reps = rec(RecordKind.MAX_REPS, 24)
    assert select_display_record([reps, volume]) is volume

    # tier wins even when the volume number is smaller
    small_volume = rec(RecordKind.MAX_VOLUME, 10)
    assert select_display_record([reps, small_volume]) is small_volume

def test_display_within_tier_uses_value_then_recency():
    plank = rec(RecordKind.MAX_TIME, 90)
    pushups = rec(RecordKind.MAX_REPS, 24)
    assert select_display_record([pushups, plank]) is plank

    older = rec(RecordKind.MAX_REPS, 24, T0)
    newer = rec(RecordKind.MAX_TIME, 24, T0 + timedelta(days=1))
    assert select_display_record([older, newer]) is newer

def test_display_legacy_weight_ranks_last():
    legacy = rec(RecordKind.MAX_WEIGHT, 140)
    reps = rec(RecordKind.MAX_REPS, 8)
    assert select_display_record([legacy, reps]) is reps

def test_display_empty():
    assert select_display_record([]) is None

def test_is_dominated():
    assert is_dominated(RecordKind.MAX_REPS, [RecordKind.MAX_VOLUME])
    assert not is_dominated(RecordKind.MAX_VOLUME, [RecordKind.MAX_REPS])
    assert not is_dominated(RecordKind.MAX_REPS, [RecordKind.MAX_TIME])
    assert not is_dominated(RecordKind.MAX_REPS, [])
