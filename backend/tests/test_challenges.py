from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from liftbook.models import (
    ActivityType, Challenge, ChallengeProgressEvent, ChallengeStatus, ChallengeType, MuscleGroup,
)
from liftbook.repositories.activity_repo import ActivityRepository
from liftbook.repositories.challenge_repo import ChallengeRepository
from liftbook.services import workouts
from liftbook.services.challenges import apply_session_progress, list_user_challenges

NOW = datetime.now(timezone.utc)


def make_challenge(db, user, ctype, target, *, exercise_id=None, status=ChallengeStatus.ACTIVE):
    ch = Challenge(
        creator_id=user.id,
        name=f"{ctype.value.title()} challenge",
        challenge_type=ctype,
        target_value=target,
        exercise_id=exercise_id,
        status=status,
        start_date=NOW - timedelta(days=1),
        end_date=NOW + timedelta(days=30),
    )
    db.add(ch)
    db.flush()
    participant = ChallengeRepository(db).join(ch.id, user.id)
    db.commit()
    return ch, participant


def finish_workout(db, user, exercise, *sets):
    sess = workouts.start_session(db, user.id)
    for kw in sets:
        workouts.log_set(db, user.id, sess.id, exercise_id=exercise.id, **kw)
    workouts.complete_session(db, user.id, sess.id)
    return sess


def events_for(db, participant):
    stmt = select(ChallengeProgressEvent).where(ChallengeProgressEvent.participant_id == participant.id)
    return list(db.execute(stmt).scalars().all())


def test_volume_session_applies_once(db, user, bench):
    ch, participant = make_challenge(db, user, ChallengeType.TOTAL_VOLUME, 3000)
    sess = finish_workout(db, user, bench,
                          dict(weight=100, reps=10),
                          dict(weight=100, reps=8),
                          dict(weight=50, reps=12),
                          dict(weight=20, reps=10, is_warmup=True))

    assert apply_session_progress(db, user.id, sess.id) == []
    db.refresh(participant)
    assert participant.progress == 2400

    # a retried follow-up must not count the same session twice
    assert apply_session_progress(db, user.id, sess.id) == []
    db.refresh(participant)
    assert participant.progress == 2400
    assert len(events_for(db, participant)) == 1

def test_completion_is_stamped_once(db, user, bench):
    ch, participant = make_challenge(db, user, ChallengeType.TOTAL_VOLUME, 3000)
    first = finish_workout(db, user, bench, dict(weight=100, reps=24))
    second = finish_workout(db, user, bench, dict(weight=100, reps=6))

    apply_session_progress(db, user.id, first.id)
    assert apply_session_progress(db, user.id, second.id) == [ch.id]
    db.refresh(participant)
    assert participant.progress == 3000
    stamped = participant.completed_at
    assert stamped is not None

    third = finish_workout(db, user, bench, dict(weight=100, reps=10))
    assert apply_session_progress(db, user.id, third.id) == []
    db.refresh(participant)
    assert participant.completed_at == stamped
    assert participant.progress == 3000

    feed = ActivityRepository(db).list_by_user(user.id, activity_type=ActivityType.CHALLENGE_COMPLETED)
    assert [f.reference_id for f in feed] == [ch.id]

def test_zero_delta_writes_nothing(db, user, bench, make_exercise):
    squat = make_exercise("Back Squat", MuscleGroup.LEGS)
    ch, participant = make_challenge(db, user, ChallengeType.SPECIFIC_EXERCISE, 5000, exercise_id=squat.id)
    sess = finish_workout(db, user, bench, dict(weight=100, reps=5))

    assert apply_session_progress(db, user.id, sess.id) == []
    db.refresh(participant)
    assert participant.progress == 0
    assert events_for(db, participant) == []

def test_counting_challenges(db, user, bench):
    _, workouts_p = make_challenge(db, user, ChallengeType.TOTAL_WORKOUTS, 10)
    _, sets_p = make_challenge(db, user, ChallengeType.TOTAL_SETS, 100)
    sess = finish_workout(db, user, bench,
                          dict(weight=100, reps=5),
                          dict(weight=100, reps=5, is_dropset=True),
                          dict(weight=50, reps=5, is_warmup=True))

    apply_session_progress(db, user.id, sess.id)
    db.refresh(workouts_p)
    db.refresh(sets_p)
    assert workouts_p.progress == 1
    assert sets_p.progress == 2

def test_inactive_challenges_are_left_alone(db, user, bench):
    _, participant = make_challenge(db, user, ChallengeType.TOTAL_WORKOUTS, 10, status=ChallengeStatus.UPCOMING)
    sess = finish_workout(db, user, bench, dict(weight=100, reps=5))

    apply_session_progress(db, user.id, sess.id)
    db.refresh(participant)
    assert participant.progress == 0

def test_list_user_challenges_filters_by_status(db, user):
    active, _ = make_challenge(db, user, ChallengeType.TOTAL_WORKOUTS, 10)
    make_challenge(db, user, ChallengeType.TOTAL_WORKOUTS, 10, status=ChallengeStatus.UPCOMING)

    assert len(list_user_challenges(db, user.id)) == 2
    only_active = list_user_challenges(db, user.id, ChallengeStatus.ACTIVE)
    assert [row["challenge"].id for row in only_active] == [active.id]

def test_one_short_of_target_flips_once(db, user, bench):
    ch, participant = make_challenge(db, user, ChallengeType.TOTAL_WORKOUTS, 3)
    participant.progress = 2
    db.commit()
    sess = finish_workout(db, user, bench, dict(weight=100, reps=5))

    assert apply_session_progress(db, user.id, sess.id) == [ch.id]
    assert apply_session_progress(db, user.id, sess.id) == []
    db.refresh(participant)
    assert participant.progress == 3
    assert participant.completed_at is not None
    feed = ActivityRepository(db).list_by_user(user.id, activity_type=ActivityType.CHALLENGE_COMPLETED)
    assert len(feed) == 1

def test_volume_session_one_short_of_target_completes_once(db, user, bench):
    ch, participant = make_challenge(db, user, ChallengeType.TOTAL_VOLUME, 2401)
    participant.progress = 1
    db.commit()
    sess = finish_workout(db, user, bench,
                          dict(weight=100, reps=10),
                          dict(weight=100, reps=8),
                          dict(weight=50, reps=12))

    assert apply_session_progress(db, user.id, sess.id) == [ch.id]
    db.refresh(participant)
    stamped = participant.completed_at
    assert participant.progress == 2401
    assert stamped is not None

    assert apply_session_progress(db, user.id, sess.id) == []
    db.refresh(participant)
    assert participant.progress == 2401
    assert participant.completed_at == stamped
    feed = ActivityRepository(db).list_by_user(user.id, activity_type=ActivityType.CHALLENGE_COMPLETED)
    assert [f.reference_id for f in feed] == [ch.id]
