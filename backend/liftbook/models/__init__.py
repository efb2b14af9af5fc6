from liftbook.models.user import User
from liftbook.models.exercise import Exercise, MuscleGroup
from liftbook.models.workout_session import WorkoutSession
from liftbook.models.logged_set import LoggedSet
from liftbook.models.personal_record import PersonalRecord, RecordKind
from liftbook.models.achievement import (
    Achievement, AchievementCategory, AchievementRarity, UserAchievement,
)
from liftbook.models.challenge import (
    Challenge, ChallengeParticipant, ChallengeProgressEvent, ChallengeStatus, ChallengeType,
)
from liftbook.models.activity import ActivityFeedItem, ActivityType

__all__ = [
    "User",
    "Exercise",
    "MuscleGroup",
    "WorkoutSession",
    "LoggedSet",
    "PersonalRecord",
    "RecordKind",
    "Achievement",
    "AchievementCategory",
    "AchievementRarity",
    "UserAchievement",
    "Challenge",
    "ChallengeParticipant",
    "ChallengeProgressEvent",
    "ChallengeStatus",
    "ChallengeType",
    "ActivityFeedItem",
    "ActivityType",
]
