"""liftbook core schema: sessions, sets, records, achievements, challenges, feed

Revision ID: 4b1d7e0c9a21
Revises:
Create Date: 2026-10-19 10:12:40.118204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# define the enum types once so we can create/drop them explicitly
muscle_group = postgresql.ENUM(
    'CHEST', 'BACK', 'LEGS', 'SHOULDERS', 'ARMS', 'CORE', 'CARDIO', 'FULL_BODY',
    name='muscle_group', create_type=False,
)
record_kind = postgresql.ENUM(
    'MAX_VOLUME', 'MAX_TIME', 'MAX_REPS', 'MAX_WEIGHT', name='record_kind', create_type=False,
)
achievement_category = postgresql.ENUM(
    'MILESTONE', 'STREAK', 'PERSONAL_RECORD', 'VOLUME', 'CONSISTENCY', 'MUSCLE_FOCUS',
    name='achievement_category', create_type=False,
)
achievement_rarity = postgresql.ENUM(
    'COMMON', 'UNCOMMON', 'RARE', 'EPIC', 'LEGENDARY', name='achievement_rarity', create_type=False,
)
challenge_type = postgresql.ENUM(
    'TOTAL_WORKOUTS', 'TOTAL_VOLUME', 'TOTAL_SETS', 'SPECIFIC_EXERCISE', 'WORKOUT_STREAK',
    name='challenge_type', create_type=False,
)
challenge_status = postgresql.ENUM(
    'UPCOMING', 'ACTIVE', 'COMPLETED', 'CANCELLED', name='challenge_status', create_type=False,
)
activity_type = postgresql.ENUM(
    'WORKOUT_COMPLETED', 'PR_ACHIEVED', 'ACHIEVEMENT_EARNED', 'CHALLENGE_JOINED', 'CHALLENGE_COMPLETED',
    name='activity_type', create_type=False,
)

ENUMS = (
    muscle_group, record_kind, achievement_category, achievement_rarity,
    challenge_type, challenge_status, activity_type,
)


# revision identifiers, used by Alembic.
revision: str = '4b1d7e0c9a21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) enum types
    for enum in ENUMS:
        enum.create(op.get_bind(), checkfirst=True)

    # 2) users and the exercise catalog
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('muscle_group', muscle_group, nullable=False),
        sa.Column('is_timed', sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    # 3) sessions and sets
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('started_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True, index=True),
        sa.Column('duration_seconds', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
    )

    op.create_table(
        'logged_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('set_number', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('time_seconds', sa.Integer(), nullable=True),
        sa.Column('is_warmup', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_dropset', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('completed_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )

    # 4) personal records: one current best per (user, exercise, kind)
    op.create_table(
        'personal_records',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('record_kind', record_kind, nullable=False),
        sa.Column('value', sa.Float(), nullable=False),
        sa.Column('source_set_id', sa.Integer(), sa.ForeignKey('logged_sets.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('previous_value', sa.Float(), nullable=True),
        sa.Column('achieved_at', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', 'exercise_id', 'record_kind', name='uq_personal_records_user_exercise_kind'),
    )

    # 5) achievements
    op.create_table(
        'achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('code', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('category', achievement_category, nullable=False, index=True),
        sa.Column('rarity', achievement_rarity, nullable=False, server_default='COMMON'),
        sa.Column('icon', sa.String(length=64), nullable=False, server_default=''),
        sa.Column('threshold', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_hidden', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_achievements_code', 'achievements', ['code'], unique=True)

    op.create_table(
        'user_achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('achievement_id', sa.Integer(), sa.ForeignKey('achievements.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('earned_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('notified', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('user_id', 'achievement_id', name='uq_user_achievements_user_achievement'),
    )

    # 6) challenges and the per-session progress ledger
    op.create_table(
        'challenges',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('creator_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('challenge_type', challenge_type, nullable=False),
        sa.Column('target_value', sa.Float(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', challenge_status, nullable=False, server_default='UPCOMING', index=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'challenge_participants',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('challenge_id', sa.Integer(), sa.ForeignKey('challenges.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('progress', sa.Float(), nullable=False, server_default='0'),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('challenge_id', 'user_id', name='uq_challenge_participants_challenge_user'),
    )

    op.create_table(
        'challenge_progress_events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('participant_id', sa.Integer(), sa.ForeignKey('challenge_participants.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('delta', sa.Float(), nullable=False),
        sa.Column('applied_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('participant_id', 'session_id', name='uq_challenge_progress_events_participant_session'),
    )

    # 7) activity feed
    op.create_table(
        'activity_feed_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('activity_type', activity_type, nullable=False),
        sa.Column('reference_id', sa.Integer(), nullable=True),
        sa.Column('metadata', sa.JSON(), nullable=False, server_default='{}'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False, index=True),
    )


def downgrade() -> None:
    # drop tables in reverse dependency order
    op.drop_table('activity_feed_items')
    op.drop_table('challenge_progress_events')
    op.drop_table('challenge_participants')
    op.drop_table('challenges')
    op.drop_table('user_achievements')
    op.drop_index('ix_achievements_code', table_name='achievements')
    op.drop_table('achievements')
    op.drop_table('personal_records')
    op.drop_table('logged_sets')
    op.drop_table('workout_sessions')
    op.drop_table('exercises')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')

    # then the enum types
    for enum in reversed(ENUMS):
        enum.drop(op.get_bind(), checkfirst=True)
