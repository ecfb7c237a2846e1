"""create workout sessions, exercise logs and set entries

Revision ID: 4b1e9c2d7a10
Revises:
Create Date: 2026-10-19 09:12:40.218431

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

muscle_group = sa.Enum('Chest', 'Back', 'Legs', 'Shoulders', 'Arms', 'Core', 'Full Body', name='muscle_group')


# revision identifiers, used by Alembic.
revision: str = '4b1e9c2d7a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) sessions
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_completed', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_workout_sessions_date', 'workout_sessions', ['date'])

    # 2) exercises within a session
    op.create_table(
        'exercise_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_name', sa.String(length=120), nullable=False),
        sa.Column('muscle_group', muscle_group, nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_exercise_logs_session_id', 'exercise_logs', ['session_id'])
    op.create_index('ix_exercise_logs_exercise_name', 'exercise_logs', ['exercise_name'])

    # 3) sets
    op.create_table(
        'set_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercise_logs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('set_count', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('is_single_arm', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('is_pr', sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index('ix_set_entries_exercise_id', 'set_entries', ['exercise_id'])
    op.create_index('ix_set_entries_timestamp', 'set_entries', ['timestamp'])


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('set_entries')
    op.drop_table('exercise_logs')
    op.drop_table('workout_sessions')
