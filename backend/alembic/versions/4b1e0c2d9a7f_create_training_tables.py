"""create exercise, routine, workout and equipment tables

Revision ID: 4b1e0c2d9a7f
Revises:
Create Date: 2026-10-18 10:12:31.402118

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e0c2d9a7f'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# enums are stored as plain strings (native_enum=False on the models)
UNIT = sa.String(length=2)


def upgrade() -> None:
    # 1) library
    op.create_table(
        'exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('category', sa.String(length=9), nullable=False),
        sa.Column('muscle_groups', sa.JSON(), nullable=False),
        sa.Column('equipment_type', sa.String(length=10), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('is_custom', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_exercises_id', 'exercises', ['id'])
    op.create_index('ix_exercises_name', 'exercises', ['name'], unique=True)

    # 2) routines
    op.create_table(
        'routines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('is_template', sa.Boolean(), nullable=False),
        sa.Column('source', sa.String(length=120), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_routines_id', 'routines', ['id'])

    op.create_table(
        'routine_exercises',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_id', sa.Integer(), sa.ForeignKey('routines.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='SET NULL'), nullable=True),
        sa.Column('order', sa.Integer(), nullable=False),
        sa.Column('target_sets', sa.Integer(), nullable=False),
        sa.Column('target_rep_min', sa.Integer(), nullable=False),
        sa.Column('target_rep_max', sa.Integer(), nullable=False),
        sa.Column('target_rpe', sa.Float(), nullable=True),
        sa.Column('rest_seconds', sa.Integer(), nullable=False),
        sa.Column('next_target_weight', sa.Float(), nullable=True),
    )
    op.create_index('ix_routine_exercises_routine_id', 'routine_exercises', ['routine_id'])
    op.create_index('ix_routine_exercises_exercise_id', 'routine_exercises', ['exercise_id'])

    op.create_table(
        'progression_rules',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_exercise_id', sa.Integer(),
                  sa.ForeignKey('routine_exercises.id', ondelete='CASCADE'), nullable=False),
        sa.Column('increment_amount', sa.Float(), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
        sa.Column('trigger_type', sa.String(length=16), nullable=False),
        sa.Column('consecutive_failures', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('deload_percentage', sa.Float(), nullable=False),
        sa.Column('deload_after_failures', sa.Integer(), nullable=False),
    )
    op.create_index('ix_progression_rules_routine_exercise_id', 'progression_rules',
                    ['routine_exercise_id'], unique=True)

    # 3) workouts
    op.create_table(
        'workout_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('routine_id', sa.Integer(), sa.ForeignKey('routines.id', ondelete='SET NULL'), nullable=True),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
    )
    op.create_index('ix_workout_sessions_routine_id', 'workout_sessions', ['routine_id'])

    op.create_table(
        'set_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('session_id', sa.Integer(), sa.ForeignKey('workout_sessions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('exercise_id', sa.Integer(), sa.ForeignKey('exercises.id', ondelete='SET NULL'), nullable=True),
        sa.Column('set_number', sa.Integer(), nullable=False),
        sa.Column('target_weight', sa.Float(), nullable=False),
        sa.Column('actual_weight', sa.Float(), nullable=False),
        sa.Column('target_reps', sa.Integer(), nullable=False),
        sa.Column('actual_reps', sa.Integer(), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
        sa.Column('is_warmup', sa.Boolean(), nullable=False),
        sa.Column('rpe', sa.Float(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_set_logs_session_id', 'set_logs', ['session_id'])
    op.create_index('ix_set_logs_exercise_id', 'set_logs', ['exercise_id'])

    # 4) equipment
    op.create_table(
        'barbells',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False),
    )
    op.create_table(
        'plates',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
        sa.Column('count', sa.Integer(), nullable=False),
        sa.Column('color', sa.String(length=30), nullable=False),
    )
    op.create_table(
        'dumbbell_sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('available_weights', sa.JSON(), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
    )
    op.create_table(
        'machines',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('min_weight', sa.Float(), nullable=False),
        sa.Column('max_weight', sa.Float(), nullable=False),
        sa.Column('increment', sa.Float(), nullable=False),
        sa.Column('unit', UNIT, nullable=False),
    )
    op.create_table(
        'cable_attachments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False),
    )


def downgrade() -> None:
    for table in (
        'cable_attachments', 'machines', 'dumbbell_sets', 'plates', 'barbells',
        'set_logs', 'workout_sessions', 'progression_rules', 'routine_exercises', 'routines',
        'exercises',
    ):
        op.drop_table(table)
