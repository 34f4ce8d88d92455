"""workouts, workout exercises, sets, templates, exercise catalogue

Revision ID: 4b1e7c2d9a10
Revises:
Create Date: 2025-09-14 18:02:11.402117

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1e7c2d9a10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) exercise catalogue
    op.create_table(
        'exercises',
        sa.Column('exercise_id', sa.String(length=64), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False, index=True),
        sa.Column('muscle_group', sa.String(length=60), nullable=True),
    )

    # 2) workouts
    op.create_table(
        'workouts',
        sa.Column('workout_id', sa.String(length=64), primary_key=True),
        sa.Column('user_id', sa.String(length=64), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('date_performed', sa.Date(), nullable=False, index=True),
        sa.Column('duration', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('template_id', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    # 3) workout_exercises
    op.create_table(
        'workout_exercises',
        sa.Column('workout_exercises_id', sa.String(length=64), primary_key=True),
        sa.Column('workout_id', sa.String(length=64), sa.ForeignKey('workouts.workout_id'), nullable=False, index=True),
        sa.Column('exercise_id', sa.String(length=64), nullable=False, index=True),
        sa.Column('exercise_order', sa.Integer(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('workout_id', 'exercise_order', name='uq_workout_exercise_order'),
    )

    # 4) sets (workout_id kept alongside workout_exercises_id)
    op.create_table(
        'sets',
        sa.Column('set_id', sa.String(length=64), primary_key=True),
        sa.Column('workout_id', sa.String(length=64), sa.ForeignKey('workouts.workout_id'), nullable=False, index=True),
        sa.Column('workout_exercises_id', sa.String(length=64), sa.ForeignKey('workout_exercises.workout_exercises_id'), nullable=False, index=True),
        sa.Column('weight', sa.Numeric(10, 2), nullable=False, server_default='0'),
        sa.Column('reps', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rir', sa.Integer(), nullable=True),
        sa.Column('set_order', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.UniqueConstraint('workout_exercises_id', 'set_order', name='uq_set_order'),
    )

    # 5) templates
    op.create_table(
        'workout_templates',
        sa.Column('template_id', sa.String(length=64), primary_key=True),
        sa.Column('created_by', sa.String(length=64), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('is_public', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    )

    # 6) template_exercises
    op.create_table(
        'template_exercises',
        sa.Column('template_exercise_id', sa.String(length=64), primary_key=True),
        sa.Column('template_id', sa.String(length=64), sa.ForeignKey('workout_templates.template_id'), nullable=False, index=True),
        sa.Column('exercise_id', sa.String(length=64), nullable=False),
        sa.Column('exercise_order', sa.Integer(), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('weight', sa.Numeric(10, 2), nullable=True),
        sa.Column('reps', sa.Integer(), nullable=True),
        sa.Column('rep_range_min', sa.Integer(), nullable=True),
        sa.Column('rep_range_max', sa.Integer(), nullable=True),
        sa.Column('rir', sa.Integer(), nullable=True),
        sa.Column('rir_range_min', sa.Integer(), nullable=True),
        sa.Column('rir_range_max', sa.Integer(), nullable=True),
        sa.UniqueConstraint('template_id', 'exercise_order', name='uq_template_exercise_order'),
    )


def downgrade() -> None:
    # children before parents
    op.drop_table('template_exercises')
    op.drop_table('workout_templates')
    op.drop_table('sets')
    op.drop_table('workout_exercises')
    op.drop_table('workouts')
    op.drop_table('exercises')
