"""create progression tables

Revision ID: 7c2e91a4d3f0
Revises:
Create Date: 2026-02-06 14:50:41.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '7c2e91a4d3f0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=True),
        sa.Column('full_name', sa.String(), nullable=True),
        sa.Column('role', sa.String(), nullable=True),
        sa.Column('avatar_url', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('total_points_earned', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table('courses',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('language', sa.String(), nullable=True),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_courses_id'), 'courses', ['id'], unique=False)

    op.create_table('lessons',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('is_locked', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('course_id', 'order_index', name='uq_lessons_course_order')
    )
    op.create_index(op.f('ix_lessons_id'), 'lessons', ['id'], unique=False)

    op.create_table('exercises',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('lesson_id', sa.Integer(), nullable=False),
        sa.Column('exercise_type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('points', sa.Integer(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.Column('is_locked', sa.Boolean(), nullable=False),
        sa.Column('explanation', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('correct_answer', sa.String(), nullable=True),
        sa.Column('accepted_answers', sa.String(), nullable=True),
        sa.Column('case_sensitive', sa.Boolean(), nullable=True),
        sa.Column('trim_whitespace', sa.Boolean(), nullable=True),
        sa.Column('audio_url', sa.String(), nullable=True),
        sa.Column('max_replays', sa.Integer(), nullable=True),
        sa.Column('source_text', sa.Text(), nullable=True),
        sa.Column('target_text', sa.Text(), nullable=True),
        sa.Column('source_lang', sa.String(length=10), nullable=True),
        sa.Column('target_lang', sa.String(length=10), nullable=True),
        sa.Column('matching_threshold', sa.Float(), nullable=True),
        sa.CheckConstraint('points >= 0', name='ck_exercises_points_non_negative'),
        sa.ForeignKeyConstraint(['lesson_id'], ['lessons.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('lesson_id', 'order_index', name='uq_exercises_lesson_order')
    )
    op.create_index(op.f('ix_exercises_id'), 'exercises', ['id'], unique=False)

    op.create_table('exercise_options',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=False),
        sa.Column('option_text', sa.String(), nullable=False),
        sa.Column('is_correct', sa.Boolean(), nullable=False),
        sa.Column('order_index', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_exercise_options_id'), 'exercise_options', ['id'], unique=False)

    op.create_table('user_exercise_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('exercise_id', sa.Integer(), nullable=False),
        sa.Column('is_completed', sa.Boolean(), nullable=False),
        sa.Column('points_earned', sa.Integer(), nullable=False),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('attempts_count', sa.Integer(), nullable=False),
        sa.Column('last_answer', sa.String(), nullable=True),
        sa.Column('last_answer_correct', sa.Boolean(), nullable=True),
        sa.Column('first_attempt_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.Column('last_attempt_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['exercise_id'], ['exercises.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'exercise_id', name='uq_user_exercise_progress')
    )
    op.create_index(op.f('ix_user_exercise_progress_id'), 'user_exercise_progress', ['id'], unique=False)
    op.create_index(op.f('ix_user_exercise_progress_user_id'), 'user_exercise_progress', ['user_id'], unique=False)
    op.create_index(op.f('ix_user_exercise_progress_exercise_id'), 'user_exercise_progress', ['exercise_id'], unique=False)
    op.create_index(op.f('ix_user_exercise_progress_completed_at'), 'user_exercise_progress', ['completed_at'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    # Drop child tables first
    op.drop_table('user_exercise_progress')
    op.drop_table('exercise_options')
    op.drop_table('exercises')
    op.drop_table('lessons')
    op.drop_table('courses')
    op.drop_table('users')
