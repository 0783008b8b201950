"""create users, surveys, questions, choices, responses and answers

Revision ID: 3a7c1e9d2b40
Revises:
Create Date: 2026-10-19 12:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a7c1e9d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

QUESTION_TYPES = ('Text', 'Yes/No', 'Multiple Choice')


def _timestamp_default(dialect: str):
    if dialect == 'postgresql':
        return sa.text("timezone('utc', now())")
    return sa.func.now()


def upgrade() -> None:
    """Create the survey schema with cascading foreign keys."""

    bind = op.get_bind()
    dialect = bind.dialect.name if bind else 'postgresql'

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('survey_count', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'surveys',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('survey_description', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_surveys_user_id', 'surveys', ['user_id'], unique=False)

    op.create_table(
        'questions',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('survey_id', sa.Integer(), nullable=False),
        sa.Column('question_text', sa.Text(), nullable=False),
        sa.Column(
            'question_type',
            sa.Enum(*QUESTION_TYPES, name='question_type', create_constraint=True),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(['survey_id'], ['surveys.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_questions_survey_id', 'questions', ['survey_id'], unique=False)

    op.create_table(
        'choices',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('choice_text', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_choices_question_id', 'choices', ['question_id'], unique=False)

    op.create_table(
        'responses',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('survey_id', sa.Integer(), nullable=False),
        sa.Column(
            'completed_at',
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=_timestamp_default(dialect),
        ),
        sa.ForeignKeyConstraint(['survey_id'], ['surveys.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_responses_survey_id', 'responses', ['survey_id'], unique=False)

    op.create_table(
        'answers',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('response_id', sa.Integer(), nullable=False),
        sa.Column('question_id', sa.Integer(), nullable=False),
        sa.Column('answer_text', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['response_id'], ['responses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['question_id'], ['questions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_answers_response_id', 'answers', ['response_id'], unique=False)
    op.create_index('ix_answers_question_id', 'answers', ['question_id'], unique=False)


def downgrade() -> None:
    """Drop the survey schema."""

    op.drop_index('ix_answers_question_id', table_name='answers')
    op.drop_index('ix_answers_response_id', table_name='answers')
    op.drop_table('answers')
    op.drop_index('ix_responses_survey_id', table_name='responses')
    op.drop_table('responses')
    op.drop_index('ix_choices_question_id', table_name='choices')
    op.drop_table('choices')
    op.drop_index('ix_questions_survey_id', table_name='questions')
    op.drop_table('questions')
    op.drop_index('ix_surveys_user_id', table_name='surveys')
    op.drop_table('surveys')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')

    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        sa.Enum(name='question_type').drop(bind, checkfirst=True)
