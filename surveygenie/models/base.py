"""Base utilities for SQLAlchemy models."""
from enum import Enum

from sqlalchemy import Enum as SAEnum


class QuestionType(str, Enum):
    """Question type enumeration for type safety."""
    TEXT = "Text"
    YES_NO = "Yes/No"
    MULTIPLE_CHOICE = "Multiple Choice"


QUESTION_TYPE_VALUES = tuple(member.value for member in QuestionType)


def get_question_type_column_type() -> SAEnum:
    """Column type for ``questions.question_type``.

    Creates a named ENUM on PostgreSQL and a CHECK constraint elsewhere, so the
    store itself rejects unrecognized question types.
    """
    return SAEnum(
        *QUESTION_TYPE_VALUES,
        name="question_type",
        create_constraint=True,
        validate_strings=True,
    )
