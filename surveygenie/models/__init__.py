"""Database models."""
from surveygenie.models.base import QuestionType, QUESTION_TYPE_VALUES
from surveygenie.models.user import User
from surveygenie.models.survey import Survey, Question, Choice
from surveygenie.models.response import Response, Answer

__all__ = [
    "QuestionType",
    "QUESTION_TYPE_VALUES",
    "User",
    "Survey",
    "Question",
    "Choice",
    "Response",
    "Answer",
]
