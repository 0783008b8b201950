"""Survey, question and choice models."""
from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from surveygenie.database import Base
from surveygenie.models.base import get_question_type_column_type


class Survey(Base):
    """A multi-question survey owned by a user."""

    __tablename__ = "surveys"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    # Stored as survey_description; exposed as ``description``
    description = Column("survey_description", Text, nullable=False)

    owner = relationship("User", back_populates="surveys")
    questions = relationship(
        "Question",
        back_populates="survey",
        order_by="Question.id",
        passive_deletes=True,
    )
    responses = relationship("Response", back_populates="survey", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<Survey(id={self.id}, user_id={self.user_id}, title={self.title!r})>"


class Question(Base):
    """A single question belonging to exactly one survey."""

    __tablename__ = "questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column("question_text", Text, nullable=False)
    type = Column("question_type", get_question_type_column_type(), nullable=False)

    survey = relationship("Survey", back_populates="questions")
    choices = relationship(
        "Choice",
        back_populates="question",
        order_by="Choice.id",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Question(id={self.id}, survey_id={self.survey_id}, type={self.type!r})>"


class Choice(Base):
    """An option of a Multiple Choice question."""

    __tablename__ = "choices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column("choice_text", Text, nullable=False)

    question = relationship("Question", back_populates="choices")

    def __repr__(self) -> str:
        return f"<Choice(id={self.id}, question_id={self.question_id})>"
