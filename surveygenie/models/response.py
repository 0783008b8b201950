"""Survey completion (response) and answer models."""
from datetime import datetime, UTC

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from surveygenie.database import Base


class Response(Base):
    """One anonymous completion of a survey."""

    __tablename__ = "responses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    survey_id = Column(Integer, ForeignKey("surveys.id", ondelete="CASCADE"), nullable=False, index=True)
    completed_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(UTC),
    )

    survey = relationship("Survey", back_populates="responses")
    answers = relationship(
        "Answer",
        back_populates="response",
        order_by="Answer.id",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Response(id={self.id}, survey_id={self.survey_id}, completed_at={self.completed_at})>"


class Answer(Base):
    """Answer text for one question within a response.

    ``question_id`` is not checked against the response's survey.
    """

    __tablename__ = "answers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    response_id = Column(Integer, ForeignKey("responses.id", ondelete="CASCADE"), nullable=False, index=True)
    question_id = Column(Integer, ForeignKey("questions.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column("answer_text", Text, nullable=False)

    response = relationship("Response", back_populates="answers")
    question = relationship("Question")

    def __repr__(self) -> str:
        return f"<Answer(id={self.id}, response_id={self.response_id}, question_id={self.question_id})>"
