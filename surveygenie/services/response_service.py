"""Response aggregate service: survey completions and their answers."""
import logging
from collections.abc import Mapping
from datetime import datetime, UTC
from typing import Any, Iterable

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.models import Answer, Question, Response
from surveygenie.schemas.response import (
    AnswerRecord,
    ChartRow,
    CompletedSurvey,
    ResponseAnswer,
    ResponseDetail,
    ResponseSummary,
)
from surveygenie.services.survey_service import parse_positive_id
from surveygenie.utils.datetime_helpers import ensure_utc
from surveygenie.utils.exceptions import BadRequestError, NotFoundError, StoreError

logger = logging.getLogger(__name__)


def _parse_answers(responses: Mapping[Any, Any]) -> list[tuple[int, str]]:
    """Validate question id -> answer text entries, keeping input order."""
    answers = []
    for key, answer_text in responses.items():
        try:
            question_id = int(key)
        except (TypeError, ValueError):
            raise BadRequestError("Invalid question_id or answer_text format") from None
        if isinstance(key, bool) or not isinstance(answer_text, str):
            raise BadRequestError("Invalid question_id or answer_text format")
        answers.append((question_id, answer_text))
    return answers


def build_response_tree(rows: Iterable[Mapping[str, Any]]) -> ResponseDetail | None:
    """Fold flat response/answer/question join rows into one response.

    Response fields come from the first row; every row with an answer id adds
    an answer. Returns None when there are no rows.
    """
    response: dict[str, Any] | None = None
    answers: list[ResponseAnswer] = []

    for row in rows:
        if response is None:
            response = {
                "id": row["response_id"],
                "survey_id": row["survey_id"],
                "completed_at": ensure_utc(row["completed_at"]),
            }
        if row["answer_id"] is not None:
            answers.append(ResponseAnswer(
                id=row["answer_id"],
                question_id=row["question_id"],
                question_text=row["question_text"],
                answer_text=row["answer_text"],
            ))

    if response is None:
        return None
    return ResponseDetail(**response, answers=answers)


class ResponseService:
    """Service for recording and reporting survey responses."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def complete_survey(self, payload: Mapping[str, Any]) -> CompletedSurvey:
        """
        Record a completed survey and its answers in one transaction.

        Args:
            payload: ``{survey_id, responses}`` where responses maps question id
                strings to answer text

        Returns:
            CompletedSurvey with the answers in input order

        Raises:
            BadRequestError: If the payload or any entry is malformed; nothing is written
            StoreError: If the store rejects any write; nothing is persisted
        """
        if not isinstance(payload, Mapping):
            raise BadRequestError("Invalid response format")

        if not payload.get("survey_id"):
            raise BadRequestError("Missing or invalid survey id")
        survey_id = parse_positive_id(payload["survey_id"], "Missing or invalid survey id")

        responses = payload.get("responses")
        if responses is None or not isinstance(responses, Mapping):
            raise BadRequestError("Invalid or missing responses")

        answers = _parse_answers(responses)

        try:
            response = Response(survey_id=survey_id, completed_at=datetime.now(UTC))
            self.db.add(response)
            await self.db.flush()

            inserted: list[Answer] = []
            for question_id, answer_text in answers:
                answer = Answer(response_id=response.id, question_id=question_id, text=answer_text)
                self.db.add(answer)
                inserted.append(answer)
            await self.db.flush()
            await self.db.commit()
        except Exception as exc:
            await self.db.rollback()
            logger.error(f"Completion of survey {survey_id} rolled back: {exc}")
            raise StoreError("Failed to complete survey.", cause=exc) from exc

        logger.info(f"Recorded response {response.id} for survey {survey_id} with {len(inserted)} answers")
        return CompletedSurvey(
            id=response.id,
            survey_id=response.survey_id,
            completed_at=ensure_utc(response.completed_at),
            answers=[
                AnswerRecord(
                    id=answer.id,
                    response_id=answer.response_id,
                    question_id=answer.question_id,
                    answer_text=answer.text,
                )
                for answer in inserted
            ],
        )

    async def get_response(self, response_id: int) -> ResponseDetail:
        """Load one response with its answers and their question text.

        Raises:
            NotFoundError: If no response has this id
        """
        query = (
            select(
                Response.id.label("response_id"),
                Response.survey_id.label("survey_id"),
                Response.completed_at.label("completed_at"),
                Answer.id.label("answer_id"),
                Answer.question_id.label("question_id"),
                Answer.text.label("answer_text"),
                Question.text.label("question_text"),
            )
            .select_from(Response)
            .outerjoin(Answer, Answer.response_id == Response.id)
            .outerjoin(Question, Question.id == Answer.question_id)
            .where(Response.id == response_id)
            .order_by(Answer.id)
        )
        result = await self.db.execute(query)
        response = build_response_tree(result.mappings().all())

        if response is None:
            raise NotFoundError(f"No response found with id: {response_id}")
        return response

    async def get_survey_summary(self, survey_id: int) -> list[ResponseSummary]:
        """List every response to a survey.

        Raises:
            NotFoundError: If the survey has no responses (or does not exist)
        """
        result = await self.db.execute(
            select(Response)
            .where(Response.survey_id == survey_id)
            .order_by(Response.id)
        )
        responses = result.scalars().all()

        if not responses:
            raise NotFoundError(f"No survey found with id: {survey_id}")

        return [
            ResponseSummary(
                id=response.id,
                survey_id=response.survey_id,
                completed_at=ensure_utc(response.completed_at),
            )
            for response in responses
        ]

    async def get_survey_chart_data(self, survey_id: int) -> list[ChartRow]:
        """
        Flatten every answer to a survey's questions into chart rows.

        Rows are ordered by response id then question id. A survey without
        answers yields an empty list rather than an error.
        """
        query = (
            select(
                Response.id.label("response_id"),
                Response.completed_at.label("timestamp"),
                Question.id.label("question_id"),
                Question.text.label("question_text"),
                Question.type.label("question_type"),
                Answer.text.label("answer_text"),
            )
            .select_from(Response)
            .join(Answer, Answer.response_id == Response.id)
            .join(Question, Question.id == Answer.question_id)
            .where(Question.survey_id == survey_id)
            .order_by(Response.id, Question.id)
        )
        result = await self.db.execute(query)
        return [
            ChartRow(**{**row, "timestamp": ensure_utc(row["timestamp"])})
            for row in result.mappings().all()
        ]

    async def delete_response(self, response_id: int) -> None:
        """Delete one response and its answers.

        Raises:
            NotFoundError: If no response has this id
        """
        try:
            result = await self.db.execute(delete(Response).where(Response.id == response_id))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        if result.rowcount == 0:
            raise NotFoundError(f"No response found with id: {response_id}")
        logger.info(f"Deleted response {response_id}")
