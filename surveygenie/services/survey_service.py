"""Survey aggregate service: surveys with their questions and choices."""
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Iterable

from sqlalchemy import delete, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.models import Choice, Question, QuestionType, Survey, User
from surveygenie.schemas.survey import (
    ChoiceDetail,
    CreatedQuestion,
    CreatedSurvey,
    QuestionDetail,
    SurveyDetail,
    SurveyRecord,
    SurveySummary,
)
from surveygenie.utils.exceptions import BadRequestError, NotFoundError, StoreError
from surveygenie.utils.sql import reject_null_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

# Logical update field -> physical column
SURVEY_UPDATE_COLUMNS = {
    "title": "title",
    "description": "survey_description",
}


def parse_positive_id(value: Any, message: str) -> int:
    """Coerce an id to a positive integer or raise BadRequestError."""
    if isinstance(value, bool):
        raise BadRequestError(message)
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise BadRequestError(message) from None
    if parsed <= 0:
        raise BadRequestError(message)
    return parsed


def _question_type_value(question_type: Any) -> Any:
    # Unrecognized values are passed through for the store to reject
    if isinstance(question_type, QuestionType):
        return question_type.value
    return question_type


def _validate_questions(questions: Any) -> list[Mapping[str, Any]]:
    if questions is None:
        return []
    if isinstance(questions, (str, bytes)) or not isinstance(questions, Sequence):
        raise BadRequestError("Invalid or missing survey data")

    for question in questions:
        if not isinstance(question, Mapping) or not question.get("text") or not question.get("type"):
            raise BadRequestError("Missing question data")

        if question["type"] == QuestionType.MULTIPLE_CHOICE:
            options = question.get("options")
            if not options or isinstance(options, (str, bytes)) or not isinstance(options, Sequence):
                raise BadRequestError("Missing question option data")
            for option in options:
                if not isinstance(option, Mapping) or not option.get("choice_text"):
                    raise BadRequestError("Missing question option data")

    return list(questions)


def build_survey_tree(rows: Iterable[Mapping[str, Any]]) -> SurveyDetail | None:
    """Fold flat survey/question/choice join rows into a nested survey.

    Rows must be ordered by question id then choice id. A row with a null
    question id (survey without questions) contributes only survey fields.
    Returns None when there are no rows at all.
    """
    survey: dict[str, Any] | None = None
    questions: dict[int, dict[str, Any]] = {}

    for row in rows:
        if survey is None:
            survey = {
                "id": row["survey_id"],
                "title": row["survey_title"],
                "description": row["survey_description"],
            }

        question_id = row["question_id"]
        if question_id is None:
            continue

        node = questions.get(question_id)
        if node is None:
            node = {
                "id": question_id,
                "text": row["question_text"],
                "type": row["question_type"],
                "options": [],
            }
            questions[question_id] = node

        if row["choice_id"] is not None:
            node["options"].append(ChoiceDetail(id=row["choice_id"], text=row["choice_text"]))

    if survey is None:
        return None

    return SurveyDetail(
        **survey,
        questions=[QuestionDetail(**node) for node in questions.values()],
    )


class SurveyService:
    """Service for authoring, reading and deleting surveys."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_survey(self, owner_id: Any, survey: Mapping[str, Any]) -> CreatedSurvey:
        """
        Create a survey with its questions and choices in one transaction.

        Args:
            owner_id: ID of the user creating the survey
            survey: ``{title, description, questions: [{text, type, options?}, ...]}``
                where each option is ``{choice_text}``

        Returns:
            CreatedSurvey with the ordered list of created questions

        Raises:
            BadRequestError: If the owner id or any part of the survey is malformed
            StoreError: If the store rejects any write; nothing is persisted
        """
        user_id = parse_positive_id(owner_id, "Invalid or missing user id")

        if (
            not isinstance(survey, Mapping)
            or not survey.get("title")
            or not survey.get("description")
        ):
            raise BadRequestError("Invalid or missing survey data")

        questions = _validate_questions(survey.get("questions"))

        try:
            new_survey = Survey(
                user_id=user_id,
                title=survey["title"],
                description=survey["description"],
            )
            self.db.add(new_survey)
            await self.db.flush()

            created_questions: list[Question] = []
            for question_data in questions:
                question = Question(
                    survey_id=new_survey.id,
                    text=question_data["text"],
                    type=_question_type_value(question_data["type"]),
                )
                self.db.add(question)
                await self.db.flush()
                created_questions.append(question)

                if question.type == QuestionType.MULTIPLE_CHOICE.value:
                    self.db.add_all([
                        Choice(question_id=question.id, text=option["choice_text"])
                        for option in question_data["options"]
                    ])
                    await self.db.flush()

            await self.db.execute(
                update(User)
                .where(User.id == user_id)
                .values(survey_count=User.survey_count + 1)
            )
            await self.db.commit()
        except Exception as exc:
            await self.db.rollback()
            logger.error(f"Survey creation for user {user_id} rolled back: {exc}")
            raise StoreError("Failed to create survey.", cause=exc) from exc

        logger.info(
            f"Created survey {new_survey.id} for user {user_id} with {len(created_questions)} questions"
        )
        return CreatedSurvey(
            id=new_survey.id,
            user_id=new_survey.user_id,
            title=new_survey.title,
            description=new_survey.description,
            questions=[
                CreatedQuestion(id=question.id, text=question.text, type=question.type)
                for question in created_questions
            ],
        )

    async def get_all_surveys(self, owner_id: int) -> list[SurveySummary]:
        """List id, title and description of every survey a user owns.

        Raises:
            NotFoundError: If the user does not exist
        """
        user_check = await self.db.execute(select(User.id).where(User.id == owner_id))
        if user_check.scalar_one_or_none() is None:
            raise NotFoundError(f"No user found with id: {owner_id}")

        result = await self.db.execute(
            select(
                Survey.id.label("id"),
                Survey.title.label("title"),
                Survey.description.label("description"),
            )
            .where(Survey.user_id == owner_id)
            .order_by(Survey.id)
        )
        return [SurveySummary(**row) for row in result.mappings().all()]

    async def get_survey(self, survey_id: int) -> SurveyDetail:
        """
        Load a survey with its questions and their choices.

        A survey without questions comes back with an empty question list.

        Raises:
            NotFoundError: If no survey has this id
        """
        query = (
            select(
                Survey.id.label("survey_id"),
                Survey.title.label("survey_title"),
                Survey.description.label("survey_description"),
                Question.id.label("question_id"),
                Question.text.label("question_text"),
                Question.type.label("question_type"),
                Choice.id.label("choice_id"),
                Choice.text.label("choice_text"),
            )
            .select_from(Survey)
            .outerjoin(Question, Question.survey_id == Survey.id)
            .outerjoin(Choice, Choice.question_id == Question.id)
            .where(Survey.id == survey_id)
            .order_by(Question.id, Choice.id)
        )
        result = await self.db.execute(query)
        survey = build_survey_tree(result.mappings().all())

        if survey is None:
            raise NotFoundError(f"No survey found with id: {survey_id}")
        return survey

    async def update_survey(self, survey_id: int, data: Mapping[str, Any]) -> SurveyRecord:
        """
        Update the title and/or description of a survey.

        Questions and choices cannot be changed after creation.

        Raises:
            BadRequestError: If data is empty, sets a field to null or names a field that cannot be updated
            NotFoundError: If no survey has this id
        """
        unknown = set(data or {}) - set(SURVEY_UPDATE_COLUMNS)
        if unknown:
            raise BadRequestError(f"Cannot update survey fields: {', '.join(sorted(unknown))}")
        reject_null_fields(data, "survey")

        partial = sql_for_partial_update(data, SURVEY_UPDATE_COLUMNS)
        try:
            result = await self.db.execute(
                text(f"UPDATE surveys SET {partial.set_cols} WHERE id = {partial.next_placeholder}"),
                partial.params(survey_id),
            )
        except Exception:
            await self.db.rollback()
            raise

        if result.rowcount == 0:
            await self.db.rollback()
            raise NotFoundError(f"No survey found with id: {survey_id}")
        await self.db.commit()

        refreshed = await self.db.execute(
            select(Survey)
            .where(Survey.id == survey_id)
            .execution_options(populate_existing=True)
        )
        survey = refreshed.scalar_one()
        logger.info(f"Updated survey {survey_id} fields: {', '.join(data)}")
        return SurveyRecord.model_validate(survey)

    async def delete_survey(self, owner_id: int, survey_id: int) -> None:
        """
        Delete a survey and decrement its owner's survey counter.

        The decrement runs and commits even when no survey row was deleted,
        so a NotFoundError here still leaves the counter lowered by one.

        Raises:
            NotFoundError: If no survey has this id
        """
        try:
            result = await self.db.execute(delete(Survey).where(Survey.id == survey_id))
            await self.db.execute(
                update(User)
                .where(User.id == owner_id)
                .values(survey_count=User.survey_count - 1)
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        if result.rowcount == 0:
            logger.warning(f"Delete of missing survey {survey_id} still decremented user {owner_id}")
            raise NotFoundError(f"No survey found with id: {survey_id}")

        logger.info(f"Deleted survey {survey_id} owned by user {owner_id}")
