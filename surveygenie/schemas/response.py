"""Pydantic schemas for survey completion and response reporting."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from surveygenie.models.base import QuestionType
from surveygenie.schemas.base import BaseSchema, UTCDateTime


class SurveyCompletion(BaseModel):
    """Completed survey payload: question id -> answer text."""

    survey_id: int = Field(..., gt=0)
    responses: dict[str, str]


class AnswerRecord(BaseSchema):
    id: int
    response_id: int
    question_id: int
    answer_text: str


class CompletedSurvey(BaseSchema):
    """Stored response fields plus the answers recorded with it."""

    id: int
    survey_id: int
    completed_at: UTCDateTime
    answers: list[AnswerRecord]


class ResponseAnswer(BaseSchema):
    id: int
    question_id: int
    question_text: Optional[str] = None
    answer_text: str


class ResponseDetail(BaseSchema):
    """A single response reconstructed with its answers."""

    id: int
    survey_id: int
    completed_at: UTCDateTime
    answers: list[ResponseAnswer] = Field(default_factory=list)


class ResponseSummary(BaseSchema):
    id: int
    survey_id: int
    completed_at: UTCDateTime


class ChartRow(BaseSchema):
    """One answer joined with its response and question."""

    response_id: int
    timestamp: UTCDateTime
    question_id: int
    question_text: str
    question_type: QuestionType
    answer_text: str


class CompletedSurveyResponse(BaseSchema):
    completed_survey: CompletedSurvey


class ResponseDetailResponse(BaseSchema):
    response: ResponseDetail


class ResponseSummaryList(BaseSchema):
    responses: list[ResponseSummary]


class ChartDataResponse(BaseSchema):
    survey_chart_data: list[ChartRow]


class ResponseDeletedResponse(BaseSchema):
    deleted_response: int
