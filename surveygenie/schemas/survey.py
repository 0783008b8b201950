"""Pydantic schemas for survey authoring endpoints."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from surveygenie.models.base import QuestionType
from surveygenie.schemas.base import BaseSchema


class ChoiceCreate(BaseModel):
    """One option of a Multiple Choice question."""

    choice_text: str = Field(..., min_length=1)


class QuestionCreate(BaseModel):
    """Question payload inside a survey creation request."""

    text: str = Field(..., min_length=1)
    type: QuestionType
    options: Optional[list[ChoiceCreate]] = None

    @model_validator(mode="after")
    def check_options(self):
        if self.type == QuestionType.MULTIPLE_CHOICE and not self.options:
            raise ValueError("Multiple Choice questions require at least one option")
        return self


class SurveyCreate(BaseModel):
    """Survey creation payload."""

    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    questions: list[QuestionCreate] = Field(default_factory=list)


class SurveyUpdate(BaseModel):
    """Partial survey update payload."""

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)


class CreatedQuestion(BaseSchema):
    id: int
    text: str
    type: QuestionType


class CreatedSurvey(BaseSchema):
    """Stored survey fields plus the questions created with it."""

    id: int
    user_id: int
    title: str
    description: str
    questions: list[CreatedQuestion]


class ChoiceDetail(BaseSchema):
    id: int
    text: str


class QuestionDetail(BaseSchema):
    id: int
    text: str
    type: QuestionType
    options: list[ChoiceDetail] = Field(default_factory=list)


class SurveyDetail(BaseSchema):
    """Survey reconstructed with its questions and choices."""

    id: int
    title: str
    description: str
    questions: list[QuestionDetail] = Field(default_factory=list)


class SurveySummary(BaseSchema):
    id: int
    title: str
    description: str


class SurveyRecord(BaseSchema):
    id: int
    user_id: int
    title: str
    description: str


class SurveyCreatedResponse(BaseSchema):
    survey: CreatedSurvey


class SurveyDetailResponse(BaseSchema):
    survey: SurveyDetail


class SurveyListResponse(BaseSchema):
    surveys: list[SurveySummary]


class SurveyUpdatedResponse(BaseSchema):
    survey: SurveyRecord


class SurveyDeletedResponse(BaseSchema):
    deleted_survey: int
