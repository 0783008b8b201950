"""Survey authoring and completion endpoints."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.database import get_db
from surveygenie.dependencies import ensure_correct_user
from surveygenie.schemas.response import CompletedSurveyResponse, SurveyCompletion
from surveygenie.schemas.survey import (
    SurveyCreate,
    SurveyCreatedResponse,
    SurveyDeletedResponse,
    SurveyDetailResponse,
    SurveyListResponse,
    SurveyUpdate,
    SurveyUpdatedResponse,
)
from surveygenie.services import ResponseService, SurveyService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/surveys")


# Registered before /{user_id} so "complete" is not parsed as a user id
@router.post("/complete", response_model=CompletedSurveyResponse, status_code=status.HTTP_201_CREATED)
async def complete_survey(
    submission: SurveyCompletion,
    db: AsyncSession = Depends(get_db),
) -> CompletedSurveyResponse:
    """Record an anonymous survey completion."""
    completed = await ResponseService(db).complete_survey(submission.model_dump())
    return CompletedSurveyResponse(completed_survey=completed)


@router.post("/{user_id}", response_model=SurveyCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_survey(
    user_id: int,
    request: SurveyCreate,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> SurveyCreatedResponse:
    survey = await SurveyService(db).create_survey(user_id, request.model_dump(mode="json"))
    return SurveyCreatedResponse(survey=survey)


@router.get("/{user_id}/all", response_model=SurveyListResponse)
async def list_surveys(
    user_id: int,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> SurveyListResponse:
    surveys = await SurveyService(db).get_all_surveys(user_id)
    return SurveyListResponse(surveys=surveys)


@router.get("/{user_id}/{survey_id}", response_model=SurveyDetailResponse)
async def get_survey(
    user_id: int,
    survey_id: int,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> SurveyDetailResponse:
    survey = await SurveyService(db).get_survey(survey_id)
    return SurveyDetailResponse(survey=survey)


@router.patch("/{user_id}/{survey_id}", response_model=SurveyUpdatedResponse)
async def update_survey(
    user_id: int,
    survey_id: int,
    request: SurveyUpdate,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> SurveyUpdatedResponse:
    survey = await SurveyService(db).update_survey(survey_id, request.model_dump(exclude_unset=True))
    return SurveyUpdatedResponse(survey=survey)


@router.delete("/{user_id}/{survey_id}", response_model=SurveyDeletedResponse)
async def delete_survey(
    user_id: int,
    survey_id: int,
    _: int = Depends(ensure_correct_user),
    db: AsyncSession = Depends(get_db),
) -> SurveyDeletedResponse:
    await SurveyService(db).delete_survey(user_id, survey_id)
    return SurveyDeletedResponse(deleted_survey=survey_id)
