"""Survey response reporting endpoints."""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from surveygenie.database import get_db
from surveygenie.schemas.response import (
    ChartDataResponse,
    ResponseDeletedResponse,
    ResponseDetailResponse,
    ResponseSummaryList,
)
from surveygenie.services import ResponseService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/responses")


@router.get("/summary/{survey_id}", response_model=ResponseSummaryList)
async def get_survey_summary(
    survey_id: int,
    db: AsyncSession = Depends(get_db),
) -> ResponseSummaryList:
    responses = await ResponseService(db).get_survey_summary(survey_id)
    return ResponseSummaryList(responses=responses)


@router.get("/data/{survey_id}", response_model=ChartDataResponse)
async def get_survey_chart_data(
    survey_id: int,
    db: AsyncSession = Depends(get_db),
) -> ChartDataResponse:
    rows = await ResponseService(db).get_survey_chart_data(survey_id)
    return ChartDataResponse(survey_chart_data=rows)


@router.get("/{response_id}", response_model=ResponseDetailResponse)
async def get_response(
    response_id: int,
    db: AsyncSession = Depends(get_db),
) -> ResponseDetailResponse:
    response = await ResponseService(db).get_response(response_id)
    return ResponseDetailResponse(response=response)


@router.delete("/{response_id}", response_model=ResponseDeletedResponse)
async def delete_response(
    response_id: int,
    db: AsyncSession = Depends(get_db),
) -> ResponseDeletedResponse:
    await ResponseService(db).delete_response(response_id)
    return ResponseDeletedResponse(deleted_response=response_id)
