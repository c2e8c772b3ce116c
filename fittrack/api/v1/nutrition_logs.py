"""
Nutrition log API - meals logged against the food catalog
"""
import logging
import uuid
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.models.user import User
from fittrack.schemas.common import SuccessResponse
from fittrack.schemas.nutrition import (
    NutritionLogCreate,
    NutritionLogListResponse,
    NutritionLogResponse,
    NutritionLogUpdate,
    NutritionStatsResponse,
)
from fittrack.services.errors import ServiceError
from fittrack.services.nutrition_service import NutritionService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=NutritionLogResponse, status_code=status.HTTP_201_CREATED)
async def create_nutrition_log(
    request: NutritionLogCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Log a meal

    Macros are the food's per-100 g values scaled by the quantity in grams.
    """
    try:
        return await NutritionService(db).create_log(
            user_id=current_user.id,
            food_id=request.food_id,
            meal_type=request.meal_type,
            quantity=request.quantity,
            notes=request.notes,
            consumed_at=request.consumed_at,
        )
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to create nutrition log: {str(e)}", exc_info=True)
        raise internal_error()


@router.get("", response_model=NutritionLogListResponse)
async def list_nutrition_logs(
    day: Optional[date] = Query(None, alias="date", description="Local day, default today"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    logs = await NutritionService(db).get_logs_for_day(current_user.id, day)
    return NutritionLogListResponse(logs=[NutritionLogResponse.model_validate(log) for log in logs])


@router.get("/stats", response_model=NutritionStatsResponse)
async def get_nutrition_stats(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Totals over an inclusive range of local days (default today)"""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must not be after end_date"
        )
    return await NutritionService(db).get_stats(current_user.id, start_date, end_date)


@router.put("/{log_id}", response_model=NutritionLogResponse)
async def update_nutrition_log(
    log_id: uuid.UUID,
    request: NutritionLogUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await NutritionService(db).update_log(
            log_id, current_user.id, request.model_dump(exclude_unset=True)
        )
    except ServiceError as e:
        raise to_http_exception(e)


@router.delete("/{log_id}", response_model=SuccessResponse)
async def delete_nutrition_log(
    log_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        await NutritionService(db).delete_log(log_id, current_user.id)
    except ServiceError as e:
        raise to_http_exception(e)
    return SuccessResponse()
