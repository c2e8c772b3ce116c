"""
Nutrition targets API
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user
from fittrack.api.errors import to_http_exception
from fittrack.database.session import get_db
from fittrack.models.user import User
from fittrack.schemas.nutrition import (
    NutritionTargetsResponse,
    NutritionTargetsUpdate,
    NutritionTargetsUpdateResponse,
)
from fittrack.services.errors import ServiceError
from fittrack.services.nutrition_targets import NutritionTargets, NutritionTargetsService

router = APIRouter()
logger = logging.getLogger(__name__)

TARGET_FIELDS = ("target_calories", "target_protein", "target_carbs", "target_fats")


@router.get("", response_model=NutritionTargetsResponse)
async def get_targets(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Current targets

    Custom values when set, otherwise calculated from the profile, otherwise defaults.
    """
    try:
        targets = await NutritionTargetsService(db).get_targets(current_user.id)
    except ServiceError as e:
        raise to_http_exception(e)
    return targets.to_dict()


@router.put("", response_model=NutritionTargetsUpdateResponse)
async def update_targets(
    request: NutritionTargetsUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    values = request.model_dump()
    if any(values[field] is None for field in TARGET_FIELDS):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="All target values are required"
        )

    try:
        targets = await NutritionTargetsService(db).update_targets(
            current_user.id,
            NutritionTargets(**{field: values[field] for field in TARGET_FIELDS}),
            is_custom=request.use_custom_targets,
        )
    except ServiceError as e:
        raise to_http_exception(e)
    return NutritionTargetsUpdateResponse(targets=targets.to_dict())


@router.post("/reset", response_model=NutritionTargetsUpdateResponse)
async def reset_targets(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Recalculate from the profile and drop custom values"""
    try:
        targets = await NutritionTargetsService(db).reset_to_auto(current_user.id)
    except ServiceError as e:
        raise to_http_exception(e)

    if targets is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Complete your profile (weight, activity level, fitness goal) to calculate targets"
        )
    return NutritionTargetsUpdateResponse(targets=targets.to_dict())
