"""
Workouts API - user workouts and admin templates
"""
import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user, get_optional_user
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.models.exercise import Difficulty
from fittrack.models.user import User
from fittrack.schemas.workout import WorkoutCreate, WorkoutListResponse, WorkoutResponse, WorkoutUpdate
from fittrack.services.errors import ServiceError
from fittrack.services.workout_service import WorkoutService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=WorkoutListResponse)
async def list_workouts(
    page: int = Query(1),
    page_size: int = Query(20),
    q: Optional[str] = Query(None, description="Name contains"),
    difficulty: Optional[Difficulty] = Query(None),
    estimated_time_lte: Optional[int] = Query(None, ge=1, description="Max minutes"),
    is_template: Optional[bool] = Query(None),
    is_public: Optional[bool] = Query(None),
    mine: bool = Query(False, description="Own workouts plus public ones"),
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Browse workouts

    Anonymous callers only see public workouts; signed-in users see their own
    and public ones. Admins see every workout unless `mine` is set.
    """
    result = await WorkoutService(db).list_workouts(
        user=current_user,
        page=page,
        page_size=page_size,
        q=q,
        difficulty=difficulty,
        estimated_time_lte=estimated_time_lte,
        is_template=is_template,
        is_public=is_public,
        mine=mine,
    )
    return WorkoutListResponse(
        workouts=[WorkoutResponse.model_validate(w) for w in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{workout_id}", response_model=WorkoutResponse)
async def get_workout(
    workout_id: uuid.UUID,
    current_user: Optional[User] = Depends(get_optional_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await WorkoutService(db).get_workout(workout_id, current_user)
    except ServiceError as e:
        raise to_http_exception(e)


@router.post("", response_model=WorkoutResponse, status_code=status.HTTP_201_CREATED)
async def create_workout(
    request: WorkoutCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a workout with its exercises

    Workouts created by admins become templates.
    """
    try:
        return await WorkoutService(db).create_workout(current_user, request.model_dump())
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to create workout: {str(e)}", exc_info=True)
        raise internal_error()


@router.patch("/{workout_id}", response_model=WorkoutResponse)
async def update_workout(
    workout_id: uuid.UUID,
    request: WorkoutUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Owner or admin; templates are admin only"""
    try:
        return await WorkoutService(db).update_workout(
            workout_id, current_user, request.model_dump(exclude_unset=True)
        )
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to update workout {workout_id}: {str(e)}", exc_info=True)
        raise internal_error()


@router.delete("/{workout_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout(
    workout_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        await WorkoutService(db).delete_workout(workout_id, current_user)
    except ServiceError as e:
        raise to_http_exception(e)
