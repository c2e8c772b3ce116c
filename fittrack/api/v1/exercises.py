"""
Exercise catalog API
"""
import logging
import uuid
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user, require_admin
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.models.exercise import Difficulty
from fittrack.models.user import User
from fittrack.schemas.common import split_csv
from fittrack.schemas.exercise import (
    ExerciseCreate,
    ExerciseListResponse,
    ExerciseResponse,
    ExerciseSetHistory,
    ExerciseUpdate,
)
from fittrack.services.errors import ServiceError
from fittrack.services.exercise_service import ExerciseService
from fittrack.services.workout_log_service import WorkoutLogService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=ExerciseListResponse)
async def list_exercises(
    page: int = Query(1, description="Page number"),
    page_size: int = Query(20, description="Rows per page (1-100)"),
    query: Optional[str] = Query(None, description="Name contains"),
    difficulty: Optional[Difficulty] = Query(None),
    muscle_groups: Optional[List[str]] = Query(None, description="Match any"),
    equipment: Optional[List[str]] = Query(None, description="Match any"),
    db: AsyncSession = Depends(get_db)
):
    """Public catalog, name-ordered"""
    result = await ExerciseService(db).list_exercises(
        page=page,
        page_size=page_size,
        query=query,
        muscle_groups=split_csv(muscle_groups),
        equipment=split_csv(equipment),
        difficulty=difficulty,
    )
    return ExerciseListResponse(
        exercises=[ExerciseResponse.model_validate(e) for e in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/{exercise_id}", response_model=ExerciseResponse)
async def get_exercise(
    exercise_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    try:
        return await ExerciseService(db).get_exercise(exercise_id)
    except ServiceError as e:
        raise to_http_exception(e)


@router.get("/{exercise_id}/history", response_model=List[ExerciseSetHistory])
async def get_exercise_history(
    exercise_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """The caller's sets for this exercise, newest session first"""
    rows = await WorkoutLogService(db).get_exercise_history(current_user.id, exercise_id)
    return [
        ExerciseSetHistory(
            id=row["set"].id,
            workout_log_id=row["workout_log_id"],
            title=row["title"],
            started_at=row["started_at"],
            set_number=row["set"].set_number,
            reps=row["set"].reps,
            weight=row["set"].weight,
            duration=row["set"].duration,
            distance=row["set"].distance,
            completed=row["set"].completed,
        )
        for row in rows
    ]


@router.post("", response_model=ExerciseResponse, status_code=status.HTTP_201_CREATED)
async def create_exercise(
    request: ExerciseCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await ExerciseService(db).create_exercise(current_user, request.model_dump())
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to create exercise: {str(e)}", exc_info=True)
        raise internal_error()


@router.patch("/{exercise_id}", response_model=ExerciseResponse)
async def update_exercise(
    exercise_id: uuid.UUID,
    request: ExerciseUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await ExerciseService(db).update_exercise(
            current_user, exercise_id, request.model_dump(exclude_unset=True)
        )
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to update exercise {exercise_id}: {str(e)}", exc_info=True)
        raise internal_error()


@router.delete("/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: uuid.UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        await ExerciseService(db).delete_exercise(current_user, exercise_id)
    except ServiceError as e:
        raise to_http_exception(e)
