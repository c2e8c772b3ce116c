"""
Workout session API - start, resume, log sets, complete
"""
import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.models.user import User
from fittrack.schemas.workout_log import (
    SetLogCreate,
    SetLogResponse,
    UnfinishedLogResponse,
    WorkoutLogCreate,
    WorkoutLogListResponse,
    WorkoutLogProgress,
    WorkoutLogResponse,
    WorkoutLogSummary,
    WorkoutStatsResponse,
)
from fittrack.services.errors import ServiceError
from fittrack.services.workout_log_service import WorkoutLogService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=WorkoutLogResponse, status_code=status.HTTP_201_CREATED)
async def start_workout(
    request: WorkoutLogCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Start a session for a public or own workout"""
    try:
        return await WorkoutLogService(db).start_session(
            current_user, request.workout_id, title=request.title, notes=request.notes
        )
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to start workout: {str(e)}", exc_info=True)
        raise internal_error()


@router.get("", response_model=WorkoutLogListResponse)
async def list_workout_logs(
    page: int = Query(1),
    page_size: int = Query(20),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Session history, newest first"""
    result = await WorkoutLogService(db).get_history(current_user.id, page=page, page_size=page_size)
    return WorkoutLogListResponse(
        logs=[
            WorkoutLogSummary(
                id=item["log"].id,
                workout_id=item["log"].workout_id,
                title=item["log"].title,
                started_at=item["log"].started_at,
                completed_at=item["log"].completed_at,
                duration=item["log"].duration,
                exercise_count=item["exercise_count"],
            )
            for item in result.items
        ],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("/check", response_model=UnfinishedLogResponse)
async def check_unfinished(
    workout_id: Optional[uuid.UUID] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Latest unfinished session of a workout, for the resume prompt"""
    if workout_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="workout_id is required"
        )
    log = await WorkoutLogService(db).find_unfinished(current_user.id, workout_id)
    return UnfinishedLogResponse(log=log)


@router.get("/stats", response_model=WorkoutStatsResponse)
async def get_workout_stats(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await WorkoutLogService(db).compute_stats(current_user.id)
    except Exception as e:
        logger.error(f"Failed to compute workout stats: {str(e)}", exc_info=True)
        raise internal_error()


@router.get("/{log_id}", response_model=WorkoutLogResponse)
async def get_workout_log(
    log_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await WorkoutLogService(db).get_log(log_id, current_user)
    except ServiceError as e:
        raise to_http_exception(e)


@router.patch("/{log_id}", response_model=WorkoutLogResponse)
async def update_progress(
    log_id: uuid.UUID,
    request: WorkoutLogProgress,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Move the resumable progress pointer"""
    try:
        return await WorkoutLogService(db).update_progress(
            log_id, current_user, request.model_dump(exclude_unset=True)
        )
    except ServiceError as e:
        raise to_http_exception(e)


@router.post("/{log_id}/sets", response_model=SetLogResponse, status_code=status.HTTP_201_CREATED)
async def add_set(
    log_id: uuid.UUID,
    request: SetLogCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await WorkoutLogService(db).append_set(log_id, current_user, request.model_dump())
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to log set for {log_id}: {str(e)}", exc_info=True)
        raise internal_error()


@router.post("/{log_id}/complete", response_model=WorkoutLogResponse)
async def complete_workout(
    log_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Stamp completion time and duration in whole minutes"""
    try:
        return await WorkoutLogService(db).complete_session(log_id, current_user)
    except ServiceError as e:
        raise to_http_exception(e)
