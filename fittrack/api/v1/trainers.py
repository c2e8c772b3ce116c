"""
Trainers and courses API
"""
import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user, require_roles, require_trainer
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.models.exercise import Difficulty
from fittrack.models.user import User, UserRole
from fittrack.schemas.trainer import (
    CourseCreate,
    CourseListResponse,
    CourseResponse,
    CourseUpdate,
    EnrollmentResponse,
    TrainerListResponse,
    TrainerProfileResponse,
    TrainerProfileUpdate,
    TrainerResponse,
)
from fittrack.services.errors import ServiceError
from fittrack.services.trainer_service import DEFAULT_TRAINER_PAGE_SIZE, TrainerService

router = APIRouter()
courses_router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=TrainerListResponse)
async def list_trainers(
    search: Optional[str] = Query(None, description="Name or email contains"),
    page: int = Query(1),
    limit: int = Query(DEFAULT_TRAINER_PAGE_SIZE),
    db: AsyncSession = Depends(get_db)
):
    """Verified trainers"""
    result = await TrainerService(db).list_trainers(search=search, page=page, limit=limit)
    return TrainerListResponse(
        trainers=[
            TrainerResponse(
                id=row["user"].id,
                name=row["user"].name,
                email=row["user"].email,
                image=row["user"].image,
                profile=TrainerProfileResponse.model_validate(row["profile"]) if row["profile"] else None,
                course_count=row["course_count"],
            )
            for row in result["trainers"]
        ],
        pagination=result["pagination"],
    )


@router.put("/me/profile", response_model=TrainerProfileResponse)
async def update_trainer_profile(
    request: TrainerProfileUpdate,
    current_user: User = Depends(require_roles(UserRole.TRAINER)),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await TrainerService(db).upsert_profile(current_user, request.model_dump(exclude_unset=True))
    except ServiceError as e:
        raise to_http_exception(e)


@router.post("/me/courses", response_model=CourseResponse, status_code=status.HTTP_201_CREATED)
async def create_course(
    request: CourseCreate,
    current_user: User = Depends(require_trainer),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await TrainerService(db).create_course(current_user, request.model_dump())
    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Failed to create course: {str(e)}", exc_info=True)
        raise internal_error()


@router.get("/{trainer_id}/courses", response_model=CourseListResponse)
async def list_trainer_courses(
    trainer_id: uuid.UUID,
    category: Optional[str] = Query(None),
    difficulty: Optional[Difficulty] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    """Published courses of a trainer"""
    rows = await TrainerService(db).list_courses(trainer_id, category=category, difficulty=difficulty)
    courses = []
    for row in rows:
        course = CourseResponse.model_validate(row["course"])
        course.enrollment_count = row["enrollment_count"]
        courses.append(course)
    return CourseListResponse(courses=courses)


@courses_router.patch("/{course_id}", response_model=CourseResponse)
async def update_course(
    course_id: uuid.UUID,
    request: CourseUpdate,
    current_user: User = Depends(require_trainer),
    db: AsyncSession = Depends(get_db)
):
    """Course owner or admin"""
    try:
        return await TrainerService(db).update_course(
            course_id, current_user, request.model_dump(exclude_unset=True)
        )
    except ServiceError as e:
        raise to_http_exception(e)


@courses_router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: uuid.UUID,
    current_user: User = Depends(require_trainer),
    db: AsyncSession = Depends(get_db)
):
    try:
        await TrainerService(db).delete_course(course_id, current_user)
    except ServiceError as e:
        raise to_http_exception(e)


@courses_router.post("/{course_id}/enroll", response_model=EnrollmentResponse, status_code=status.HTTP_201_CREATED)
async def enroll(
    course_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Enroll in a published course, once"""
    try:
        return await TrainerService(db).enroll(course_id, current_user)
    except ServiceError as e:
        raise to_http_exception(e)
