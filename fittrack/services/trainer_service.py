"""
Trainer directory, courses and enrollments
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from fittrack.models.exercise import Difficulty
from fittrack.models.trainer import Course, Enrollment, TrainerProfile
from fittrack.models.user import User, UserRole
from fittrack.services.errors import AccessDeniedError, ConflictError, NotFoundError
from fittrack.services.pagination import paginate

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("bio", "specializations", "certifications", "years_experience", "hourly_rate")
COURSE_FIELDS = (
    "title", "short_description", "description", "category", "difficulty",
    "price", "currency", "duration", "thumbnail_url", "is_published",
)
DEFAULT_TRAINER_PAGE_SIZE = 12


class TrainerService:
    """Trainer profiles and the courses they publish"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _published_course_counts(self, trainer_ids: List[uuid.UUID]) -> Dict[uuid.UUID, int]:
        if not trainer_ids:
            return {}
        result = await self.db.execute(
            select(Course.trainer_id, func.count(Course.id))
            .where(Course.trainer_id.in_(trainer_ids), Course.is_published.is_(True))
            .group_by(Course.trainer_id)
        )
        return dict(result.all())

    async def list_trainers(
        self, search: Optional[str] = None, page: int = 1, limit: int = DEFAULT_TRAINER_PAGE_SIZE
    ) -> Dict[str, Any]:
        """Verified trainers, name-ordered, with their published course count"""
        stmt = (
            select(User)
            .join(TrainerProfile, TrainerProfile.user_id == User.id)
            .options(selectinload(User.trainer_profile))
            .where(User.role == UserRole.TRAINER, TrainerProfile.is_verified.is_(True))
        )
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(User.name.ilike(pattern), User.email.ilike(pattern)))

        result = await paginate(self.db, stmt.order_by(User.name.asc()), page, limit)
        counts = await self._published_course_counts([u.id for u in result.items])

        return {
            "trainers": [
                {"user": trainer, "profile": trainer.trainer_profile, "course_count": counts.get(trainer.id, 0)}
                for trainer in result.items
            ],
            "pagination": {
                "page": result.page,
                "limit": result.page_size,
                "total": result.total,
                "total_pages": result.total_pages,
            },
        }

    async def list_courses(
        self,
        trainer_id: uuid.UUID,
        category: Optional[str] = None,
        difficulty: Optional[Difficulty] = None,
    ) -> List[Dict[str, Any]]:
        """Published courses of one trainer, newest first, with enrollment count"""
        enrollment_count = (
            select(func.count(Enrollment.id))
            .where(Enrollment.course_id == Course.id)
            .correlate(Course)
            .scalar_subquery()
        )
        stmt = select(Course, enrollment_count).where(
            Course.trainer_id == trainer_id, Course.is_published.is_(True)
        )
        if category:
            stmt = stmt.where(Course.category == category)
        if difficulty:
            stmt = stmt.where(Course.difficulty == difficulty)

        result = await self.db.execute(stmt.order_by(Course.created_at.desc()))
        return [{"course": course, "enrollment_count": count} for course, count in result.all()]

    async def upsert_profile(self, user: User, changes: Dict[str, Any]) -> TrainerProfile:
        if user.role != UserRole.TRAINER:
            raise AccessDeniedError("Only trainers have a trainer profile")

        result = await self.db.execute(select(TrainerProfile).where(TrainerProfile.user_id == user.id))
        profile = result.scalar_one_or_none()
        if profile is None:
            profile = TrainerProfile(user_id=user.id, specializations=[], certifications=[])
            self.db.add(profile)

        for field in PROFILE_FIELDS:
            if field in changes:
                setattr(profile, field, changes[field])

        await self.db.flush()
        return profile

    async def create_course(self, user: User, data: Dict[str, Any]) -> Course:
        if user.role not in (UserRole.TRAINER, UserRole.ADMIN):
            raise AccessDeniedError("Only trainers can create courses")

        course = Course(trainer_id=user.id, **{k: v for k, v in data.items() if k in COURSE_FIELDS and v is not None})
        self.db.add(course)
        await self.db.flush()
        logger.info(f"Course {course.id} created by {user.id}")
        return course

    async def _get_owned_course(self, course_id: uuid.UUID, user: User) -> Course:
        course = await self.db.get(Course, course_id)
        if course is None or (course.trainer_id != user.id and not user.is_admin):
            raise NotFoundError("Course not found")
        return course

    async def update_course(self, course_id: uuid.UUID, user: User, changes: Dict[str, Any]) -> Course:
        course = await self._get_owned_course(course_id, user)
        for field in COURSE_FIELDS:
            if field in changes:
                setattr(course, field, changes[field])
        await self.db.flush()
        return course

    async def delete_course(self, course_id: uuid.UUID, user: User) -> None:
        course = await self._get_owned_course(course_id, user)
        await self.db.delete(course)
        await self.db.flush()
        logger.info(f"Course {course_id} deleted by {user.id}")

    async def enroll(self, course_id: uuid.UUID, user: User) -> Enrollment:
        """
        Enroll the user in a published course.

        Raises:
            NotFoundError: course missing or unpublished
            ConflictError: already enrolled
        """
        course = await self.db.get(Course, course_id)
        if course is None or not course.is_published:
            raise NotFoundError("Course not found")

        existing = await self.db.execute(
            select(Enrollment.id).where(Enrollment.user_id == user.id, Enrollment.course_id == course_id)
        )
        if existing.scalar_one_or_none() is not None:
            raise ConflictError("Already enrolled in this course")

        enrollment = Enrollment(user_id=user.id, course_id=course_id)
        self.db.add(enrollment)
        try:
            await self.db.flush()
        except IntegrityError as e:
            raise ConflictError("Already enrolled in this course") from e

        logger.info(f"User {user.id} enrolled in course {course_id}")
        return enrollment

    async def set_verified(self, user_id: uuid.UUID, is_verified: bool) -> TrainerProfile:
        result = await self.db.execute(
            select(TrainerProfile)
            .join(User, TrainerProfile.user_id == User.id)
            .where(TrainerProfile.user_id == user_id, User.role == UserRole.TRAINER)
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFoundError("Trainer not found")
        profile.is_verified = is_verified
        await self.db.flush()
        logger.info(f"Trainer {user_id} verified={is_verified}")
        return profile
