"""
Accounts: registration, login, profile and body measurements
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.models.user import User, Profile, BodyMeasurement, UserRole
from fittrack.models.trainer import TrainerProfile
from fittrack.services.body_metrics import refresh_profile_metrics
from fittrack.services.errors import ConflictError, NotFoundError, AccessDeniedError
from fittrack.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "date_of_birth",
    "gender",
    "height",
    "current_weight",
    "target_weight",
    "activity_level",
    "fitness_goal",
)
DERIVED_FIELDS = ("bmi", "bmr", "tdee")
REGISTRATION_ROLES = (UserRole.USER, UserRole.TRAINER)


class AccountService:
    """Account and profile operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def register(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """
        Create a user with an empty profile.

        Args:
            email: unique login, stored lower-case
            password: plain password, stored as a bcrypt hash
            name: display name
            role: USER or TRAINER; trainers also get an unverified trainer profile

        Returns:
            the new user

        Raises:
            ConflictError: email already registered
            AccessDeniedError: role not open to self-registration
        """
        if role not in REGISTRATION_ROLES:
            raise AccessDeniedError("Role not available for registration")
        if await self.get_by_email(email):
            raise ConflictError("Email already registered")

        user = User(
            email=email.lower(),
            name=name,
            password_hash=hash_password(password),
            role=role,
        )
        user.profile = Profile()
        if role == UserRole.TRAINER:
            user.trainer_profile = TrainerProfile(specializations=[], certifications=[])
        self.db.add(user)
        await self.db.flush()

        logger.info(f"Registered user {user.id} ({role.value})")
        return user

    async def authenticate(self, email: str, password: str) -> Optional[User]:
        """Return the user when the credentials match"""
        user = await self.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            return None
        return user

    async def get_profile(self, user: User) -> Profile:
        """The user's profile, created on first access"""
        result = await self.db.execute(select(Profile).where(Profile.user_id == user.id))
        profile = result.scalar_one_or_none()
        if profile is None:
            profile = Profile(user_id=user.id)
            self.db.add(profile)
            await self.db.flush()
        return profile

    def to_profile_dict(self, user: User, profile: Profile) -> Dict[str, Any]:
        data = {
            "id": user.id,
            "email": user.email,
            "name": user.name,
            "phone": user.phone,
            "image": user.image,
            "role": user.role,
            "created_at": user.created_at,
        }
        for field in PROFILE_FIELDS + DERIVED_FIELDS:
            data[field] = getattr(profile, field)
        return data

    async def update_profile(self, user: User, changes: Dict[str, Any], acting_user: User) -> Profile:
        """
        Apply a partial profile update.

        Role changes are honoured only for admins and ignored otherwise.
        Explicit bmi/bmr/tdee values win over recomputation.

        Raises:
            ConflictError: the new email belongs to another account
        """
        email = changes.get("email")
        if email and email.lower() != user.email:
            existing = await self.get_by_email(email)
            if existing and existing.id != user.id:
                raise ConflictError("Email already in use")
            user.email = email.lower()

        for field in ("name", "phone"):
            if field in changes:
                setattr(user, field, changes[field])

        if changes.get("role") is not None:
            if acting_user.is_admin:
                user.role = changes["role"]
            else:
                logger.info(f"Ignoring role change requested by non-admin {acting_user.id}")

        profile = await self.get_profile(user)
        for field in PROFILE_FIELDS:
            if field in changes:
                setattr(profile, field, changes[field])

        refresh_profile_metrics(profile)
        for field in DERIVED_FIELDS:
            if changes.get(field) is not None:
                setattr(profile, field, changes[field])

        await self.db.flush()
        logger.info(f"Profile updated for user {user.id}")
        return profile

    async def change_password(self, user: User, current_password: str, new_password: str) -> bool:
        """False when the current password does not match"""
        if not verify_password(current_password, user.password_hash):
            return False
        user.password_hash = hash_password(new_password)
        await self.db.flush()
        logger.info(f"Password changed for user {user.id}")
        return True

    async def delete_account(self, user_id: uuid.UUID) -> None:
        """Delete the user; owned rows go with it through ON DELETE CASCADE"""
        result = await self.db.execute(delete(User).where(User.id == user_id))
        if result.rowcount == 0:
            raise NotFoundError("User not found")
        logger.info(f"Deleted account {user_id}")

    async def set_avatar(self, user: User, url: Optional[str]) -> User:
        user.image = url
        await self.db.flush()
        return user

    # ===== Body measurements =====

    async def add_measurement(self, user: User, data: Dict[str, Any]) -> BodyMeasurement:
        """Store a measurement; a weight reading also becomes the current weight"""
        measurement = BodyMeasurement(user_id=user.id, **data)
        self.db.add(measurement)

        if data.get("weight"):
            profile = await self.get_profile(user)
            profile.current_weight = data["weight"]
            refresh_profile_metrics(profile)

        await self.db.flush()
        return measurement

    async def list_measurements(self, user_id: uuid.UUID, limit: int = 50) -> List[BodyMeasurement]:
        result = await self.db.execute(
            select(BodyMeasurement)
            .where(BodyMeasurement.user_id == user_id)
            .order_by(BodyMeasurement.measured_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
