"""
Profile API - account details, body metrics, avatar and measurements
"""
import logging
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.config import settings
from fittrack.database.session import get_db
from fittrack.models.user import User
from fittrack.schemas.account import (
    AvatarResponse,
    ChangePasswordRequest,
    MeasurementCreate,
    MeasurementListResponse,
    MeasurementResponse,
    ProfileResponse,
    ProfileUpdate,
)
from fittrack.schemas.common import MessageResponse
from fittrack.services.account_service import AccountService
from fittrack.services.errors import ServiceError
from fittrack.services.file_storage import InvalidImageError, get_file_storage

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=ProfileResponse)
async def get_profile(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Account plus fitness profile"""
    service = AccountService(db)
    profile = await service.get_profile(current_user)
    return service.to_profile_dict(current_user, profile)


@router.put("", response_model=ProfileResponse)
async def update_profile(
    request: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Partial profile update

    BMI, BMR and TDEE are recomputed from the body inputs unless given explicitly.
    """
    try:
        service = AccountService(db)
        profile = await service.update_profile(
            current_user, request.model_dump(exclude_unset=True), acting_user=current_user
        )
        return service.to_profile_dict(current_user, profile)

    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Profile update failed: {str(e)}", exc_info=True)
        raise internal_error()


@router.post("/change-password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    changed = await AccountService(db).change_password(
        current_user, request.current_password, request.new_password
    )
    if not changed:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect"
        )
    return MessageResponse(message="Password updated successfully")


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Delete the account and everything it owns"""
    image = current_user.image
    try:
        await AccountService(db).delete_account(current_user.id)
    except ServiceError as e:
        raise to_http_exception(e)

    get_file_storage().delete_file(image)


@router.put("/avatar", response_model=AvatarResponse)
async def upload_avatar(
    file: UploadFile = File(..., description="Image file"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Replace the avatar

    The image is center-cropped to a square thumbnail before it is stored.
    """
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File must be an image"
        )

    content = await file.read()
    if len(content) > settings.AVATAR_MAX_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File size cannot exceed {settings.AVATAR_MAX_BYTES // (1024 * 1024)}MB"
        )

    storage = get_file_storage()
    try:
        url = await storage.save_avatar(current_user.id, content)
    except InvalidImageError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File must be an image"
        )
    except Exception as e:
        logger.error(f"Avatar upload failed: {str(e)}", exc_info=True)
        raise internal_error()

    previous = current_user.image
    await AccountService(db).set_avatar(current_user, url)
    if previous:
        storage.delete_file(previous)

    return AvatarResponse(image=url)


@router.delete("/avatar", response_model=AvatarResponse)
async def delete_avatar(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    if current_user.image:
        get_file_storage().delete_file(current_user.image)
        await AccountService(db).set_avatar(current_user, None)
    return AvatarResponse(image=None)


@router.get("/measurements", response_model=MeasurementListResponse)
async def list_measurements(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Latest body measurements, newest first"""
    measurements = await AccountService(db).list_measurements(current_user.id)
    return MeasurementListResponse(
        measurements=[MeasurementResponse.model_validate(m) for m in measurements]
    )


@router.post("/measurements", response_model=MeasurementResponse, status_code=status.HTTP_201_CREATED)
async def add_measurement(
    request: MeasurementCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Record a measurement; a weight also becomes the profile's current weight"""
    measurement = await AccountService(db).add_measurement(
        current_user, request.model_dump(exclude_none=True)
    )
    return MeasurementResponse.model_validate(measurement)
