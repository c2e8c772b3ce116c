"""
Admin API - platform stats, users and trainer verification
"""
import logging
import uuid
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import require_admin
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.models.user import User
from fittrack.schemas.account import UserResponse
from fittrack.schemas.admin import AdminStatsResponse, AdminUserListResponse
from fittrack.schemas.trainer import TrainerProfileResponse, TrainerVerifyRequest
from fittrack.services.admin_service import AdminService
from fittrack.services.errors import ServiceError
from fittrack.services.trainer_service import TrainerService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/stats", response_model=AdminStatsResponse)
async def get_admin_stats(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Platform totals and month-over-month user growth"""
    try:
        return await AdminService(db).get_stats()
    except Exception as e:
        logger.error(f"Failed to compute admin stats: {str(e)}", exc_info=True)
        raise internal_error()


@router.get("/users", response_model=AdminUserListResponse)
async def list_users(
    page: int = Query(1),
    page_size: int = Query(20),
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    result = await AdminService(db).list_users(page=page, page_size=page_size)
    return AdminUserListResponse(
        users=[UserResponse.model_validate(u) for u in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.patch("/trainers/{user_id}/verify", response_model=TrainerProfileResponse)
async def verify_trainer(
    user_id: uuid.UUID,
    request: TrainerVerifyRequest,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await TrainerService(db).set_verified(user_id, request.is_verified)
    except ServiceError as e:
        raise to_http_exception(e)
