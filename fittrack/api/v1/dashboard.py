"""
Dashboard API
"""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import get_current_user
from fittrack.api.errors import internal_error
from fittrack.database.session import get_db
from fittrack.models.user import User
from fittrack.schemas.dashboard import DashboardResponse
from fittrack.services.dashboard_service import DashboardService

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("", response_model=DashboardResponse)
async def get_dashboard(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """
    Dashboard overview

    Returns:
        workout count and weekly change, calories burned today, weight trend,
        streak and the most recent completed workouts
    """
    try:
        return await DashboardService(db).get_stats(current_user.id)
    except Exception as e:
        logger.error(f"Failed to build dashboard for {current_user.id}: {str(e)}", exc_info=True)
        raise internal_error()
