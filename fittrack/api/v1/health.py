"""
Database health API
"""
import logging
from fastapi import APIRouter, HTTPException, status

from fittrack.database.health import check_connection, ping, retry_database_operation

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/db")
async def database_health():
    """
    Ping the database, waking it if it was suspended

    Returns:
        status plus whether a retry was needed to reach it
    """
    if await ping():
        return {"status": "ok", "database": "connected", "woken": False}

    try:
        await retry_database_operation(check_connection)
    except Exception as e:
        logger.error(f"Database unreachable: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable"
        )
    return {"status": "ok", "database": "connected", "woken": True}
