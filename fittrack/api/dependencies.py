"""
API dependencies
"""
from typing import Optional
import uuid

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.database.session import get_db
from fittrack.models.user import User, UserRole
from fittrack.utils.security import JWTError, decode_access_token

# Missing credentials are reported as 401 by get_current_user, not 403
security = HTTPBearer(auto_error=False)


async def _user_from_token(token: str, db: AsyncSession) -> Optional[User]:
    try:
        payload = decode_access_token(token)
        user_id_str = payload.get("sub")
        if user_id_str is None:
            return None
        user_id = uuid.UUID(user_id_str)
    except (JWTError, ValueError):
        return None

    return await db.get(User, user_id)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Resolve the signed-in user from the bearer token

    Args:
        credentials: bearer token
        db: database session

    Returns:
        the current user

    Raises:
        HTTPException: 401 when the token is missing, invalid or expired,
            or the user no longer exists
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await _user_from_token(credentials.credentials, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> Optional[User]:
    """Like get_current_user, but anonymous callers get None"""
    if credentials is None:
        return None
    return await _user_from_token(credentials.credentials, db)


def require_roles(*roles: UserRole):
    """Dependency factory: 401 when signed out, 403 when the role does not match"""

    async def _check(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _check


require_admin = require_roles(UserRole.ADMIN)
require_trainer = require_roles(UserRole.TRAINER, UserRole.ADMIN)
