"""
Authentication API - registration and JWT login
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.schemas.account import (
    LoginRequest, RegisterRequest, RegisterResponse, TokenResponse, UserResponse,
)
from fittrack.services.account_service import AccountService
from fittrack.services.errors import ServiceError
from fittrack.utils.security import create_access_token

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Create an account

    USER and TRAINER are open to self-registration; trainers start unverified.
    """
    try:
        user = await AccountService(db).register(
            email=request.email,
            password=request.password,
            name=request.name,
            role=request.role,
        )
        return RegisterResponse(
            message="User created successfully",
            user=UserResponse.model_validate(user),
        )

    except ServiceError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Registration failed: {str(e)}", exc_info=True)
        raise internal_error()


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Email + password login

    Returns a bearer token valid for JWT_EXPIRE_MINUTES.
    """
    user = await AccountService(db).authenticate(request.email, request.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    access_token = create_access_token(user.id, user.role.value)
    logger.info(f"User logged in: user_id={user.id}")

    return TokenResponse(
        access_token=access_token,
        user_id=str(user.id),
        role=user.role,
    )
