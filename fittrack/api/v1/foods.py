"""
Food catalog API
"""
import logging
import uuid
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.api.dependencies import require_admin
from fittrack.api.errors import internal_error, to_http_exception
from fittrack.database.session import get_db
from fittrack.models.user import User
from fittrack.schemas.nutrition import (
    FoodCreate,
    FoodListResponse,
    FoodResponse,
    FoodSearchResponse,
    FoodSearchResult,
    FoodUpdate,
)
from fittrack.services.errors import ServiceError
from fittrack.services.food_service import FoodService

router = APIRouter()
logger = logging.getLogger(__name__)


def _food_list(result) -> FoodListResponse:
    return FoodListResponse(
        foods=[FoodResponse.model_validate(f) for f in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.get("", response_model=FoodListResponse)
async def list_foods(
    q: Optional[str] = Query(None, description="Name contains"),
    page: int = Query(1),
    page_size: int = Query(20),
    is_public: Optional[bool] = Query(None),
    db: AsyncSession = Depends(get_db)
):
    result = await FoodService(db).search_foods(q=q, page=page, page_size=page_size, is_public=is_public)
    return _food_list(result)


@router.get("/search", response_model=FoodListResponse)
async def search_foods(
    q: Optional[str] = Query(None),
    page: int = Query(1),
    page_size: int = Query(20),
    db: AsyncSession = Depends(get_db)
):
    """Public foods only"""
    result = await FoodService(db).search_foods(q=q, page=page, page_size=page_size, is_public=True)
    return _food_list(result)


@router.get("/search-by-name")
async def search_by_name(
    q: Optional[str] = Query(None, description="Food name"),
    best: bool = Query(False, description="Return only the best match"),
    db: AsyncSession = Depends(get_db)
):
    """
    Hybrid lookup

    Catalog matches come first; with too few of them an AI estimate is
    requested and saved to the catalog.
    """
    if not q or not q.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required"
        )

    service = FoodService(db)
    try:
        if best:
            match = await service.best_match(q.strip())
            if match is None:
                raise HTTPException(
                    status_code=status.HTTP_404_NOT_FOUND,
                    detail="No food found"
                )
            return FoodSearchResult(**match)

        results = await service.search_by_name(q.strip())
        return FoodSearchResponse(results=[FoodSearchResult(**r) for r in results])

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Food lookup failed for '{q}': {str(e)}", exc_info=True)
        raise internal_error()


@router.get("/{food_id}", response_model=FoodResponse)
async def get_food(
    food_id: uuid.UUID,
    db: AsyncSession = Depends(get_db)
):
    try:
        return await FoodService(db).get_food(food_id)
    except ServiceError as e:
        raise to_http_exception(e)


@router.post("", response_model=FoodResponse, status_code=status.HTTP_201_CREATED)
async def create_food(
    request: FoodCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await FoodService(db).create_food(request.model_dump(), user=current_user)
    except ServiceError as e:
        raise to_http_exception(e)


@router.put("/{food_id}", response_model=FoodResponse)
async def update_food(
    food_id: uuid.UUID,
    request: FoodUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        return await FoodService(db).update_food(food_id, current_user, request.model_dump(exclude_unset=True))
    except ServiceError as e:
        raise to_http_exception(e)


@router.delete("/{food_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    food_id: uuid.UUID,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        await FoodService(db).delete_food(food_id, current_user)
    except ServiceError as e:
        raise to_http_exception(e)
