"""
Food catalog and hybrid name lookup
"""
import logging
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from fittrack.config import settings
from fittrack.models.nutrition import Food
from fittrack.models.user import User
from fittrack.services.errors import AccessDeniedError, NotFoundError
from fittrack.services.food_estimator import EstimatorUnavailable, FoodEstimatorService, get_food_estimator
from fittrack.services.pagination import Page, paginate

logger = logging.getLogger(__name__)

SOURCE_DATABASE = "DATABASE"
SOURCE_AI_ESTIMATE = "AI_ESTIMATE"
HYBRID_DB_PAGE_SIZE = 5


def food_result(food: Food, source: str, confidence: str = "high", is_new: bool = False) -> Dict[str, Any]:
    return {
        "id": food.id,
        "name": food.name,
        "description": food.description or "",
        "calories": food.calories,
        "protein": food.protein,
        "carbs": food.carbs,
        "fats": food.fats,
        "fiber": food.fiber,
        "sugar": food.sugar,
        "serving_size": food.serving_size,
        "serving_unit": food.serving_unit,
        "source": source,
        "confidence": confidence,
        "is_new": is_new,
    }


class FoodService:
    """Food catalog; mutation is admin only"""

    def __init__(self, db: AsyncSession, estimator: Optional[FoodEstimatorService] = None):
        self.db = db
        self._estimator = estimator

    @property
    def estimator(self) -> FoodEstimatorService:
        if self._estimator is None:
            self._estimator = get_food_estimator()
        return self._estimator

    async def search_foods(
        self,
        q: Optional[str] = None,
        page: int = 1,
        page_size: int = 20,
        is_public: Optional[bool] = None,
    ) -> Page:
        """Name search; public foods only unless ``is_public`` says otherwise"""
        stmt = select(Food)
        if q:
            stmt = stmt.where(Food.name.ilike(f"%{q}%"))
        stmt = stmt.where(Food.is_public.is_(True if is_public is None else is_public))
        return await paginate(self.db, stmt.order_by(Food.name.asc()), page, page_size)

    async def get_food(self, food_id: uuid.UUID) -> Food:
        food = await self.db.get(Food, food_id)
        if food is None:
            raise NotFoundError("Food not found")
        return food

    def _require_admin(self, user: User) -> None:
        if not user.is_admin:
            raise AccessDeniedError("Only admins can manage foods")

    async def create_food(self, data: Dict[str, Any], user: Optional[User] = None) -> Food:
        """Insert a food; ``user`` None is the system path used by the AI lookup"""
        if user is not None:
            self._require_admin(user)
        data = dict(data)
        if data.get("is_public") is None:
            data["is_public"] = True

        food = Food(created_by=user.id if user else None, **data)
        self.db.add(food)
        await self.db.flush()
        logger.info(f"Food {food.id} '{food.name}' created")
        return food

    async def update_food(self, food_id: uuid.UUID, user: User, changes: Dict[str, Any]) -> Food:
        self._require_admin(user)
        food = await self.get_food(food_id)
        for field, value in changes.items():
            if value is not None:
                setattr(food, field, value)
        await self.db.flush()
        return food

    async def delete_food(self, food_id: uuid.UUID, user: User) -> None:
        self._require_admin(user)
        food = await self.get_food(food_id)
        await self.db.delete(food)
        await self.db.flush()
        logger.info(f"Food {food_id} deleted by {user.id}")

    async def search_by_name(self, query: str) -> List[Dict[str, Any]]:
        """
        Two-tier lookup: the catalog first, then an AI estimate.

        Enough catalog matches are returned as they are. Otherwise an
        estimate is requested and stored as a new public food. Estimator
        failures leave the catalog matches as the answer.
        """
        page = await self.search_foods(q=query, page=1, page_size=HYBRID_DB_PAGE_SIZE, is_public=True)
        results = [food_result(food, SOURCE_DATABASE) for food in page.items]
        if len(results) >= settings.FOOD_ESTIMATE_MIN_MATCHES:
            return results

        logger.info(f"Only {len(results)} catalog matches for '{query}', requesting AI estimate")
        try:
            estimate = await self.estimator.estimate_with_retry(query)
        except EstimatorUnavailable as e:
            logger.warning(f"AI estimate skipped: {e}")
            return results
        except ValueError as e:
            logger.error(f"AI estimate failed for '{query}': {e}")
            return results

        food = await self.create_food({
            "name": estimate.name,
            "description": f"{estimate.description} (AI-estimated)",
            "calories": estimate.calories,
            "protein": estimate.protein,
            "carbs": estimate.carbs,
            "fats": estimate.fats,
            "fiber": estimate.fiber,
            "sugar": estimate.sugar,
            "serving_size": estimate.serving_size,
            "serving_unit": estimate.serving_unit,
            "is_public": True,
        })
        results.append(food_result(food, SOURCE_AI_ESTIMATE, confidence=estimate.confidence, is_new=True))
        return results

    async def best_match(self, query: str) -> Optional[Dict[str, Any]]:
        """Prefer a catalog match, else the AI estimate"""
        results = await self.search_by_name(query)
        if not results:
            return None
        for result in results:
            if result["source"] == SOURCE_DATABASE:
                return result
        return results[0]
