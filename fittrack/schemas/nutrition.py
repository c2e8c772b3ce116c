"""
Food catalog, nutrition log and nutrition target schemas
"""
from datetime import datetime
from typing import List, Optional
import uuid

from pydantic import BaseModel, Field, field_validator

from fittrack.models.nutrition import MealType
from fittrack.schemas.common import PageResponse, blank_to_none


# ===== Foods =====

class FoodBase(BaseModel):
    """Macros are per 100 g"""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    calories: float = Field(..., ge=0, description="kcal / 100 g")
    protein: float = Field(..., ge=0, description="g / 100 g")
    carbs: float = Field(..., ge=0, description="g / 100 g")
    fats: float = Field(..., ge=0, description="g / 100 g")
    fiber: Optional[float] = Field(None, ge=0)
    sugar: Optional[float] = Field(None, ge=0)
    serving_size: Optional[float] = Field(None, gt=0)
    serving_unit: Optional[str] = Field(None, max_length=20)
    is_public: Optional[bool] = None

    @field_validator("description", mode="before")
    @classmethod
    def _blank(cls, value):
        return blank_to_none(value)


class FoodCreate(FoodBase):
    pass


class FoodUpdate(FoodBase):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    calories: Optional[float] = Field(None, ge=0)
    protein: Optional[float] = Field(None, ge=0)
    carbs: Optional[float] = Field(None, ge=0)
    fats: Optional[float] = Field(None, ge=0)


class FoodResponse(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str]
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: Optional[float]
    sugar: Optional[float]
    serving_size: Optional[float]
    serving_unit: Optional[str]
    is_public: bool
    created_at: datetime

    class Config:
        from_attributes = True


class FoodListResponse(PageResponse):
    foods: List[FoodResponse]


class FoodSearchResult(BaseModel):
    """Hybrid lookup row"""

    id: uuid.UUID
    name: str
    description: str
    calories: float
    protein: float
    carbs: float
    fats: float
    fiber: Optional[float]
    sugar: Optional[float]
    serving_size: Optional[float]
    serving_unit: Optional[str]
    source: str = Field(..., description="DATABASE or AI_ESTIMATE")
    confidence: str
    is_new: bool


class FoodSearchResponse(BaseModel):
    results: List[FoodSearchResult]


# ===== Nutrition logs =====

class NutritionLogCreate(BaseModel):
    food_id: uuid.UUID
    meal_type: MealType
    quantity: float = Field(..., gt=0, le=10000, description="Grams")
    notes: Optional[str] = Field(None, max_length=1000)
    consumed_at: Optional[datetime] = None


class NutritionLogUpdate(BaseModel):
    meal_type: Optional[MealType] = None
    quantity: Optional[float] = Field(None, gt=0, le=10000)
    notes: Optional[str] = Field(None, max_length=1000)
    consumed_at: Optional[datetime] = None


class FoodSummary(BaseModel):
    id: uuid.UUID
    name: str
    calories: float
    protein: float
    carbs: float
    fats: float
    serving_unit: Optional[str]

    class Config:
        from_attributes = True


class NutritionLogResponse(BaseModel):
    id: uuid.UUID
    food_id: uuid.UUID
    meal_type: MealType
    quantity: float
    calories: float
    protein: float
    carbs: float
    fats: float
    notes: Optional[str]
    consumed_at: datetime
    food: Optional[FoodSummary] = None

    class Config:
        from_attributes = True


class NutritionLogListResponse(BaseModel):
    logs: List[NutritionLogResponse]


class NutritionStatsResponse(BaseModel):
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fats: float
    meal_count: int


# ===== Targets =====

class NutritionTargetsResponse(BaseModel):
    target_calories: int
    target_protein: int
    target_carbs: int
    target_fats: int


class NutritionTargetsUpdate(BaseModel):
    """All four targets are required"""

    target_calories: Optional[int] = Field(None, gt=0, le=20000)
    target_protein: Optional[int] = Field(None, ge=0, le=2000)
    target_carbs: Optional[int] = Field(None, ge=0, le=3000)
    target_fats: Optional[int] = Field(None, ge=0, le=1000)
    use_custom_targets: bool = True


class NutritionTargetsUpdateResponse(BaseModel):
    success: bool = True
    targets: NutritionTargetsResponse
