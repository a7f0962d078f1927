# app/schemas/diet_plan.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_none
from app.utils.datetime import ensure_utc


class FoodItem(BaseModel):
    name: str = ""
    amount: str = ""
    calories: float = Field(default=0, ge=0, description="kcal")


class Meal(BaseModel):
    name: str
    foods: List[FoodItem] = Field(default_factory=list)


class DietPlanRequest(BaseModel):
    client_id: Optional[int] = Field(default=None, description="Required on POST /diet-plans")
    title: str = Field(min_length=2, max_length=200)
    content: str = ""
    description: Optional[str] = ""
    start_date: datetime
    end_date: Optional[datetime] = None
    status: str = "active"
    attachments: List[str] = Field(default_factory=list)
    daily_calories: float = Field(default=0, ge=0)
    macro_protein: float = Field(default=0, ge=0)
    macro_carbs: float = Field(default=0, ge=0)
    macro_fat: float = Field(default=0, ge=0)
    meals: List[Meal] = Field(default_factory=list)

    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v else v


class DietPlanUpdateRequest(BaseModel):
    title: Optional[str] = Field(default=None, min_length=2, max_length=200)
    content: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[str] = None
    attachments: Optional[List[str]] = None
    daily_calories: Optional[float] = Field(default=None, ge=0)
    macro_protein: Optional[float] = Field(default=None, ge=0)
    macro_carbs: Optional[float] = Field(default=None, ge=0)
    macro_fat: Optional[float] = Field(default=None, ge=0)
    meals: Optional[List[Meal]] = None

    @field_validator("start_date", "end_date")
    @classmethod
    def _to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v) if v else v

    @field_validator(
        "title", "content", "start_date", "status", "attachments",
        "daily_calories", "macro_protein", "macro_carbs", "macro_fat", "meals",
    )
    @classmethod
    def _not_null(cls, v):
        return reject_none(v)


class DietPlanResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    diet_plan_id: int
    client_id: int
    created_by: int
    title: str
    content: str
    description: Optional[str] = None
    start_date: datetime
    end_date: Optional[datetime] = None
    status: str
    attachments: List[str] = Field(default_factory=list)
    daily_calories: float
    macro_protein: float
    macro_carbs: float
    macro_fat: float
    meals: List[Meal] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GeneratedDietPlan(BaseModel):
    """
    Suggested plan computed from the client profile; not persisted
    """
    name: str
    description: str
    daily_calories: int
    macro_protein: int
    macro_carbs: int
    macro_fat: int
    meals: List[Meal]
