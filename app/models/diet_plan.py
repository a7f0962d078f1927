from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column
from sqlalchemy.types import TIMESTAMP
from sqlmodel import Field

from app.models.base import BaseModel


class DietPlan(BaseModel, table=True):
    """
    Diet plan prescribed to a client.
    - meals: JSON list of {name, foods: [{name, amount, calories}]}
    """

    __tablename__ = "diet_plans"

    diet_plan_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"autoincrement": True},
    )

    client_id: int = Field(foreign_key="clients.client_id", nullable=False, index=True)
    created_by: int = Field(foreign_key="users.user_id", nullable=False, index=True)

    title: str = Field(max_length=200, nullable=False)
    content: str = Field(default="")
    description: Optional[str] = Field(default="")

    start_date: datetime = Field(sa_type=TIMESTAMP(timezone=True), nullable=False)
    end_date: Optional[datetime] = Field(default=None, sa_type=TIMESTAMP(timezone=True))

    status: str = Field(default="active", max_length=20)

    daily_calories: float = Field(default=0)
    macro_protein: float = Field(default=0)
    macro_carbs: float = Field(default=0)
    macro_fat: float = Field(default=0)

    attachments: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
    )

    meals: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
    )
