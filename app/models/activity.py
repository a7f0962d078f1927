from typing import Optional

from sqlmodel import Field

from app.models.base import BaseModel


class Activity(BaseModel, table=True):
    """
    Entry of the dashboard activity feed ("client", "measurement", "diet_plan",
    "appointment", "telegram").
    """

    __tablename__ = "activities"

    activity_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"autoincrement": True},
    )

    user_id: int = Field(foreign_key="users.user_id", nullable=False, index=True)

    type: str = Field(max_length=30, nullable=False, index=True)
    description: str = Field(nullable=False)
