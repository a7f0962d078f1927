from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column
from sqlalchemy.types import TIMESTAMP
from sqlmodel import Field

from app.models.base import BaseModel
from app.utils.datetime import utc_now


class Measurement(BaseModel, table=True):
    """
    Body measurements of a client taken on a given date (kg / cm).
    """

    __tablename__ = "measurements"

    measurement_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"autoincrement": True},
    )

    client_id: int = Field(foreign_key="clients.client_id", nullable=False, index=True)

    date: datetime = Field(
        default_factory=utc_now,
        sa_type=TIMESTAMP(timezone=True),
        nullable=False,
    )

    weight: Optional[float] = None
    height: Optional[float] = None
    neck: Optional[float] = None
    arm: Optional[float] = None
    chest: Optional[float] = None
    waist: Optional[float] = None
    abdomen: Optional[float] = None
    hip: Optional[float] = None
    thigh: Optional[float] = None
    calf: Optional[float] = None
    body_fat_percentage: Optional[float] = None

    notes: Optional[str] = None

    images: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False, default=list),
    )
