from datetime import datetime
from typing import Optional

from sqlalchemy.types import TIMESTAMP
from sqlmodel import Field

from app.models.base import BaseModel


class Appointment(BaseModel, table=True):
    """
    Consultation between a dietitian and a client.
    - type: "online" | "in-person"
    - duration: minutes
    """

    __tablename__ = "appointments"

    appointment_id: Optional[int] = Field(
        default=None,
        primary_key=True,
        sa_column_kwargs={"autoincrement": True},
    )

    client_id: int = Field(foreign_key="clients.client_id", nullable=False, index=True)
    user_id: int = Field(foreign_key="users.user_id", nullable=False, index=True)

    date: datetime = Field(sa_type=TIMESTAMP(timezone=True), nullable=False)
    duration: int = Field(nullable=False)

    status: str = Field(default="scheduled", max_length=20)
    notes: Optional[str] = None
    type: str = Field(default="in-person", max_length=20)
