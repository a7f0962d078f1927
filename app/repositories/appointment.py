# app/repositories/appointment.py
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models import Appointment

logger = logging.getLogger(__name__)


class AppointmentRepository:
    """
    Repository class for appointment database access
    """

    async def create(self, db: AsyncSession, data: Dict[str, Any], user_id: int) -> Appointment:
        try:
            appointment = Appointment(**data, user_id=user_id)
            db.add(appointment)
            await db.commit()
            await db.refresh(appointment)
            logger.info(f"Appointment created for user {user_id}: {appointment.appointment_id}")
            return appointment

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating appointment for user {user_id}: {e}")
            raise

    async def get_by_id(self, db: AsyncSession, appointment_id: int) -> Optional[Appointment]:
        result = await db.execute(
            select(Appointment).where(Appointment.appointment_id == appointment_id)
        )
        return result.scalars().first()

    async def get_all_by_user_id(
        self,
        db: AsyncSession,
        user_id: int,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        status: Optional[str] = None,
    ) -> List[Appointment]:
        """
        Appointments of a user in ascending date order, optionally within [start, end).
        """
        query = select(Appointment).where(Appointment.user_id == user_id)
        if start is not None:
            query = query.where(Appointment.date >= start)
        if end is not None:
            query = query.where(Appointment.date < end)
        if status:
            query = query.where(Appointment.status == status)
        query = query.order_by(Appointment.date.asc(), Appointment.appointment_id.asc())

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_all_by_client_id(self, db: AsyncSession, client_id: int) -> List[Appointment]:
        result = await db.execute(
            select(Appointment)
            .where(Appointment.client_id == client_id)
            .order_by(Appointment.date.asc(), Appointment.appointment_id.asc())
        )
        return list(result.scalars().all())

    async def count_between(self, db: AsyncSession, user_id: int, start: datetime, end: datetime) -> int:
        result = await db.execute(
            select(func.count())
            .select_from(Appointment)
            .where(Appointment.user_id == user_id)
            .where(Appointment.date >= start)
            .where(Appointment.date < end)
        )
        return result.scalar() or 0

    async def update(
        self, db: AsyncSession, appointment: Appointment, update_data: Dict[str, Any]
    ) -> Appointment:
        appointment_id = appointment.appointment_id
        try:
            for key, value in update_data.items():
                setattr(appointment, key, value)

            db.add(appointment)
            await db.commit()
            await db.refresh(appointment)
            logger.info(f"Appointment updated: {appointment_id}")
            return appointment

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error updating appointment {appointment_id}: {e}")
            raise

    async def delete(self, db: AsyncSession, appointment: Appointment) -> bool:
        appointment_id = appointment.appointment_id
        try:
            await db.delete(appointment)
            await db.commit()
            logger.info(f"Appointment deleted: {appointment_id}")
            return True

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error deleting appointment {appointment_id}: {e}")
            raise
