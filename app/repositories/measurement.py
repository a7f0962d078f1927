# app/repositories/measurement.py
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models import Measurement

logger = logging.getLogger(__name__)


class MeasurementRepository:
    """
    Repository class for measurement database access
    """

    async def create(self, db: AsyncSession, data: Dict[str, Any], client_id: int) -> Measurement:
        try:
            if data.get("date") is None:
                data.pop("date", None)
            measurement = Measurement(**data, client_id=client_id)
            db.add(measurement)
            await db.commit()
            await db.refresh(measurement)
            logger.info(f"Measurement created for client {client_id}: {measurement.measurement_id}")
            return measurement

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating measurement for client {client_id}: {e}")
            raise

    async def get_by_id(self, db: AsyncSession, measurement_id: int) -> Optional[Measurement]:
        result = await db.execute(
            select(Measurement).where(Measurement.measurement_id == measurement_id)
        )
        return result.scalars().first()

    async def get_all_by_client_id(self, db: AsyncSession, client_id: int) -> List[Measurement]:
        """
        Measurements of a client, newest date first.
        """
        result = await db.execute(
            select(Measurement)
            .where(Measurement.client_id == client_id)
            .order_by(Measurement.date.desc(), Measurement.measurement_id.desc())
        )
        return list(result.scalars().all())

    async def get_latest_by_client_id(self, db: AsyncSession, client_id: int) -> Optional[Measurement]:
        result = await db.execute(
            select(Measurement)
            .where(Measurement.client_id == client_id)
            .order_by(Measurement.date.desc(), Measurement.measurement_id.desc())
            .limit(1)
        )
        return result.scalars().first()

    async def get_latest_weights(
        self, db: AsyncSession, client_ids: Sequence[int]
    ) -> Dict[int, float]:
        """
        client_id -> weight of the most recent measurement that has a weight.
        """
        if not client_ids:
            return {}

        latest = (
            select(
                Measurement.client_id,
                func.max(Measurement.date).label("latest_date"),
            )
            .where(Measurement.client_id.in_(client_ids))
            .where(Measurement.weight.is_not(None))
            .group_by(Measurement.client_id)
            .subquery()
        )
        result = await db.execute(
            select(Measurement.client_id, Measurement.weight)
            .join(
                latest,
                (Measurement.client_id == latest.c.client_id)
                & (Measurement.date == latest.c.latest_date),
            )
            .where(Measurement.weight.is_not(None))
        )
        return {client_id: weight for client_id, weight in result.all()}

    async def update(
        self, db: AsyncSession, measurement: Measurement, update_data: Dict[str, Any]
    ) -> Measurement:
        measurement_id = measurement.measurement_id
        try:
            for key, value in update_data.items():
                setattr(measurement, key, value)

            db.add(measurement)
            await db.commit()
            await db.refresh(measurement)
            logger.info(f"Measurement updated: {measurement_id}")
            return measurement

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error updating measurement {measurement_id}: {e}")
            raise

    async def delete(self, db: AsyncSession, measurement: Measurement) -> bool:
        measurement_id = measurement.measurement_id
        try:
            await db.delete(measurement)
            await db.commit()
            logger.info(f"Measurement deleted: {measurement_id}")
            return True

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error deleting measurement {measurement_id}: {e}")
            raise
