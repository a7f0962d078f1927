# app/services/measurement.py
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Measurement
from app.repositories.measurement import MeasurementRepository
from app.schemas.measurement import (MeasurementRequest, MeasurementResponse,
                                     MeasurementUpdateRequest)
from app.services.activity import ActivityService
from app.services.client import ClientService

logger = logging.getLogger(__name__)


class MeasurementService:
    """
    Measurements are owned through their client
    """

    def __init__(self):
        self.measurement_repo = MeasurementRepository()
        self.client_service = ClientService()
        self.activity_service = ActivityService()

    async def _get_owned_measurement(
        self, db: AsyncSession, measurement_id: int, user_id: int
    ) -> Measurement:
        measurement = await self.measurement_repo.get_by_id(db, measurement_id)
        if not measurement:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ölçüm bulunamadı")
        await self.client_service.get_owned_client(
            db, measurement.client_id, user_id, forbidden_detail="Bu ölçüme erişim izniniz yok"
        )
        return measurement

    async def get_measurements(
        self, db: AsyncSession, client_id: int, user_id: int
    ) -> List[MeasurementResponse]:
        await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışanın ölçümlerine erişim izniniz yok"
        )
        measurements = await self.measurement_repo.get_all_by_client_id(db, client_id)
        return [MeasurementResponse.model_validate(m) for m in measurements]

    async def get_latest_measurement(
        self, db: AsyncSession, client_id: int, user_id: int
    ) -> MeasurementResponse:
        await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışanın ölçümlerine erişim izniniz yok"
        )
        measurement = await self.measurement_repo.get_latest_by_client_id(db, client_id)
        if not measurement:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Ölçüm bulunamadı")
        return MeasurementResponse.model_validate(measurement)

    async def create_measurement(
        self, db: AsyncSession, client_id: int, data: MeasurementRequest, user_id: int
    ) -> MeasurementResponse:
        client = await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışan için ölçüm ekleme izniniz yok"
        )
        measurement = await self.measurement_repo.create(db, data.model_dump(), client_id=client_id)
        await self.activity_service.log(
            db, user_id, "measurement", f"Yeni ölçüm kaydedildi: {client.name} için"
        )
        return MeasurementResponse.model_validate(measurement)

    async def get_measurement(self, db: AsyncSession, measurement_id: int, user_id: int) -> MeasurementResponse:
        measurement = await self._get_owned_measurement(db, measurement_id, user_id)
        return MeasurementResponse.model_validate(measurement)

    async def update_measurement(
        self, db: AsyncSession, measurement_id: int, data: MeasurementUpdateRequest, user_id: int
    ) -> MeasurementResponse:
        measurement = await self._get_owned_measurement(db, measurement_id, user_id)
        measurement = await self.measurement_repo.update(db, measurement, data.model_dump(exclude_unset=True))
        return MeasurementResponse.model_validate(measurement)

    async def delete_measurement(self, db: AsyncSession, measurement_id: int, user_id: int) -> None:
        measurement = await self._get_owned_measurement(db, measurement_id, user_id)
        await self.measurement_repo.delete(db, measurement)
