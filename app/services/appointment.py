# app/services/appointment.py
import logging
from typing import List

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Appointment
from app.repositories.appointment import AppointmentRepository
from app.schemas.appointment import (AppointmentRequest, AppointmentResponse,
                                     AppointmentUpdateRequest)
from app.services.activity import ActivityService
from app.services.client import ClientService
from app.utils.datetime import format_display_date, utc_day_bounds, utc_now

logger = logging.getLogger(__name__)


class AppointmentService:
    """
    Appointments are owned by the dietitian in user_id
    """

    def __init__(self):
        self.appointment_repo = AppointmentRepository()
        self.client_service = ClientService()
        self.activity_service = ActivityService()

    async def _get_owned_appointment(
        self, db: AsyncSession, appointment_id: int, user_id: int, forbidden_detail: str
    ) -> Appointment:
        appointment = await self.appointment_repo.get_by_id(db, appointment_id)
        if not appointment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Randevu bulunamadı")
        if appointment.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=forbidden_detail)
        return appointment

    @staticmethod
    def _to_responses(appointments: List[Appointment]) -> List[AppointmentResponse]:
        return [AppointmentResponse.model_validate(a) for a in appointments]

    async def get_appointments(self, db: AsyncSession, user_id: int) -> List[AppointmentResponse]:
        return self._to_responses(await self.appointment_repo.get_all_by_user_id(db, user_id))

    async def get_today_appointments(self, db: AsyncSession, user_id: int) -> List[AppointmentResponse]:
        start, end = utc_day_bounds()
        return self._to_responses(
            await self.appointment_repo.get_all_by_user_id(db, user_id, start=start, end=end)
        )

    async def get_upcoming_appointments(self, db: AsyncSession, user_id: int) -> List[AppointmentResponse]:
        return self._to_responses(
            await self.appointment_repo.get_all_by_user_id(
                db, user_id, start=utc_now(), status="scheduled"
            )
        )

    async def get_client_appointments(
        self, db: AsyncSession, client_id: int, user_id: int
    ) -> List[AppointmentResponse]:
        await self.client_service.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışanın randevularına erişim izniniz yok"
        )
        return self._to_responses(await self.appointment_repo.get_all_by_client_id(db, client_id))

    async def create_appointment(
        self, db: AsyncSession, data: AppointmentRequest, user_id: int
    ) -> AppointmentResponse:
        client = await self.client_service.get_owned_client(
            db, data.client_id, user_id, forbidden_detail="Bu danışan için randevu oluşturma izniniz yok"
        )
        appointment = await self.appointment_repo.create(db, data.model_dump(), user_id=user_id)
        await self.activity_service.log(
            db, user_id, "appointment",
            f"{client.name} için {format_display_date(appointment.date)} tarihinde yeni randevu oluşturuldu",
        )
        return AppointmentResponse.model_validate(appointment)

    async def get_appointment(self, db: AsyncSession, appointment_id: int, user_id: int) -> AppointmentResponse:
        appointment = await self._get_owned_appointment(
            db, appointment_id, user_id, "Bu randevuya erişim izniniz yok"
        )
        return AppointmentResponse.model_validate(appointment)

    async def update_appointment(
        self, db: AsyncSession, appointment_id: int, data: AppointmentUpdateRequest, user_id: int
    ) -> AppointmentResponse:
        appointment = await self._get_owned_appointment(
            db, appointment_id, user_id, "Bu randevuyu güncelleme izniniz yok"
        )
        appointment = await self.appointment_repo.update(db, appointment, data.model_dump(exclude_unset=True))
        return AppointmentResponse.model_validate(appointment)

    async def delete_appointment(self, db: AsyncSession, appointment_id: int, user_id: int) -> None:
        appointment = await self._get_owned_appointment(
            db, appointment_id, user_id, "Bu randevuyu silme izniniz yok"
        )
        await self.appointment_repo.delete(db, appointment)
