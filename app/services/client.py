# app/services/client.py
import logging
import secrets
import string
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Client
from app.repositories.client import ClientRepository
from app.repositories.measurement import MeasurementRepository
from app.schemas.client import (ClientCreateRequest, ClientResponse,
                                ClientSummaryResponse, ClientUpdateRequest)
from app.services.activity import ActivityService
from app.utils.calculations import (bmi_classification, calculate_age,
                                    calculate_bmi, calculate_mifflin_st_jeor,
                                    estimate_body_fat_percentage,
                                    parse_birth_date,
                                    weight_progress_percentage)

logger = logging.getLogger(__name__)

REFERENCE_CODE_ALPHABET = string.ascii_uppercase + string.digits
REFERENCE_CODE_LENGTH = 6
REFERENCE_CODE_ATTEMPTS = 20


class ClientService:
    """
    Client management. Every lookup goes through get_owned_client so that a
    missing client is 404 and another dietitian's client is 403.
    """

    def __init__(self):
        self.client_repo = ClientRepository()
        self.measurement_repo = MeasurementRepository()
        self.activity_service = ActivityService()

    async def get_owned_client(
        self,
        db: AsyncSession,
        client_id: int,
        user_id: int,
        forbidden_detail: str = "Bu danışana erişim izniniz yok",
    ) -> Client:
        client = await self.client_repo.get_by_id(db, client_id)
        if not client:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Danışan bulunamadı")
        if client.user_id != user_id:
            logger.warning(f"User {user_id} tried to access client {client_id}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=forbidden_detail)
        return client

    async def get_clients(
        self, db: AsyncSession, user_id: int, active_only: bool = False
    ) -> List[ClientResponse]:
        clients = await self.client_repo.get_all_by_user_id(
            db, user_id, status="active" if active_only else None
        )
        return [ClientResponse.model_validate(c) for c in clients]

    async def get_client(self, db: AsyncSession, client_id: int, user_id: int) -> ClientResponse:
        client = await self.get_owned_client(db, client_id, user_id)
        return ClientResponse.model_validate(client)

    async def create_client(
        self, db: AsyncSession, data: ClientCreateRequest, user_id: int
    ) -> ClientResponse:
        client = await self.client_repo.create(db, data.model_dump(), user_id=user_id)
        await self.activity_service.log(
            db, user_id, "client", f"Yeni danışan eklendi: {client.name}"
        )
        return ClientResponse.model_validate(client)

    async def update_client(
        self, db: AsyncSession, client_id: int, data: ClientUpdateRequest, user_id: int
    ) -> ClientResponse:
        client = await self.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışanı güncelleme izniniz yok"
        )
        client = await self.client_repo.update(db, client, data.model_dump(exclude_unset=True))
        return ClientResponse.model_validate(client)

    async def delete_client(self, db: AsyncSession, client_id: int, user_id: int) -> None:
        client = await self.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışanı silme izniniz yok"
        )
        await self.client_repo.delete(db, client)

    async def get_summary(self, db: AsyncSession, client_id: int, user_id: int) -> ClientSummaryResponse:
        """
        BMI, age, energy need and weight progress of a client.
        Fields that need missing profile data stay None.
        """
        client = await self.get_owned_client(db, client_id, user_id)
        latest = await self.measurement_repo.get_latest_weights(db, [client.client_id])

        current_weight = latest.get(client.client_id, client.starting_weight)
        birth_date = parse_birth_date(client.birth_date)
        age = calculate_age(birth_date) if birth_date else None

        summary = ClientSummaryResponse(
            client_id=client.client_id,
            age=age,
            current_weight=current_weight,
            target_weight=client.target_weight,
        )

        if current_weight is not None and client.starting_weight is not None:
            summary.weight_change = round(current_weight - client.starting_weight, 2)
            if client.target_weight is not None:
                summary.progress_percentage = round(
                    weight_progress_percentage(client.starting_weight, current_weight, client.target_weight), 1
                )

        if current_weight is not None and client.height:
            bmi = calculate_bmi(current_weight, client.height)
            summary.bmi = round(bmi, 1)
            summary.bmi_category = bmi_classification(bmi)
            if age is not None and client.gender:
                summary.body_fat_estimate = round(estimate_body_fat_percentage(bmi, age, client.gender), 1)
                summary.daily_calories = round(
                    calculate_mifflin_st_jeor(
                        current_weight, client.height, age, client.gender, client.activity_level
                    )
                )

        return summary

    async def generate_reference_code(self, db: AsyncSession, client_id: int, user_id: int) -> str:
        """
        Gives the client a fresh 6-character code for linking a Telegram chat.
        """
        client = await self.get_owned_client(
            db, client_id, user_id, forbidden_detail="Bu danışan için işlem yapma yetkiniz yok"
        )

        code: Optional[str] = None
        for _ in range(REFERENCE_CODE_ATTEMPTS):
            candidate = "".join(secrets.choice(REFERENCE_CODE_ALPHABET) for _ in range(REFERENCE_CODE_LENGTH))
            if not await self.client_repo.reference_code_exists(db, candidate):
                code = candidate
                break

        if code is None:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Referans kodu oluşturulamadı",
            )

        await self.client_repo.update(db, client, {"reference_code": code})
        logger.info(f"Reference code generated for client {client_id}")
        return code
