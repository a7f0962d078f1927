# app/repositories/client.py
import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models import Appointment, Client, DietPlan, Measurement

logger = logging.getLogger(__name__)


class ClientRepository:
    """
    Repository class for client database access
    """

    async def create(self, db: AsyncSession, data: Dict[str, Any], user_id: int) -> Client:
        try:
            client = Client(**data, user_id=user_id)
            db.add(client)
            await db.commit()
            await db.refresh(client)
            logger.info(f"Client created for user {user_id}: {client.client_id}")
            return client

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error creating client for user {user_id}: {e}")
            raise

    async def get_by_id(self, db: AsyncSession, client_id: int) -> Optional[Client]:
        result = await db.execute(select(Client).where(Client.client_id == client_id))
        return result.scalars().first()

    async def get_many(self, db: AsyncSession, client_ids: Sequence[int]) -> List[Client]:
        if not client_ids:
            return []
        result = await db.execute(select(Client).where(Client.client_id.in_(client_ids)))
        return list(result.scalars().all())

    async def get_all_by_user_id(
        self, db: AsyncSession, user_id: int, status: Optional[str] = None
    ) -> List[Client]:
        """
        Clients of a user, newest first; optionally only one status.
        """
        query = select(Client).where(Client.user_id == user_id)
        if status:
            query = query.where(Client.status == status)
        query = query.order_by(Client.created_at.desc(), Client.client_id.desc())

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_by_reference_code(self, db: AsyncSession, reference_code: str) -> Optional[Client]:
        result = await db.execute(select(Client).where(Client.reference_code == reference_code))
        return result.scalars().first()

    async def reference_code_exists(self, db: AsyncSession, reference_code: str) -> bool:
        result = await db.execute(
            select(func.count()).select_from(Client).where(Client.reference_code == reference_code)
        )
        return (result.scalar() or 0) > 0

    async def update(self, db: AsyncSession, client: Client, update_data: Dict[str, Any]) -> Client:
        client_id = client.client_id
        try:
            for key, value in update_data.items():
                if hasattr(client, key):
                    setattr(client, key, value)

            db.add(client)
            await db.commit()
            await db.refresh(client)
            logger.info(f"Client updated: {client_id}")
            return client

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error updating client {client_id}: {e}")
            raise

    async def delete(self, db: AsyncSession, client: Client) -> bool:
        """
        Deletes the client together with its measurements, diet plans and appointments.
        """
        client_id = client.client_id
        try:
            await db.execute(delete(Measurement).where(Measurement.client_id == client_id))
            await db.execute(delete(DietPlan).where(DietPlan.client_id == client_id))
            await db.execute(delete(Appointment).where(Appointment.client_id == client_id))
            await db.delete(client)
            await db.commit()
            logger.info(f"Client deleted with related records: {client_id}")
            return True

        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error deleting client {client_id}: {e}")
            raise

    async def count_by_user_id(
        self,
        db: AsyncSession,
        user_id: int,
        status: Optional[str] = None,
        telegram_linked: bool = False,
    ) -> int:
        query = select(func.count()).select_from(Client).where(Client.user_id == user_id)
        if status:
            query = query.where(Client.status == status)
        if telegram_linked:
            query = query.where(Client.telegram_chat_id.is_not(None))

        result = await db.execute(query)
        return result.scalar() or 0
