# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
import uuid

from sqlalchemy.exc import IntegrityError

import tests  # noqa: F401  environment for the test database
from app.database import get_async_session_context, init_db
from app.repositories import ClientRepository, UserRepository


class TestRepositoryWriteErrors(unittest.IsolatedAsyncioTestCase):
    """
    A failed commit is rolled back and the database error reaches the caller.
    """

    async def asyncSetUp(self) -> None:
        await init_db()
        self.user_repo = UserRepository()
        self.client_repo = ClientRepository()

    async def _create_user(self, db):
        return await self.user_repo.create(
            db,
            {"name": "Repo Test", "email": f"{uuid.uuid4().hex[:12]}@example.com", "password": "secret123"},
        )

    async def test_client_update_raises_integrity_error(self) -> None:
        async with get_async_session_context() as db:
            user = await self._create_user(db)
            client = await self.client_repo.create(
                db, {"name": "Kaan Er", "email": "kaan@example.com"}, user_id=user.user_id
            )
            client_id = client.client_id

            with self.assertRaises(IntegrityError):
                await self.client_repo.update(db, client, {"name": None})

        async with get_async_session_context() as db:
            stored = await self.client_repo.get_by_id(db, client_id)
            self.assertEqual(stored.name, "Kaan Er")

    async def test_user_update_returns_none_on_integrity_error(self) -> None:
        async with get_async_session_context() as db:
            user = await self._create_user(db)
            other = await self._create_user(db)

            self.assertIsNone(await self.user_repo.update(db, user, {"email": other.email}))


if __name__ == "__main__":
    unittest.main()
