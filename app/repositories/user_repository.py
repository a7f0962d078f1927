import logging
from typing import Any, Dict, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """
    Repository class for user (dietitian) database access
    """

    async def create(self, db: AsyncSession, user_data: Dict[str, Any]) -> Optional[User]:
        """
        Creates a user, hashing the plain password.

        Args:
            db: database session
            user_data: name, email, password and optional profile fields

        Returns:
            the created user, or None when the e-mail is already taken
        """
        try:
            if await self.exists_by_email(db, user_data["email"]):
                logger.warning(f"E-mail already registered: {user_data['email']}")
                return None

            data = dict(user_data)
            password_hash = User.hash_password(data.pop("password"))
            user = User(**data, password_hash=password_hash)

            db.add(user)
            await db.commit()
            await db.refresh(user)

            logger.info(f"User created: {user.email}")
            return user

        except IntegrityError as ie:
            await db.rollback()
            logger.error(f"User create integrity error (email={user_data.get('email')}): {ie}")
            return None
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"User create error: {e}")
            raise

    async def get_by_id(self, db: AsyncSession, user_id: int) -> Optional[User]:
        result = await db.execute(select(User).where(User.user_id == user_id))
        return result.scalars().first()

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalars().first()
        if not user:
            logger.info(f"No user with e-mail: {email}")
        return user

    async def update(self, db: AsyncSession, user: User, update_data: Dict[str, Any]) -> Optional[User]:
        """
        Updates the given user. A plain "password" is stored as password_hash.
        """
        user_id = user.user_id
        try:
            if update_data.get("password"):
                update_data["password_hash"] = User.hash_password(update_data.pop("password"))

            allowed_fields = {
                "name", "email", "password_hash", "profile_picture",
                "bio", "phone", "telegram_token",
            }
            for key, value in update_data.items():
                if key in allowed_fields:
                    setattr(user, key, value)

            db.add(user)
            await db.commit()
            await db.refresh(user)

            logger.info(f"User updated: {user_id}")
            return user

        except IntegrityError as ie:
            await db.rollback()
            logger.error(f"User update integrity error (user_id={user_id}): {ie}")
            return None
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"User update error (user_id={user_id}): {e}")
            raise

    async def exists_by_email(self, db: AsyncSession, email: str) -> bool:
        result = await db.execute(
            select(func.count()).select_from(User).where(User.email == email)
        )
        return (result.scalar() or 0) > 0
