import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (AsyncSession, async_sessionmaker,
                                    create_async_engine)
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel

from app.core.config import settings
import app.models  # noqa: F401  registers table metadata

logger = logging.getLogger(__name__)

engine = create_async_engine(
    settings.DATABASE_URL,
    # no pooled connections for SQLite files
    poolclass=NullPool if settings.DATABASE_URL.startswith("sqlite") else None,
    # echo=settings.DEPLOY_PHASE == "dev", ORM query logging
)

async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False
)


@asynccontextmanager
async def get_async_session_context():
    """Session for work outside a request (e.g. the Telegram poller)."""
    async with async_session() as session:
        yield session


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session, injected with FastAPI Depends."""
    session = async_session()
    try:
        yield session
    finally:
        try:
            await session.close()
        except Exception as e:
            logger.debug(f"Session close warning (safe to ignore): {e}")


async def init_db():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database tables are ready")
