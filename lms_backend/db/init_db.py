from loguru import logger
from sqlalchemy.ext.asyncio import AsyncEngine

from lms_backend.db.models.database import Base


async def create_all(engine: AsyncEngine) -> None:
    """Create every table from the ORM metadata (idempotent)."""
    async with engine.begin() as conn:  # begin() commits or rolls back on exit
        await conn.run_sync(Base.metadata.create_all)
    logger.info("🎉 Database tables ensured")


async def drop_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
