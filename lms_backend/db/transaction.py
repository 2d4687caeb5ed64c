from contextlib import asynccontextmanager
from typing import AsyncIterator

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Open a session with an explicit transaction for one unit of work.

    Nothing is committed unless the caller awaits ``tx.commit()``. Every other
    exit path (early return, error, cancellation) rolls back before the
    session is closed.
    """
    async with session_factory() as tx:
        await tx.begin()
        try:
            yield tx
        except Exception:
            logger.exception("❌ Transaction aborted, rolling back")
            await tx.rollback()
            raise
        finally:
            if tx.in_transaction():
                await tx.rollback()
