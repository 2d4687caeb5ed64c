import asyncio

import pytest
from loguru import logger
from sqlalchemy import func, select

from lms_backend.db.models.database import UserOtp
from lms_backend.db.transaction import transaction
from lms_backend.libs.formats.datetime import now as get_now


@pytest.fixture
def logged():
    messages: list[str] = []
    sink_id = logger.add(lambda m: messages.append(m.record["message"]), level="ERROR")
    yield messages
    logger.remove(sink_id)


def otp_row(email="a@x.com"):
    return UserOtp(email=email, otp_code="123456", expired_at=get_now(), created_at=get_now())


async def count_rows(session_factory):
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(UserOtp))


async def test_commit_persists(session_factory, logged):
    async with transaction(session_factory) as tx:
        tx.add(otp_row())
        await tx.commit()

    assert await count_rows(session_factory) == 1
    assert logged == []


async def test_leaving_without_commit_persists_nothing(session_factory):
    async with transaction(session_factory) as tx:
        tx.add(otp_row())
        await tx.flush()

    assert await count_rows(session_factory) == 0


async def test_error_rolls_back_logs_and_propagates(session_factory, logged):
    with pytest.raises(ValueError):
        async with transaction(session_factory) as tx:
            tx.add(otp_row())
            await tx.flush()
            raise ValueError("boom")

    assert await count_rows(session_factory) == 0
    assert logged == ["❌ Transaction aborted, rolling back"]


async def test_cancellation_rolls_back_without_error_log(session_factory, logged):
    with pytest.raises(asyncio.CancelledError):
        async with transaction(session_factory) as tx:
            tx.add(otp_row())
            await tx.flush()
            raise asyncio.CancelledError()

    assert await count_rows(session_factory) == 0
    assert logged == []
