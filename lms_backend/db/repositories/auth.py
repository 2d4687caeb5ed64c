import datetime
from typing import Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from lms_backend.db.models.database import User, UserOtp
from lms_backend.libs.formats.datetime import now as get_now


class AuthRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # ==============================
    # USERS
    # ==============================

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self.db.scalar(
            select(User)
            .where(User.email == email, User.deleted_at.is_(None))
            .execution_options(populate_existing=True)
        )

    async def insert_user(self, user: User) -> None:
        self.db.add(user)
        await self.db.flush()

    async def update_user_password(
        self, user_id: str, hashed_password: str, updated_by: str
    ) -> None:
        await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(password=hashed_password, updated_at=get_now(), updated_by=updated_by)
        )

    async def mark_as_verified(self, user_id: str) -> None:
        await self.db.execute(
            update(User).where(User.id == user_id).values(verified_at=get_now())
        )

    # ==============================
    # OTP (one row per email)
    # ==============================

    async def upsert_otp(self, otp: UserOtp) -> None:
        await self.db.merge(otp)
        await self.db.flush()

    async def get_otp_by_email(self, email: str) -> Optional[UserOtp]:
        return await self.db.scalar(
            select(UserOtp)
            .where(UserOtp.email == email)
            .execution_options(populate_existing=True)
        )

    async def delete_otp(self, email: str) -> None:
        await self.db.execute(delete(UserOtp).where(UserOtp.email == email))

    async def purge_expired_otps(self, before: datetime.datetime) -> int:
        result = await self.db.execute(
            delete(UserOtp).where(UserOtp.expired_at < before)
        )
        return result.rowcount or 0
