from __future__ import annotations

import secrets
import uuid
from datetime import timedelta

from fastapi import Depends, Response
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from lms_backend.core.enum import UserRole
from lms_backend.core.policy import unauthenticated
from lms_backend.core.revocation import RevocationCache, get_revocation_cache
from lms_backend.core.security import SecurityService
from lms_backend.core.settings import settings
from lms_backend.db.models.database import User, UserOtp
from lms_backend.db.repositories.auth import AuthRepository
from lms_backend.db.session import get_session
from lms_backend.libs.formats.datetime import now as get_now
from lms_backend.libs.formats.datetime import now_tzinfo
from lms_backend.libs.response import bad_request_response, success_response
from lms_backend.schemas.auth.user import (
    ChangePasswordRequest,
    JwtClaims,
    LoginRequest,
    LoginResponse,
    ProfileResponse,
    RegisterRequest,
    VerifyRequest,
)
from lms_backend.schemas.shares.base import EnvelopeResponse
from lms_backend.services.shares.notification import EmailOutbox, get_email_outbox


class AuthService:
    def __init__(
        self,
        db: AsyncSession = Depends(get_session),
        security: SecurityService = Depends(SecurityService),
        outbox: EmailOutbox = Depends(get_email_outbox),
        revocation: RevocationCache = Depends(get_revocation_cache),
    ):
        self.db = db
        self.repository = AuthRepository(db)
        self.security = security
        self.outbox = outbox
        self.revocation = revocation

    # ==============================
    # 🧩 ACCOUNT
    # ==============================

    async def register_async(self, schema: RegisterRequest) -> EnvelopeResponse:
        if schema.password != schema.password_confirmation:
            return EnvelopeResponse(base=bad_request_response("Password is not matched"))

        try:
            if await self.repository.get_user_by_email(schema.email):
                return EnvelopeResponse(base=bad_request_response("User already exist"))

            new_user = User(
                id=str(uuid.uuid4()),
                full_name=schema.full_name,
                email=schema.email,
                password=await self.security.hash_password(schema.password),
                role_code=UserRole.USER.value,
                created_at=get_now(),
                created_by=schema.full_name,
            )
            await self.repository.insert_user(new_user)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return EnvelopeResponse(base=success_response("User is registered"))

    async def login_async(
        self, schema: LoginRequest, res: Response | None = None
    ) -> LoginResponse:
        user = await self.repository.get_user_by_email(schema.email)
        if not user:
            return LoginResponse(base=bad_request_response("User is not registered"))

        if not await self.security.verify_password(schema.password, user.password):
            raise unauthenticated()

        access_token = await self.security.create_access_token(
            sub=user.id,
            email=user.email,
            full_name=user.full_name,
            role=user.role_code,
            verified_at=user.verified_at.isoformat() if user.verified_at else "",
        )
        if res is not None:
            res.set_cookie(
                key="access_token",
                value=access_token,
                httponly=True,
                samesite="lax",
                max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
                path="/",
            )
        return LoginResponse(
            base=success_response("Login successful"), access_token=access_token
        )

    async def logout_async(
        self, token: str, claims: JwtClaims, res: Response | None = None
    ) -> EnvelopeResponse:
        # denylist entry lives exactly as long as the token would have
        ttl = claims.exp - now_tzinfo().timestamp()
        self.revocation.put(token, ttl)
        if res is not None:
            res.delete_cookie(key="access_token", httponly=True, samesite="lax", path="/")
        return EnvelopeResponse(base=success_response("Logout success"))

    async def change_password_async(
        self, claims: JwtClaims, schema: ChangePasswordRequest
    ) -> EnvelopeResponse:
        if schema.new_password != schema.new_password_confirmation:
            return EnvelopeResponse(
                base=bad_request_response("New password is not matched")
            )

        try:
            user = await self.repository.get_user_by_email(claims.email)
            if not user:
                return EnvelopeResponse(base=bad_request_response("User does not exist"))

            if not await self.security.verify_password(schema.old_password, user.password):
                return EnvelopeResponse(
                    base=bad_request_response("Old password is not matched")
                )

            await self.repository.update_user_password(
                user.id,
                await self.security.hash_password(schema.new_password),
                user.full_name,
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return EnvelopeResponse(base=success_response("Change password success"))

    async def get_profile_async(self, claims: JwtClaims) -> ProfileResponse:
        user = await self.repository.get_user_by_email(claims.email)
        if not user:
            return ProfileResponse(base=bad_request_response("User doesn't exist"))

        return ProfileResponse(
            base=success_response("Get Profile success"),
            user_id=claims.sub,
            full_name=claims.full_name,
            email=claims.email,
            role_code=claims.role,
            verified_at=user.verified_at,
            member_since=user.created_at,
        )

    # ==============================
    # 🔢 OTP EMAIL VERIFICATION
    # ==============================

    async def request_otp_async(self, claims: JwtClaims) -> EnvelopeResponse:
        try:
            last_otp = await self.repository.get_otp_by_email(claims.email)
            if last_otp:
                elapsed = (get_now() - last_otp.created_at).total_seconds()
                if elapsed < settings.OTP_RESEND_SECONDS:
                    remaining = settings.OTP_RESEND_SECONDS - int(elapsed)
                    return EnvelopeResponse(
                        base=bad_request_response(
                            f"Please wait {remaining} seconds before requesting a new code"
                        )
                    )

            code = await self.security.generate_otp()
            created_at = get_now()
            await self.repository.upsert_otp(
                UserOtp(
                    email=claims.email,
                    otp_code=code,
                    expired_at=created_at + timedelta(minutes=settings.OTP_EXPIRE_MINUTES),
                    created_at=created_at,
                )
            )
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        # delivery happens off the request path
        if not self.outbox.enqueue_otp(claims.email, code):
            logger.warning(f"⚠ OTP for {claims.email} stored but email not queued")

        return EnvelopeResponse(base=success_response("Send or Resend OTP success"))

    async def verify_async(
        self, claims: JwtClaims, schema: VerifyRequest
    ) -> EnvelopeResponse:
        try:
            user = await self.repository.get_user_by_email(claims.email)
            if not user:
                return EnvelopeResponse(base=bad_request_response("User doesn't exist"))

            if user.verified_at is not None:
                return EnvelopeResponse(base=bad_request_response("Email already verified"))

            otp = await self.repository.get_otp_by_email(claims.email)
            if not otp:
                return EnvelopeResponse(
                    base=bad_request_response("OTP not found or expired")
                )

            if get_now() > otp.expired_at:
                return EnvelopeResponse(base=bad_request_response("OTP has expired"))

            if not secrets.compare_digest(
                otp.otp_code.encode(), schema.code_otp.encode()
            ):
                return EnvelopeResponse(base=bad_request_response("Incorrect OTP code"))

            await self.repository.mark_as_verified(user.id)
            await self.repository.delete_otp(claims.email)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        return EnvelopeResponse(base=success_response("Verify success"))
