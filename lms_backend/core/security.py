import secrets
from datetime import timedelta
from typing import Any, Dict

import bcrypt
import jwt
from loguru import logger

from lms_backend.core.settings import settings
from lms_backend.libs.formats.datetime import now_tzinfo

OTP_DIGITS = "1234567890"


class SecurityService:
    def __init__(self):
        self.secret_key = settings.SECRET_KEY
        self.algorithm = settings.ALGORITHM
        self.access_token_expire_minutes = float(settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    # 🔐 JWT
    async def create_access_token(
        self,
        sub: str,
        email: str,
        full_name: str,
        role: str,
        verified_at: str = "",
    ) -> str:
        issued = now_tzinfo()
        expire = issued + timedelta(minutes=self.access_token_expire_minutes)
        payload: Dict[str, Any] = {
            "sub": sub,
            "email": email,
            "full_name": full_name,
            "role": role,
            "verified_at": verified_at,
            "iat": issued,
            "exp": expire,
        }
        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)
        return str(token)

    async def decode_access_token(self, token: str) -> Dict[str, Any]:
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise ValueError("Token expired")
        except jwt.InvalidTokenError:
            raise ValueError("Invalid token")

    # 🔑 PASSWORD
    @staticmethod
    async def hash_password(plain: str) -> str:
        return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")

    @staticmethod
    async def verify_password(plain: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError:
            # malformed stored hash
            return False

    # 🔢 OTP
    @staticmethod
    async def generate_otp(length: int | None = None) -> str:
        """Fixed-length decimal code, one secure random byte per digit.

        Falls back to the configured code when the OS random source fails.
        """
        length = length or settings.OTP_LENGTH
        try:
            raw = secrets.token_bytes(length)
        except (OSError, NotImplementedError) as e:
            logger.error(f"❌ Secure random source unavailable, using fallback OTP: {e}")
            return settings.OTP_FALLBACK_CODE
        if len(raw) != length:
            return settings.OTP_FALLBACK_CODE
        return "".join(OTP_DIGITS[b % len(OTP_DIGITS)] for b in raw)
