from datetime import datetime
from typing import Annotated, Optional

from pydantic import BaseModel, EmailStr, Field

from lms_backend.schemas.shares.base import EnvelopeResponse

Password = Annotated[str, Field(min_length=1, max_length=72)]


class JwtClaims(BaseModel):
    sub: str
    email: str
    full_name: str
    role: str
    verified_at: str = ""
    iat: Optional[int] = None
    exp: int


class RegisterRequest(BaseModel):
    full_name: Annotated[str, Field(min_length=1, max_length=255)]
    email: EmailStr
    password: Password
    password_confirmation: Password


class LoginRequest(BaseModel):
    email: EmailStr
    password: Password


class ChangePasswordRequest(BaseModel):
    old_password: Password
    new_password: Password
    new_password_confirmation: Password


class VerifyRequest(BaseModel):
    code_otp: Annotated[str, Field(min_length=1, max_length=12, pattern=r"^[0-9]+$")]


class LoginResponse(EnvelopeResponse):
    access_token: Optional[str] = None


class ProfileResponse(EnvelopeResponse):
    user_id: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None
    role_code: Optional[str] = None
    verified_at: Optional[datetime] = None
    member_since: Optional[datetime] = None
