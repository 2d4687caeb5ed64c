import secrets

import jwt
import pytest

from lms_backend.core.security import SecurityService
from lms_backend.core.settings import settings
from lms_backend.schemas.auth.user import JwtClaims


async def test_password_hash_roundtrip():
    hashed = await SecurityService.hash_password("pw1")
    assert hashed != "pw1"
    assert await SecurityService.verify_password("pw1", hashed)
    assert not await SecurityService.verify_password("pw2", hashed)


async def test_verify_password_with_malformed_hash_is_false():
    assert not await SecurityService.verify_password("pw1", "not-a-bcrypt-hash")


async def test_access_token_carries_identity_and_24h_expiry(security):
    token = await security.create_access_token(
        sub="u-1",
        email="a@x.com",
        full_name="Ann",
        role="Owner",
        verified_at="",
    )
    claims = JwtClaims.model_validate(await security.decode_access_token(token))

    assert claims.sub == "u-1"
    assert claims.email == "a@x.com"
    assert claims.full_name == "Ann"
    assert claims.role == "Owner"
    assert claims.exp - claims.iat == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


async def test_decode_rejects_tampered_and_expired_tokens(security):
    forged = jwt.encode({"sub": "u-1", "exp": 9999999999}, "other-key", algorithm="HS256")
    with pytest.raises(ValueError, match="Invalid token"):
        await security.decode_access_token(forged)

    expired = jwt.encode(
        {"sub": "u-1", "exp": 1}, settings.SECRET_KEY, algorithm=settings.ALGORITHM
    )
    with pytest.raises(ValueError, match="Token expired"):
        await security.decode_access_token(expired)


async def test_generate_otp_is_fixed_length_digits():
    code = await SecurityService.generate_otp()
    assert len(code) == settings.OTP_LENGTH
    assert code.isdigit()
    assert len(await SecurityService.generate_otp(8)) == 8


async def test_generate_otp_falls_back_when_random_source_fails(monkeypatch):
    def broken(_n):
        raise OSError("entropy pool exhausted")

    monkeypatch.setattr(secrets, "token_bytes", broken)
    assert await SecurityService.generate_otp() == settings.OTP_FALLBACK_CODE
