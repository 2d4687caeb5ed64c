# lms_backend/core/deps.py
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, Request
from pydantic import ValidationError

from lms_backend.core.policy import unauthenticated
from lms_backend.core.revocation import RevocationCache, get_revocation_cache
from lms_backend.core.security import SecurityService
from lms_backend.schemas.auth.user import JwtClaims


@dataclass
class AuthContext:
    token: str
    claims: JwtClaims


def extract_token(request: Request) -> Optional[str]:
    """Bearer header first, then the access_token cookie set at login."""
    header = request.headers.get("authorization")
    if header and header.lower().startswith("bearer "):
        return header.split(" ", 1)[1].strip() or None
    return request.cookies.get("access_token")


class AuthorizationService:
    def __init__(
        self,
        security: SecurityService = Depends(SecurityService),
        revocation: RevocationCache = Depends(get_revocation_cache),
    ):
        self.security = security
        self.revocation = revocation

    async def authenticate(self, token: Optional[str]) -> AuthContext:
        """Verify signature/expiry and reject revoked tokens."""
        if not token:
            raise HTTPException(status_code=401, detail="Token not found")

        if self.revocation.exists(token):
            raise unauthenticated()

        try:
            payload = await self.security.decode_access_token(token)
            claims = JwtClaims.model_validate(payload)
        except (ValueError, ValidationError):
            raise unauthenticated()

        return AuthContext(token=token, claims=claims)

    async def get_current_context(self, request: Request) -> AuthContext:
        return await self.authenticate(extract_token(request))


async def get_auth_context(
    request: Request,
    authorization: AuthorizationService = Depends(AuthorizationService),
) -> AuthContext:
    return await authorization.get_current_context(request)


async def get_current_claims(
    context: AuthContext = Depends(get_auth_context),
) -> JwtClaims:
    return context.claims
