from fastapi import APIRouter, Body, Depends, Response, status

from lms_backend.core.deps import AuthContext, get_auth_context, get_current_claims
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
from lms_backend.services.shares.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


def get_auth_service(auth: AuthService = Depends(AuthService)) -> AuthService:
    return auth


@router.post("/register", status_code=status.HTTP_200_OK, response_model=EnvelopeResponse)
async def register(
    schema: RegisterRequest = Body(),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.register_async(schema)


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    res: Response,
    schema: LoginRequest = Body(),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.login_async(schema, res)


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=EnvelopeResponse)
async def logout(
    res: Response,
    context: AuthContext = Depends(get_auth_context),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.logout_async(context.token, context.claims, res)


@router.post("/change-password", response_model=EnvelopeResponse)
async def change_password(
    schema: ChangePasswordRequest = Body(),
    claims: JwtClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.change_password_async(claims, schema)


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    claims: JwtClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.get_profile_async(claims)


@router.post("/request-otp", response_model=EnvelopeResponse)
async def request_otp(
    claims: JwtClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.request_otp_async(claims)


@router.post("/verify", response_model=EnvelopeResponse)
async def verify(
    schema: VerifyRequest = Body(),
    claims: JwtClaims = Depends(get_current_claims),
    auth_service: AuthService = Depends(get_auth_service),
):
    return await auth_service.verify_async(claims, schema)
