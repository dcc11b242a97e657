# 인증 라우터
# - 로그인: POST /api/auth/login
# - 내 정보: GET /api/auth/me (Bearer 토큰 필요)

from fastapi import APIRouter, Depends

from ..deps import get_auth_service
from ...core.result import unwrap
from ...core.security import protect
from ...core.validation import validate
from ...schemas.auth_schema import AuthenticatedIdentity, IdentityResponse, LoginRequest, TokenResponse
from ...services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse, summary="로그인 (JWT Access 토큰 발급)")
async def login(
    payload: LoginRequest = Depends(validate(LoginRequest)),
    service: AuthService = Depends(get_auth_service),
):
    token = unwrap(await service.login(payload.body.email, payload.body.password))
    return TokenResponse(token=token)


@router.get("/me", response_model=IdentityResponse, summary="현재 로그인한 사용자 (로그인 필요)")
async def me(identity: AuthenticatedIdentity = Depends(protect)):
    return IdentityResponse(data=identity)
