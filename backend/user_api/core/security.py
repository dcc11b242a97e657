# 보안/인증 유틸리티
# - 비밀번호 해싱/검증 (bcrypt, 솔트 포함 단방향 해시)
# - JWT 토큰 생성/검증
# - protect: 보호된 요청마다 Bearer 토큰을 검증하고 인증된 사용자 정보를 붙이는 의존성

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from bson import ObjectId
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from .config import Settings
from .exceptions import AuthError
from ..api.deps import get_app_settings, get_user_repository
from ..repositories.user_repository import UserRepository
from ..schemas.auth_schema import AuthenticatedIdentity

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
# auto_error=False: 헤더가 없거나 형식이 틀려도 FastAPI 기본 403 대신 우리가 401을 만듭니다.
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED = "Unauthorized"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # passlib의 verify는 상수 시간 비교를 사용합니다.
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify() -> None:
    """존재하지 않는 이메일로 로그인할 때도 해시 비교와 비슷한 시간을 소모시킵니다."""
    pwd_context.dummy_verify()


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def create_token(subject: dict, expires_delta: timedelta, settings: Settings) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "exp": now + expires_delta,
        "iat": now,
        "nbf": now,
        **subject,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: str, settings: Settings) -> str:
    return create_token(
        {"sub": str(user_id), "type": "access"},
        timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        settings,
    )


def decode_access_token(token: str, settings: Settings) -> Optional[str]:
    """서명/만료를 검증하고 토큰에 담긴 사용자 ID를 반환합니다. 실패하면 None."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError as e:
        logger.info("Rejected token: %s", type(e).__name__)
        return None
    if payload.get("type") != "access":
        return None
    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not ObjectId.is_valid(user_id):
        return None
    return user_id


async def protect(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repo: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
) -> AuthenticatedIdentity:
    # 1) Authorization: Bearer <token> 헤더 확인
    if credentials is None or not credentials.credentials:
        raise AuthError(UNAUTHORIZED)

    # 2) 서명/만료 검증
    user_id = decode_access_token(credentials.credentials, settings)
    if user_id is None:
        raise AuthError(UNAUTHORIZED)

    # 3) 토큰의 사용자가 아직 존재하는지 확인
    user = await repo.find_by_id(user_id)
    if user is None:
        raise AuthError(UNAUTHORIZED)

    # 4) 최소한의 인증 정보만 요청에 붙입니다 (요청이 끝나면 사라짐)
    identity = AuthenticatedIdentity(id=str(user.id), email=user.email, role=user.role)
    request.state.user = identity
    return identity
