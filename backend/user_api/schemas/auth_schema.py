# 인증 관련 스키마

from pydantic import BaseModel, field_validator
from pydantic_core import PydanticCustomError

from .user_schema import check_email


class LoginBody(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def _check_email(cls, v: str) -> str:
        return check_email(v)

    @field_validator("password")
    @classmethod
    def _password_required(cls, v: str) -> str:
        if not v:
            raise PydanticCustomError("too_short", "Password is required")
        return v


class LoginRequest(BaseModel):
    body: LoginBody


class TokenResponse(BaseModel):
    status: str = "success"
    token: str


class AuthenticatedIdentity(BaseModel):
    """토큰 검증 후 요청마다 다시 만들어지는 최소 인증 정보 (저장되지 않음)"""

    id: str
    email: str
    role: str


class IdentityResponse(BaseModel):
    status: str = "success"
    data: AuthenticatedIdentity
