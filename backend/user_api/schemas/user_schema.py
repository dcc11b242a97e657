# 요청/응답 스키마 정의 (Pydantic 모델)
# - 요청 스키마는 body / params / query 를 최상위 필드로 가집니다 (검증 게이트가 한 번에 검증)
# - 에러 메시지는 필드 선언 순서대로 "<경로>: <이유>" 형태로 합쳐집니다 (core/validation.py)

from typing import Optional

from pydantic import BaseModel, field_validator, model_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError


def _require_string(value):
    # Optional 필드에 명시적으로 null이 들어온 경우
    if value is None:
        raise PydanticCustomError("string_type", "Expected string")
    return value


def check_name(value: Optional[str]) -> str:
    value = _require_string(value).strip()
    if len(value) < 2:
        raise PydanticCustomError("too_short", "Name must be at least 2 characters long")
    return value


def check_email(value: Optional[str]) -> str:
    value = _require_string(value).strip()
    try:
        _, address = validate_email(value)
    except PydanticCustomError:
        raise PydanticCustomError("invalid_email", "Invalid email address")
    # "Name <addr>" 형식은 validate_email이 통과시키므로 주소만 있는 입력만 허용합니다.
    if address.lower() != value.lower():
        raise PydanticCustomError("invalid_email", "Invalid email address")
    return value


def check_password(value: Optional[str]) -> str:
    value = _require_string(value)
    if len(value) < 6:
        raise PydanticCustomError("too_short", "Password must be at least 6 characters long")
    return value


class _UserFields(BaseModel):
    """생성/수정 스키마가 공유하는 필드 규칙"""

    @field_validator("name", check_fields=False)
    @classmethod
    def _check_name(cls, v):
        return check_name(v)

    @field_validator("email", check_fields=False)
    @classmethod
    def _check_email(cls, v):
        return check_email(v)

    @field_validator("password", check_fields=False)
    @classmethod
    def _check_password(cls, v):
        return check_password(v)


class UserCreate(_UserFields):
    name: str
    email: str
    password: str


class UserUpdate(_UserFields):
    """PATCH 본문: 모든 필드가 선택이지만 최소 하나는 있어야 합니다."""

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

    @model_validator(mode="after")
    def _at_least_one_field(self):
        if not self.model_fields_set:
            raise PydanticCustomError("empty_update", "At least one field must be provided for update")
        return self

    def changes(self) -> dict:
        return self.model_dump(include=self.model_fields_set)


class UserIdParams(BaseModel):
    id: str

    @field_validator("id")
    @classmethod
    def _id_required(cls, v: str) -> str:
        if len(v) < 1:
            raise PydanticCustomError("too_short", "User ID is required")
        return v


class CreateUserRequest(BaseModel):
    body: UserCreate


class UpdateUserRequest(BaseModel):
    body: UserUpdate


class UserIdRequest(BaseModel):
    params: UserIdParams


class PublicUser(BaseModel):
    """외부로 나가는 유일한 사용자 형태 (비밀번호 없음)"""

    id: str
    name: str
    email: str


class UserResponse(BaseModel):
    status: str = "success"
    data: PublicUser


class UserListResponse(BaseModel):
    status: str = "success"
    data: list[PublicUser]


class MessageResponse(BaseModel):
    status: str = "success"
    message: str
