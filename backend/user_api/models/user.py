# User 도메인 모델 (Beanie Document)
# - 이름, 이메일, 비밀번호 해시, 역할, 생성/수정 시각
# - 이메일은 unique 인덱스 (앞뒤 공백 제거 + 소문자로 저장)

from datetime import datetime, timezone

from beanie import Document, Indexed
from pydantic import EmailStr, Field, field_validator


def utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class User(Document):
    name: str
    email: Indexed(EmailStr, unique=True)  # 중복 방지 인덱스
    # 주니어 개발자님께: repr=False로 로그/디버그 출력에 해시가 찍히지 않게 합니다.
    hashed_password: str = Field(repr=False)
    role: str = "user"
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, v):
        return normalize_email(v) if isinstance(v, str) else v

    class Settings:
        name = "users"  # 컬렉션명
