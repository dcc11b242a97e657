# 공용 테스트 설정
# - JWT 비밀키를 환경변수로 제공 (실제 키 사용 방지)
# - DB 없이 돌 수 있도록 메모리 저장소를 create_app()에 주입

import os
from dataclasses import dataclass, field
from datetime import datetime, timezone

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-the-user-api-suite")

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from user_api.core.config import Settings
from user_api.main import create_app
from user_api.models.user import normalize_email
from user_api.repositories.user_repository import DuplicateEmailError

TEST_SECRET = "test-secret-key-for-the-user-api-suite"


def _now():
    return datetime.now(tz=timezone.utc)


@dataclass
class StoredUser:
    id: ObjectId
    name: str
    email: str
    hashed_password: str
    role: str = "user"
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


class InMemoryUserRepository:
    """UserRepository와 같은 인터페이스를 가진 테스트용 저장소. 호출 기록을 남깁니다."""

    def __init__(self):
        self.users: dict[str, StoredUser] = {}
        self.calls: list[str] = []

    def _email_taken(self, email: str, exclude: str = None) -> bool:
        return any(u.email == email and key != exclude for key, u in self.users.items())

    async def create(self, name, email, hashed_password):
        self.calls.append("create")
        email = normalize_email(email)
        if self._email_taken(email):
            raise DuplicateEmailError(email)
        user = StoredUser(id=ObjectId(), name=name.strip(), email=email, hashed_password=hashed_password)
        self.users[str(user.id)] = user
        return user

    async def find_all(self):
        self.calls.append("find_all")
        return list(self.users.values())

    async def find_by_id(self, user_id):
        self.calls.append("find_by_id")
        return self.users.get(user_id)

    async def find_by_email(self, email):
        self.calls.append("find_by_email")
        email = normalize_email(email)
        return next((u for u in self.users.values() if u.email == email), None)

    async def update_by_id(self, user_id, data):
        self.calls.append("update_by_id")
        user = self.users.get(user_id)
        if user is None:
            return None
        if "email" in data:
            data = {**data, "email": normalize_email(data["email"])}
            if self._email_taken(data["email"], exclude=user_id):
                raise DuplicateEmailError(data["email"])
        for key, value in data.items():
            setattr(user, key, value)
        user.updated_at = _now()
        return user

    async def delete_by_id(self, user_id):
        self.calls.append("delete_by_id")
        return self.users.pop(user_id, None)


@pytest.fixture
def settings():
    return Settings(_env_file=None, JWT_SECRET_KEY=TEST_SECRET, LOG_LEVEL="WARNING")


@pytest.fixture
def repo():
    return InMemoryUserRepository()


@pytest.fixture
def app(settings, repo):
    return create_app(settings, repository=repo)


@pytest.fixture
def client(app):
    return TestClient(app)
