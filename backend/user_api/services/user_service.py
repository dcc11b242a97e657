# 사용자 서비스 레이어
# - HTTP와 무관한 비즈니스 규칙: ID 형식 검사, 존재 여부 확인, 응답 형태 변환
# - 저장소 호출은 작업당 정확히 한 번
# - 결과는 예외 대신 Ok / Err 로 돌려주고, 핸들러 경계에서 unwrap() 합니다

import logging

from bson import ObjectId
from starlette.concurrency import run_in_threadpool

from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..core.result import Err, Ok, Result
from ..core.security import get_password_hash
from ..models.user import User
from ..repositories.user_repository import DuplicateEmailError, UserRepository
from ..schemas.user_schema import PublicUser, UserCreate, UserUpdate

logger = logging.getLogger(__name__)

INVALID_ID = "Invalid user ID"
NOT_FOUND = "User not found"
EMAIL_IN_USE = "Email already in use"


def to_public_user(user: User) -> PublicUser:
    """저장된 문서를 외부로 내보낼 수 있는 형태로 바꿉니다 (비밀번호 제거)."""
    return PublicUser(id=str(user.id), name=user.name, email=user.email)


def is_valid_id(user_id: str) -> bool:
    return ObjectId.is_valid(user_id)


class UserService:
    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def create(self, data: UserCreate) -> Result[PublicUser]:
        # bcrypt는 CPU를 오래 쓰므로 이벤트 루프를 막지 않도록 스레드풀에서 실행합니다.
        hashed = await run_in_threadpool(get_password_hash, data.password)
        try:
            user = await self.repo.create(data.name, data.email, hashed)
        except DuplicateEmailError:
            return Err(ConflictError(EMAIL_IN_USE))
        logger.info("Created user %s", user.id)
        return Ok(to_public_user(user))

    async def list(self) -> Result[list[PublicUser]]:
        users = await self.repo.find_all()
        return Ok([to_public_user(u) for u in users])

    async def get_by_id(self, user_id: str) -> Result[PublicUser]:
        if not is_valid_id(user_id):
            return Err(ValidationError(INVALID_ID))
        user = await self.repo.find_by_id(user_id)
        if user is None:
            return Err(NotFoundError(NOT_FOUND))
        return Ok(to_public_user(user))

    async def update(self, user_id: str, data: UserUpdate) -> Result[PublicUser]:
        if not is_valid_id(user_id):
            return Err(ValidationError(INVALID_ID))
        changes = data.changes()
        if "password" in changes:
            changes["hashed_password"] = await run_in_threadpool(get_password_hash, changes.pop("password"))
        try:
            user = await self.repo.update_by_id(user_id, changes)
        except DuplicateEmailError:
            return Err(ConflictError(EMAIL_IN_USE))
        if user is None:
            return Err(NotFoundError(NOT_FOUND))
        logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(data.model_fields_set)))
        return Ok(to_public_user(user))

    async def delete(self, user_id: str) -> Result[None]:
        if not is_valid_id(user_id):
            return Err(ValidationError(INVALID_ID))
        user = await self.repo.delete_by_id(user_id)
        if user is None:
            return Err(NotFoundError(NOT_FOUND))
        logger.info("Deleted user %s", user_id)
        return Ok(None)
