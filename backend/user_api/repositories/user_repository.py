# 사용자 저장소 레이어 (Persistence Gateway)
# - 데이터 접근(조회/생성/수정/삭제)만 담당 (서비스 로직 분리)
# - "없음"은 에러가 아니라 None으로 돌려줍니다
# - 이메일 정규화와 유니크 제약 위반 변환은 저장소와 가장 가까운 이곳에서 처리합니다

from typing import Any, Optional, Protocol

from beanie import PydanticObjectId, UpdateResponse
from beanie.operators import Set
from pydantic import EmailStr, TypeAdapter
from pymongo.errors import DuplicateKeyError

from ..models.user import User, normalize_email, utcnow

# insert 경로의 Indexed(EmailStr)와 같은 규칙으로 $set 값도 주소만 남깁니다.
_email_adapter = TypeAdapter(EmailStr)


class DuplicateEmailError(Exception):
    """이메일 유니크 인덱스 위반. 드라이버 예외를 감추기 위한 저장소 레벨 예외입니다."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Duplicate email: {email}")


class UserRepository(Protocol):
    async def create(self, name: str, email: str, hashed_password: str) -> User: ...

    async def find_all(self) -> list[User]: ...

    async def find_by_id(self, user_id: str) -> Optional[User]: ...

    async def find_by_email(self, email: str) -> Optional[User]: ...

    async def update_by_id(self, user_id: str, data: dict[str, Any]) -> Optional[User]: ...

    async def delete_by_id(self, user_id: str) -> Optional[User]: ...


def _normalize_update(data: dict[str, Any]) -> dict[str, Any]:
    fields = dict(data)
    if "email" in fields:
        fields["email"] = _email_adapter.validate_python(normalize_email(fields["email"]))
    if "name" in fields:
        fields["name"] = fields["name"].strip()
    fields["updated_at"] = utcnow()
    return fields


class BeanieUserRepository:
    """MongoDB(Beanie ODM) 기반 구현체"""

    async def create(self, name: str, email: str, hashed_password: str) -> User:
        user = User(name=name, email=email, hashed_password=hashed_password)
        try:
            return await user.insert()
        except DuplicateKeyError:
            raise DuplicateEmailError(user.email)

    async def find_all(self) -> list[User]:
        return await User.find_all().to_list()

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await User.get(PydanticObjectId(user_id))

    async def find_by_email(self, email: str) -> Optional[User]:
        return await User.find_one(User.email == normalize_email(email))

    async def update_by_id(self, user_id: str, data: dict[str, Any]) -> Optional[User]:
        fields = _normalize_update(data)
        try:
            # findOneAndUpdate 한 번으로 갱신된 문서를 받아옵니다.
            return await User.find_one(User.id == PydanticObjectId(user_id)).update(
                Set(fields),
                response_type=UpdateResponse.NEW_DOCUMENT,
            )
        except DuplicateKeyError:
            raise DuplicateEmailError(fields.get("email", ""))

    async def delete_by_id(self, user_id: str) -> Optional[User]:
        oid = PydanticObjectId(user_id)
        user = await User.get(oid)
        if user is None:
            return None
        # 성공 여부는 deleteOne 한 번의 deleted_count로만 판단합니다.
        # 동시에 들어온 삭제 요청 중 실제로 지운 하나만 문서를 돌려받습니다.
        result = await User.find_one(User.id == oid).delete()
        if result is None or result.deleted_count == 0:
            return None
        return user
