# 사용자 라우터
# - POST   /api/users       : 생성
# - GET    /api/users       : 목록
# - GET    /api/users/{id}  : 단건 조회
# - PATCH  /api/users/{id}  : 부분 수정
# - DELETE /api/users/{id}  : 삭제
#
# HTTP 처리만 담당하고 비즈니스 로직은 UserService에 맡깁니다.

from fastapi import APIRouter, Depends, status

from ..deps import get_user_service
from ...core.result import unwrap
from ...core.validation import validate
from ...schemas.user_schema import (
    CreateUserRequest,
    MessageResponse,
    UpdateUserRequest,
    UserIdRequest,
    UserListResponse,
    UserResponse,
)
from ...services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED, summary="사용자 생성")
async def create_user(
    payload: CreateUserRequest = Depends(validate(CreateUserRequest)),
    service: UserService = Depends(get_user_service),
):
    user = unwrap(await service.create(payload.body))
    return UserResponse(data=user)


@router.get("", response_model=UserListResponse, summary="사용자 목록")
async def list_users(service: UserService = Depends(get_user_service)):
    users = unwrap(await service.list())
    return UserListResponse(data=users)


@router.get("/{id}", response_model=UserResponse, summary="사용자 단건 조회")
async def get_user(
    req: UserIdRequest = Depends(validate(UserIdRequest)),
    service: UserService = Depends(get_user_service),
):
    user = unwrap(await service.get_by_id(req.params.id))
    return UserResponse(data=user)


@router.patch("/{id}", response_model=UserResponse, summary="사용자 부분 수정 (최소 한 필드 필요)")
async def update_user(
    req: UserIdRequest = Depends(validate(UserIdRequest)),
    payload: UpdateUserRequest = Depends(validate(UpdateUserRequest)),
    service: UserService = Depends(get_user_service),
):
    user = unwrap(await service.update(req.params.id, payload.body))
    return UserResponse(data=user)


@router.delete("/{id}", response_model=MessageResponse, summary="사용자 삭제")
async def delete_user(
    req: UserIdRequest = Depends(validate(UserIdRequest)),
    service: UserService = Depends(get_user_service),
):
    unwrap(await service.delete(req.params.id))
    return MessageResponse(message="User deleted successfully")
