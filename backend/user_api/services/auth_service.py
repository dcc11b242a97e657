# 인증 서비스 레이어
# - 로그인 (비밀번호 검증, JWT 토큰 발급)
# - "없는 이메일"과 "틀린 비밀번호"는 같은 401 응답으로 처리합니다 (사용자 열거 방지)

import logging

from starlette.concurrency import run_in_threadpool

from ..core.config import Settings
from ..core.exceptions import AuthError
from ..core.result import Err, Ok, Result
from ..core.security import create_access_token, dummy_verify, verify_password
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    def __init__(self, repo: UserRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    async def login(self, email: str, password: str) -> Result[str]:
        user = await self.repo.find_by_email(email)
        if user is None:
            await run_in_threadpool(dummy_verify)
            return Err(AuthError(INVALID_CREDENTIALS))
        if not await run_in_threadpool(verify_password, password, user.hashed_password):
            return Err(AuthError(INVALID_CREDENTIALS))
        logger.info("User %s logged in", user.id)
        return Ok(create_access_token(str(user.id), self.settings))
