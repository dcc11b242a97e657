# FastAPI 진입점
# - create_app(): 설정/저장소/서비스를 한 번 만들어 app.state에 주입
# - Beanie ODM 초기화 (MongoDB, 저장소를 외부에서 주입하지 않은 경우만)
# - 미들웨어, 에러 핸들러, 라우터 등록

import logging
from typing import Optional

from beanie import init_beanie
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

from .api.health import router as health_router
from .api.v1.auth import router as auth_router
from .api.v1.users import router as users_router
from .core.config import Settings, get_settings
from .core.errors import register_error_handlers
from .core.middleware import register_middleware
from .core.observability import setup_logging
from .models.user import User
from .repositories.user_repository import BeanieUserRepository, UserRepository
from .services.auth_service import AuthService
from .services.user_service import UserService

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


async def connect_database(settings: Settings) -> AsyncIOMotorClient:
    # 주니어 개발자님께: serverSelectionTimeoutMS 안에 연결하지 못하면 타임아웃 에러가 발생합니다.
    client = AsyncIOMotorClient(settings.MONGODB_URI, serverSelectionTimeoutMS=settings.MONGODB_TIMEOUT_MS)
    # admin 명령을 실행하여 실제로 연결되는지 확인합니다.
    await client.admin.command("ping")
    db = client.get_default_database()
    await init_beanie(database=db, document_models=[User])
    return client


def create_app(settings: Optional[Settings] = None, repository: Optional[UserRepository] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    app = FastAPI(
        title=settings.APP_NAME,
        description="사용자 관리 REST API (CRUD + 이메일/비밀번호 로그인)",
        version=VERSION,
    )

    # 인스턴스는 프로세스 시작 시 한 번만 만들고 핸들러에는 의존성으로 넘깁니다.
    use_database = repository is None
    repo = repository or BeanieUserRepository()
    app.state.settings = settings
    app.state.user_repository = repo
    app.state.user_service = UserService(repo)
    app.state.auth_service = AuthService(repo, settings)

    register_middleware(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    if use_database:
        @app.on_event("startup")
        async def app_init():
            try:
                app.state.mongo_client = await connect_database(settings)
                logger.info("MongoDB connected")
            except Exception:
                # 연결 실패 시에도 서버는 시작됩니다. 저장소가 필요한 요청은 500으로 응답합니다.
                logger.exception("MongoDB connection failed; store-backed endpoints will return 500")

        @app.on_event("shutdown")
        async def app_shutdown():
            client = getattr(app.state, "mongo_client", None)
            if client is not None:
                client.close()

    app.include_router(health_router)
    app.include_router(users_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    return app


def run() -> None:
    """`user-api` 콘솔 스크립트: uvicorn으로 HOST:PORT 에서 서버를 띄웁니다."""
    import uvicorn

    settings = get_settings()
    logger.info("Starting %s on %s:%s", settings.APP_NAME, settings.HOST, settings.PORT)
    uvicorn.run(create_app(settings), host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
