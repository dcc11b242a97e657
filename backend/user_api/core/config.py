# 설정 모듈
# - .env 값들을 한 곳에서 관리
# - 기본값을 제공하여 로컬 실행 편의성 확보

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# 프로젝트 루트 디렉토리 경로 찾기
# 주니어 개발자님께: 이 파일은 backend/user_api/core/config.py에 있으므로,
# 3단계 상위로 올라가면 프로젝트 루트가 됩니다.
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent
ENV_FILE_PATH = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    APP_NAME: str = "user-api"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    MONGODB_URI: str = "mongodb://localhost:27017/user_api"
    # 서버 선택 타임아웃(밀리초). 이 시간 안에 연결하지 못하면 에러가 발생합니다.
    MONGODB_TIMEOUT_MS: int = 5000

    JWT_SECRET_KEY: str = Field(..., description="JWT 토큰 서명에 사용되는 비밀키. 반드시 강력한 랜덤 문자열로 설정하세요.")
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    CORS_ALLOW_ORIGINS: str = "*"

    LOG_LEVEL: str = "INFO"
    # "text" 또는 "json"
    LOG_FORMAT: str = "text"

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE_PATH) if ENV_FILE_PATH.exists() else ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ALLOW_ORIGINS.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()


def reset_settings_cache() -> None:
    """환경변수를 바꾼 뒤 설정을 다시 읽어야 할 때(주로 테스트) 호출합니다."""
    get_settings.cache_clear()
