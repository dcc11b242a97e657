# 의존성 주입 헬퍼
# - create_app()에서 한 번 만든 인스턴스를 app.state에서 꺼내 핸들러에 넘깁니다
# - 테스트에서는 create_app(repository=...)으로 다른 구현을 주입할 수 있습니다

from fastapi import Request


def get_app_settings(request: Request):
    return request.app.state.settings


def get_user_repository(request: Request):
    return request.app.state.user_repository


def get_user_service(request: Request):
    return request.app.state.user_service


def get_auth_service(request: Request):
    return request.app.state.auth_service
