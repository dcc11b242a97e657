# 에러 싱크 (전역 예외 핸들러)
# - AppError → 해당 상태 코드 + {status, message}
# - RequestValidationError → 400, 검증 게이트와 같은 포맷
# - Starlette HTTPException (없는 경로 404, 405 등) → {status: "fail", message}
# - 그 외 모든 예외 → 서버 로그에만 상세 내용, 클라이언트에는 일반적인 500 메시지

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .exceptions import AppError
from .validation import format_validation_errors

logger = logging.getLogger(__name__)

GENERIC_MESSAGE = "Something went wrong"


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    level = logging.WARNING if exc.status_code >= 500 else logging.INFO
    logger.log(level, "%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return await app_error_handler(request, AppError(format_validation_errors(exc.errors()), 400))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    body = {
        "status": "fail" if 400 <= exc.status_code < 500 else "error",
        "message": str(exc.detail),
    }
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # 스택 트레이스는 서버 로그에만 남깁니다.
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"status": "error", "message": GENERIC_MESSAGE},
    )
