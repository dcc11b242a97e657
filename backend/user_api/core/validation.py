# 요청 검증 게이트
# - validate(schema)는 FastAPI 의존성을 만들어 돌려줍니다
# - 요청의 body / params / query 를 한 번에 스키마로 검증하고,
#   실패하면 핸들러에 도달하기 전에 400 ValidationError로 에러 싱크에 넘깁니다
# - 검증과 무관한 예외는 400으로 바꾸지 않고 그대로 전파합니다

import json
import logging
from typing import Any, Callable, Iterable, TypeVar

import pydantic
from fastapi import Request

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)

# pydantic 기본 메시지 중 클라이언트에게 보여줄 문구를 바꿀 것들
_MESSAGES = {
    "missing": "Required",
    "string_type": "Expected string",
    "model_type": "Expected object",
    "dict_type": "Expected object",
    "model_attributes_type": "Expected object",
    "json_invalid": "Malformed JSON body",
}


def format_validation_errors(errors: Iterable[dict]) -> str:
    """검증 에러 목록을 "<필드 경로>: <이유>, ..." 한 줄로 합칩니다.

    pydantic은 스키마 선언 순서대로 에러를 돌려주므로 결과 순서도 항상 같습니다.
    FastAPI 자체 RequestValidationError도 이 함수를 그대로 사용합니다.
    """
    parts = []
    for error in errors:
        path = ".".join(str(loc) for loc in error.get("loc", ()))
        message = _MESSAGES.get(error.get("type"), error.get("msg", "Invalid value"))
        parts.append(f"{path}: {message}" if path else message)
    return ", ".join(parts)


async def _read_body(request: Request) -> Any:
    raw = await request.body()
    if not raw.strip():
        # 본문이 비어 있으면 빈 객체로 취급 (필드별 "Required" 에러가 나도록)
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        raise ValidationError("body: Malformed JSON body")


def validate(schema: type[SchemaT]) -> Callable[[Request], Any]:
    """스키마 하나로 검증하는 의존성 팩토리

    사용 예시:
        @router.patch("/{id}")
        async def update(
            params: UserIdRequest = Depends(validate(UserIdRequest)),
            payload: UpdateUserRequest = Depends(validate(UpdateUserRequest)),
        ): ...

    여러 게이트를 나란히 선언하면 선언 순서대로 실행되고, 각각 독립적으로 요청을 중단시킵니다.
    """

    async def gate(request: Request) -> SchemaT:
        payload = {
            "params": dict(request.path_params),
            "query": dict(request.query_params),
        }
        # body를 선언하지 않은 스키마(params 전용 등)는 본문을 읽지도 파싱하지도 않습니다.
        if "body" in schema.model_fields:
            payload["body"] = await _read_body(request)
        try:
            return schema.model_validate(payload)
        except pydantic.ValidationError as e:
            message = format_validation_errors(e.errors())
            logger.info("Validation failed on %s %s: %s", request.method, request.url.path, message)
            raise ValidationError(message)

    gate.__name__ = f"validate_{schema.__name__}"
    return gate
