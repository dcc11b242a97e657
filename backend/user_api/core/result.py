# 서비스 결과 타입
# - 도메인 서비스는 예외를 던지는 대신 Ok / Err 중 하나를 반환합니다.
# - 요청 핸들러 경계에서 unwrap()이 단 한 번 Err를 에러 싱크로 넘깁니다.

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .exceptions import AppError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    error: AppError

    @property
    def ok(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def unwrap(result: "Result[T]") -> T:
    """성공 값이면 꺼내서 반환하고, 실패면 담겨 있던 AppError를 그대로 raise 합니다."""
    if isinstance(result, Err):
        raise result.error
    return result.value
