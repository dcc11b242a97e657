# 커스텀 예외 클래스 정의
# 주니어 개발자님께: 표준 예외(Exception)를 상속받아 프로젝트에 특화된 예외를 만듭니다.
# AppError는 "예상된" 실패(잘못된 입력, 없는 사용자 등)를 나타내며
# HTTP 상태 코드를 함께 들고 다닙니다. 그 외의 예외는 모두 예상치 못한 서버 오류로 취급합니다.


class AppError(Exception):
    """운영 에러(Operational Error)의 기본 클래스

    주니어 개발자님께: 에러가 감지된 지점에서 메시지와 상태 코드를 모두 채워서 만들고,
    에러 싱크(core/errors.py)에서 단 한 번 응답으로 변환됩니다.

    Attributes:
        message: 클라이언트에게 그대로 노출되는 메시지
        status_code: HTTP 상태 코드
        status: 4xx이면 "fail", 그 외에는 "error"
        is_operational: 항상 True (예상치 못한 오류와 구분하기 위함)

    생성 후에는 속성을 바꿀 수 없습니다. 단, "__"로 시작하는 속성(__traceback__, __cause__,
    __notes__ 등)은 파이썬 런타임이 raise 과정에서 갱신하므로 예외로 허용합니다.
    """

    default_status_code = 500

    def __init__(self, message: str, status_code: int = None):
        status_code = status_code or self.default_status_code
        object.__setattr__(self, "message", message)
        object.__setattr__(self, "status_code", status_code)
        object.__setattr__(self, "status", "fail" if 400 <= status_code < 500 else "error")
        object.__setattr__(self, "is_operational", True)
        super().__init__(message)

    def __setattr__(self, name, value):
        if name.startswith("__"):
            object.__setattr__(self, name, value)
            return
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={self.message!r}, status_code={self.status_code})"

    def to_response(self) -> dict:
        return {"status": self.status, "message": self.message}


class ValidationError(AppError):
    """요청 형식이 잘못된 경우 (400)"""

    default_status_code = 400


class AuthError(AppError):
    """잘못된 로그인 정보 또는 유효하지 않은/만료된/누락된 토큰 (401)"""

    default_status_code = 401


class NotFoundError(AppError):
    """요청한 리소스가 존재하지 않는 경우 (404)"""

    default_status_code = 404


class ConflictError(AppError):
    """이메일 중복 등 유니크 제약 위반 (409)"""

    default_status_code = 409
