"""
Error definitions for the catalog admin.

규칙:
- 조용한 실패 금지 → CatalogError 계열로 명시적 실패
- ValidationError → 네트워크 요청 전에 로컬에서 처리
- BackendError → 서버 메시지를 그대로 사용자에게 (toast)
- UnexpectedError → 네트워크/JSON 파싱 실패, 일반 메시지
- 자동 재시도 없음
"""

from typing import Any


class CatalogError(Exception):
    """
    카탈로그 관리 에러의 기본 클래스.

    Usage:
        raise NotFoundError("DIRECTORY_NOT_FOUND", "Directory 'x' not found", dir="x")
    """

    status_code = 500

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class ValidationError(CatalogError):
    """입력 검증 실패 (빈 폴더 이름, 주문 ID 누락 등)."""

    status_code = 400


class NotFoundError(CatalogError):
    """대상 폴더/파일/주문 없음."""

    status_code = 404


class ConflictError(CatalogError):
    """이미 존재하는 폴더/파일."""

    status_code = 409


class StorageError(CatalogError):
    """저장소 I/O 실패 (권한, 디스크 등)."""

    status_code = 500

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.STORAGE_ERROR, message, **context)


class UnauthorizedError(CatalogError):
    """관리 화면 세션 없음 / 만료."""

    status_code = 401

    def __init__(self, message: str = "Login required", **context: Any) -> None:
        super().__init__(ErrorCodes.UNAUTHORIZED, message, **context)


class BackendError(CatalogError):
    """
    백엔드가 non-2xx로 응답한 경우 (클라이언트 측).

    message는 응답 본문의 message 또는 error 필드.
    """

    def __init__(self, message: str, status: int, **context: Any) -> None:
        super().__init__(ErrorCodes.BACKEND_ERROR, message, status=status, **context)
        self.status = status


class UnexpectedError(CatalogError):
    """네트워크 실패, JSON 파싱 실패 등 (클라이언트 측)."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.UNEXPECTED_ERROR, message, **context)


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Validation ===
    EMPTY_FOLDER_NAME = "EMPTY_FOLDER_NAME"
    INVALID_NAME = "INVALID_NAME"
    INVALID_PATH = "INVALID_PATH"
    INVALID_ACTION = "INVALID_ACTION"
    UNSUPPORTED_FILE_TYPE = "UNSUPPORTED_FILE_TYPE"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    MISSING_FILE = "MISSING_FILE"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_DATE = "INVALID_DATE"

    # === Storage ===
    DIRECTORY_NOT_FOUND = "DIRECTORY_NOT_FOUND"
    ENTRY_NOT_FOUND = "ENTRY_NOT_FOUND"
    FOLDER_EXISTS = "FOLDER_EXISTS"
    FILE_EXISTS = "FILE_EXISTS"
    SYMLINK_NOT_ALLOWED = "SYMLINK_NOT_ALLOWED"
    STORAGE_ERROR = "STORAGE_ERROR"

    # === Orders ===
    ORDER_NOT_FOUND = "ORDER_NOT_FOUND"
    ORDERS_LOCK_TIMEOUT = "ORDERS_LOCK_TIMEOUT"
    ORDERS_FILE_CORRUPT = "ORDERS_FILE_CORRUPT"

    # === Client ===
    BACKEND_ERROR = "BACKEND_ERROR"
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
