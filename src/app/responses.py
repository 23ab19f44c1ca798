"""
API 에러 응답.

모든 API 에러는 같은 형태:
    {"error": ..., "message": ..., "timestamp": ...}
"""

import logging
from datetime import UTC, datetime

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.domain.errors import CatalogError, ErrorCodes

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def error_response(error: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "message": message,
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )


def internal_error_response(error: Exception, title: str = INTERNAL_ERROR) -> JSONResponse:
    """예상하지 못한 실패 → 500."""
    return error_response(title, str(error) or "Unknown error", 500)


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """CatalogError → 에러 코드별 HTTP 상태."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    return error_response(exc.code, exc.message, exc.status_code)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """처리되지 않은 예외 → 500 (공통 에러 형태 유지)."""
    logger.error(f"{request.method} {request.url.path} crashed: {exc}", exc_info=exc)
    return internal_error_response(exc)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """필수 파라미터 누락 / 형식 오류 → 400."""
    fields = ", ".join(".".join(str(p) for p in err["loc"][1:]) for err in exc.errors())
    logger.warning(f"{request.method} {request.url.path} invalid request: {fields}")
    return error_response(
        ErrorCodes.MISSING_REQUIRED_FIELD,
        f"Invalid or missing fields: {fields}" if fields else "Invalid request",
        400,
    )
