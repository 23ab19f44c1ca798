"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from src.app.config import Settings, load_settings
from src.app.responses import (
    catalog_error_handler,
    request_validation_handler,
    unhandled_error_handler,
)

# Routes
from src.app.routes import admin, files, orders
from src.app.services import FileStore, OrderStore
from src.browser.session import SessionGate, SessionRegistry
from src.domain.constants import ADMIN_FILES_PATH, FILES_API_PATH, FILES_STATIC_PATH, ORDERS_API_PATH
from src.domain.errors import CatalogError, UnauthorizedError

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


def init_state(app: FastAPI, settings: Settings) -> None:
    """설정으로 app.state 리소스 초기화 (테스트에서도 사용)."""
    file_store = FileStore(
        settings.storage_root,
        base_path=settings.base_path,
        max_upload_mb=settings.max_upload_mb,
    )
    file_store.ensure_root()

    app.state.settings = settings
    app.state.file_store = file_store
    app.state.order_store = OrderStore(settings.orders_path)
    app.state.sessions = SessionRegistry()
    app.state.session_gate = SessionGate(settings.admin_password)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 저장소 초기화
    종료 시: 세션 정리 (메모리에만 존재)
    """
    # Startup
    if not hasattr(app.state, "settings"):
        init_state(app, load_settings())
    settings: Settings = app.state.settings
    logger.info(
        f"Catalog admin started (storage={settings.storage_root}, orders={settings.orders_path})"
    )

    yield

    # Shutdown
    logger.info(f"Discarding {len(app.state.sessions)} admin session(s)")


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Catalog Admin",
    description="카탈로그 이미지 파일 관리 + 주문 API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_exception_handler(CatalogError, catalog_error_handler)  # type: ignore[arg-type]
app.add_exception_handler(UnauthorizedError, admin.unauthorized_handler)  # type: ignore[arg-type]
app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
app.add_exception_handler(Exception, unhandled_error_handler)


# =============================================================================
# Routes
# =============================================================================

# 페이지 라우트 (HTML)
app.include_router(admin.router, prefix=ADMIN_FILES_PATH, tags=["Admin"])
app.include_router(files.static_router, prefix=FILES_STATIC_PATH, tags=["Files"])

# API 라우트
app.include_router(files.api_router, prefix=FILES_API_PATH, tags=["Files API"])
app.include_router(orders.api_router, prefix=ORDERS_API_PATH, tags=["Orders API"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/")
async def root() -> dict[str, Any]:
    """엔드포인트 안내."""
    return {
        "message": "Catalog Admin",
        "endpoints": {
            "admin": ADMIN_FILES_PATH,
            "files": FILES_API_PATH,
            "orders": ORDERS_API_PATH,
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
