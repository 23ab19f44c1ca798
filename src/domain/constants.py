"""
Domain Constants: 카탈로그 관리 전역 상수.

경로 규칙, API 경로, 업로드 정책 등 시스템 전반에서 사용되는 값들.
"""

import os

# =============================================================================
# Directory Paths (디렉토리 경로 규칙)
# =============================================================================
# Current Directory: "/" 구분 경로, "" = 루트
# 백엔드 호출 전 항상 선행 "files/" 세그먼트 제거

FILES_PREFIX = "files/"
ROOT_DIR = ""
PATH_SEPARATOR = "/"
ROOT_BREADCRUMB_NAME = "Files"

# =============================================================================
# API Paths
# =============================================================================

FILES_API_PATH = "/api/files"
ORDERS_API_PATH = "/api/orders"
FILES_STATIC_PATH = "/files"
ADMIN_FILES_PATH = "/admin/files"

# POST /api/files action 값
ACTION_CREATE_FOLDER = "createFolder"
ACTION_UPLOAD = "upload"

# =============================================================================
# Listing (목록 정책)
# =============================================================================

DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 50
MAX_PAGE_LIMIT = 500

# =============================================================================
# Upload Policy (업로드 정책)
# =============================================================================

IMAGE_ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")
UPLOAD_MAX_SIZE_MB = 10

# 폴더/파일 이름 금지 문자
FORBIDDEN_NAME_CHARS = set('/\\:*?"<>|')
RESERVED_NAMES = {".", ".."}
NAME_MAX_LENGTH = 120
# 파일시스템 이름 한도 (UTF-8 바이트)
NAME_MAX_BYTES = 255

# =============================================================================
# Defaults (환경 변수 미설정 시)
# =============================================================================

DEFAULT_BASE_PATH = "/catalogointerativo"
DEFAULT_ADMIN_PASSWORD = "admin123"
DEFAULT_STORAGE_ROOT = "files"
DEFAULT_ORDERS_PATH = "data/orders.json"

# =============================================================================
# MIME Types
# =============================================================================

MIME_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".json": "application/json",
}


def get_mime_type(filename: str) -> str:
    """
    파일명에서 MIME 타입 추출.

    Args:
        filename: 파일명 (확장자 포함)

    Returns:
        MIME 타입 문자열 (알 수 없으면 octet-stream)
    """
    ext = os.path.splitext(filename)[1].lower()
    return MIME_TYPES.get(ext, "application/octet-stream")


def is_image_filename(filename: str) -> bool:
    """허용된 이미지 확장자인지."""
    return os.path.splitext(filename)[1].lower() in IMAGE_ALLOWED_EXTENSIONS
