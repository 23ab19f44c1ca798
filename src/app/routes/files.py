"""
Files Routes: 카테고리 폴더 / 이미지 저장소 API.

- GET    /api/files?dir=<path>            → 목록 (categories, images?, pagination)
- POST   /api/files  action=createFolder   → 폴더 생성 (dir, folderName)
- POST   /api/files  action=upload         → 이미지 업로드 (dir, file)
- DELETE /api/files?dir=<path>&path=<name> → 폴더(재귀) 또는 파일 삭제
- GET    /files/<dir>/<name>              → 저장된 이미지
"""

from typing import Any

from fastapi import APIRouter, File, Form, Query, Request, UploadFile
from fastapi.responses import FileResponse

from src.app.services.file_store import FileStore, storage_io
from src.core.paths import resolve_within
from src.domain.constants import (
    ACTION_CREATE_FOLDER,
    ACTION_UPLOAD,
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    get_mime_type,
    is_image_filename,
)
from src.domain.errors import ErrorCodes, NotFoundError, ValidationError

# Routers
api_router = APIRouter()  # /api/files
static_router = APIRouter()  # /files (이미지 서빙)


def get_file_store(request: Request) -> FileStore:
    """Request에서 FileStore 가져오기."""
    return request.app.state.file_store


# =============================================================================
# API Routes
# =============================================================================

@api_router.get("")
async def list_files(
    request: Request,
    dir: str = Query(""),
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_PAGE_LIMIT,
) -> dict[str, Any]:
    """디렉토리 목록."""
    store = get_file_store(request)
    return store.list_directory(dir, page=page, limit=limit).to_dict()


@api_router.post("")
async def files_action(
    request: Request,
    action: str = Form(...),
    dir: str = Form(""),
    folderName: str | None = Form(None),  # noqa: N803 - 폼 필드명 유지
    file: UploadFile | None = File(None),
) -> dict[str, Any]:
    """
    폴더 생성 / 업로드.

    action:
    - createFolder: dir + folderName
    - upload: dir + file
    """
    store = get_file_store(request)

    if action == ACTION_CREATE_FOLDER:
        category = store.create_folder(dir, folderName or "")
        return {
            "success": True,
            "message": f"Folder '{category.name}' created",
            "category": category.to_dict(),
        }

    if action == ACTION_UPLOAD:
        if file is None or not file.filename:
            raise ValidationError(ErrorCodes.MISSING_FILE, "File is required")
        content = await file.read()
        image = store.save_upload(dir, file.filename, content)
        return {
            "success": True,
            "message": f"File '{image.name}' uploaded",
            "image": image.to_dict(),
        }

    raise ValidationError(
        ErrorCodes.INVALID_ACTION,
        f"Unknown action: {action!r}",
        action=action,
    )


@api_router.delete("")
async def delete_entry(
    request: Request,
    dir: str = Query(""),
    path: str = Query(""),
) -> dict[str, Any]:
    """폴더 또는 파일 삭제."""
    store = get_file_store(request)
    kind = store.delete(dir, path)
    return {
        "success": True,
        "type": kind,
        "message": f"{'Folder' if kind == 'folder' else 'File'} '{path}' deleted",
    }


# =============================================================================
# Static (images)
# =============================================================================

@static_router.get("/{file_path:path}")
async def serve_image(request: Request, file_path: str) -> FileResponse:
    """저장된 이미지 반환."""
    store = get_file_store(request)
    with storage_io("read", path=file_path):
        target = resolve_within(store.storage_root, file_path)

        # symlink 자체를 명시적으로 차단
        if not target.is_file() or target.is_symlink() or not is_image_filename(target.name):
            raise NotFoundError(
                ErrorCodes.ENTRY_NOT_FOUND,
                f"'{file_path}' not found",
                path=file_path,
            )

    return FileResponse(path=target, media_type=get_mime_type(target.name))
