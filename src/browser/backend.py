"""
Files Backend 클라이언트.

구현:
- HttpFilesBackend: httpx로 /api/files 호출 (CLI, 원격 서버)
- LocalFilesBackend: 같은 프로세스의 FileStore 직접 호출 (관리 화면)

공통 실패 정책:
- non-2xx → 본문 JSON의 message 또는 error → BackendError
- JSON 파싱 실패, 네트워크 실패 → UnexpectedError (일반 메시지)
- 재시도 없음
"""

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from src.app.services.file_store import FileStore
from src.domain.constants import (
    ACTION_CREATE_FOLDER,
    ACTION_UPLOAD,
    FILES_API_PATH,
    get_mime_type,
)
from src.domain.errors import BackendError, CatalogError, UnexpectedError
from src.domain.schemas import FilesResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass
class SelectedFile:
    """파일 선택기에서 고른 파일 1개."""
    name: str
    content: bytes
    content_type: str = ""

    def __post_init__(self) -> None:
        if not self.content_type:
            self.content_type = get_mime_type(self.name)


class FilesBackend(Protocol):
    """파일 저장소 계약. dir은 항상 "files/"가 제거된 경로."""

    async def list_files(self, dir: str) -> FilesResponse: ...

    async def create_folder(self, dir: str, folder_name: str) -> None: ...

    async def upload(self, dir: str, file: SelectedFile) -> None: ...

    async def delete(self, dir: str, path: str) -> None: ...


# =============================================================================
# HTTP
# =============================================================================


class HttpFilesBackend:
    """
    /api/files HTTP 클라이언트.

    사용법:
        async with HttpFilesBackend("http://127.0.0.1:8000") as backend:
            response = await backend.list_files("")
    """

    def __init__(
        self,
        base_url: str = "",
        client: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> "HttpFilesBackend":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def list_files(self, dir: str) -> FilesResponse:
        response = await self._send("GET", FILES_API_PATH, params={"dir": dir})
        _raise_for_error(response, fallback=f"HTTP {response.status_code}")
        return FilesResponse.from_dict(_json_body(response))

    async def create_folder(self, dir: str, folder_name: str) -> None:
        response = await self._send(
            "POST",
            FILES_API_PATH,
            files={
                "action": (None, ACTION_CREATE_FOLDER),
                "dir": (None, dir),
                "folderName": (None, folder_name),
            },
        )
        _raise_for_error(response, fallback="Failed to create folder")

    async def upload(self, dir: str, file: SelectedFile) -> None:
        response = await self._send(
            "POST",
            FILES_API_PATH,
            data={"action": ACTION_UPLOAD, "dir": dir},
            files={"file": (file.name, file.content, file.content_type)},
        )
        _raise_for_error(response, fallback="Failed to upload file")

    async def delete(self, dir: str, path: str) -> None:
        response = await self._send(
            "DELETE", FILES_API_PATH, params={"dir": dir, "path": path}
        )
        _raise_for_error(response, fallback="Failed to delete")

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {url} failed: {e}")
            raise UnexpectedError("Network error", method=method, url=url) from e


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise UnexpectedError(
            "Invalid JSON response", status=response.status_code
        ) from e


def _raise_for_error(response: httpx.Response, fallback: str) -> None:
    """non-2xx → BackendError (본문의 message 또는 error)."""
    if response.is_success:
        return

    data = _json_body(response)
    message = None
    if isinstance(data, dict):
        message = data.get("message") or data.get("error")

    logger.warning(f"Backend responded {response.status_code}: {message or fallback}")
    raise BackendError(str(message or fallback), status=response.status_code)


# =============================================================================
# Local (in-process)
# =============================================================================


class LocalFilesBackend:
    """
    FileStore 직접 호출.

    저장소 에러는 HTTP 경로와 같은 BackendError로 바꿔서 전달한다.
    """

    def __init__(self, store: FileStore):
        self.store = store

    async def list_files(self, dir: str) -> FilesResponse:
        try:
            return self.store.list_directory(dir)
        except CatalogError as e:
            raise BackendError(e.message, status=e.status_code) from e

    async def create_folder(self, dir: str, folder_name: str) -> None:
        try:
            self.store.create_folder(dir, folder_name)
        except CatalogError as e:
            raise BackendError(e.message, status=e.status_code) from e

    async def upload(self, dir: str, file: SelectedFile) -> None:
        try:
            self.store.save_upload(dir, file.name, file.content)
        except CatalogError as e:
            raise BackendError(e.message, status=e.status_code) from e

    async def delete(self, dir: str, path: str) -> None:
        try:
            self.store.delete(dir, path)
        except CatalogError as e:
            raise BackendError(e.message, status=e.status_code) from e
