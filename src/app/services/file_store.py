"""
파일 저장소: 카테고리 폴더 + 이미지 CRUD (/api/files 백엔드).

구조:
files/                      # storage root
├── <category>/             # 카테고리 폴더 (하위 폴더 또는 이미지)
│   ├── <sub-category>/
│   └── <CODE>.jpg          # 이미지 (code = 파일명 stem)
└── ...

규칙:
- 폴더 이름은 상위 디렉토리 안에서 유일 (중복 생성 시 에러)
- 업로드 덮어쓰기 금지 (fail-fast)
- 삭제: 폴더 → 재귀 삭제, 파일 → unlink
- 저장소 밖 경로, symlink 거부
- 파일시스템 OSError → StorageError (이름이 너무 길면 ValidationError)
"""

import errno
import logging
import math
import shutil
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from urllib.parse import quote

from src.core.ids import slugify
from src.core.paths import join_dir, normalize_dir, resolve_within, validate_entry_name
from src.domain.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    FILES_STATIC_PATH,
    IMAGE_ALLOWED_EXTENSIONS,
    MAX_PAGE_LIMIT,
    UPLOAD_MAX_SIZE_MB,
    is_image_filename,
)
from src.domain.errors import (
    ConflictError,
    ErrorCodes,
    NotFoundError,
    StorageError,
    ValidationError,
)
from src.domain.schemas import Category, FilesResponse, Image, Pagination

logger = logging.getLogger(__name__)


@contextmanager
def storage_io(action: str, **context: str) -> Generator[None, None, None]:
    """
    파일시스템 호출을 에러 체계 안으로.

    Raises:
        ValidationError: INVALID_NAME (ENAMETOOLONG)
        StorageError: 그 밖의 OSError
    """
    try:
        yield
    except OSError as e:
        if e.errno == errno.ENAMETOOLONG:
            raise ValidationError(
                ErrorCodes.INVALID_NAME,
                "Name is too long for the file system",
                **context,
            ) from e
        logger.error(f"Storage {action} failed {context}: {e}", exc_info=True)
        raise StorageError(
            f"Storage {action} failed: {e.strerror or e}", **context
        ) from e


class FileStore:
    """
    파일시스템 기반 카탈로그 저장소.

    categories / images 상호 배타는 저장소가 강제하지 않는다.
    두 가지가 섞인 폴더도 그대로 나열하며, 화면 쪽에서 categories를 우선한다.
    """

    def __init__(
        self,
        storage_root: Path,
        base_path: str = "",
        max_upload_mb: int = UPLOAD_MAX_SIZE_MB,
    ):
        """
        Args:
            storage_root: files/ 루트 경로
            base_path: 이미지 URL 앞에 붙는 배포 경로 (예: /catalogointerativo)
            max_upload_mb: 업로드 최대 크기 (MB)
        """
        self.storage_root = storage_root
        self.base_path = base_path.rstrip("/")
        self.max_upload_bytes = max_upload_mb * 1024 * 1024

    def ensure_root(self) -> None:
        """storage root가 없으면 생성."""
        self.storage_root.mkdir(parents=True, exist_ok=True)

    # =========================================================================
    # Read
    # =========================================================================

    def list_directory(
        self,
        dir: str = "",
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_LIMIT,
    ) -> FilesResponse:
        """
        디렉토리 목록.

        - 하위 폴더 → categories (이름순, 대소문자 무시, 페이지 단위)
        - 이 폴더의 이미지 파일 → images (없으면 None)

        Args:
            dir: Current Directory ("" = 루트)
            page: 1부터 시작
            limit: 페이지 크기 (1..500)

        Raises:
            NotFoundError: DIRECTORY_NOT_FOUND
        """
        dir = normalize_dir(dir)
        page = max(page, 1)
        limit = min(max(limit, 1), MAX_PAGE_LIMIT)

        with storage_io("list", dir=dir):
            target = self._existing_dir(dir)
            folders = self._sorted_folders(target)

            total = len(folders)
            offset = (page - 1) * limit
            categories = [
                Category(
                    id=str(offset + index + 1),
                    name=folder.name,
                    slug=slugify(folder.name),
                    images=self._list_images(folder, join_dir(dir, folder.name)),
                )
                for index, folder in enumerate(folders[offset:offset + limit])
            ]

            images = self._list_images(target, dir)

        return FilesResponse(
            categories=categories,
            images=images or None,
            pagination=Pagination(
                total=total,
                page=page,
                limit=limit,
                total_pages=max(1, math.ceil(total / limit)),
            ),
        )

    # =========================================================================
    # Create
    # =========================================================================

    def create_folder(self, dir: str, folder_name: str) -> Category:
        """
        새 카테고리 폴더 생성.

        id는 생성 직후 목록에서의 순번 (list_directory와 같은 규칙).

        Raises:
            ValidationError: INVALID_NAME, INVALID_PATH
            NotFoundError: DIRECTORY_NOT_FOUND (상위 폴더 없음)
            ConflictError: FOLDER_EXISTS
            StorageError: STORAGE_ERROR
        """
        dir = normalize_dir(dir)
        name = validate_entry_name(folder_name)

        with storage_io("create folder", dir=dir, name=name):
            parent = self._existing_dir(dir)

            target = resolve_within(self.storage_root, dir, name)
            if target.exists():
                raise ConflictError(
                    ErrorCodes.FOLDER_EXISTS,
                    f"Folder '{name}' already exists",
                    dir=dir,
                    name=name,
                )

            (parent / name).mkdir()
            logger.info(f"Folder created: {join_dir(dir, name)!r}")

            position = [p.name for p in self._sorted_folders(parent)].index(name) + 1

        return Category(id=str(position), name=name, slug=slugify(name))

    def save_upload(self, dir: str, filename: str, content: bytes) -> Image:
        """
        이미지 업로드 저장.

        클라이언트 경로는 버리고 파일명만 사용한다.

        Raises:
            ValidationError: INVALID_NAME, UNSUPPORTED_FILE_TYPE, FILE_TOO_LARGE
            NotFoundError: DIRECTORY_NOT_FOUND
            ConflictError: FILE_EXISTS
            StorageError: STORAGE_ERROR
        """
        dir = normalize_dir(dir)
        name = validate_entry_name(Path(filename.replace("\\", "/")).name)

        if not is_image_filename(name):
            raise ValidationError(
                ErrorCodes.UNSUPPORTED_FILE_TYPE,
                f"Only image files are allowed: {', '.join(IMAGE_ALLOWED_EXTENSIONS)}",
                filename=name,
            )

        if len(content) > self.max_upload_bytes:
            raise ValidationError(
                ErrorCodes.FILE_TOO_LARGE,
                f"File exceeds {self.max_upload_bytes // (1024 * 1024)} MB",
                filename=name,
                size=len(content),
            )

        with storage_io("upload", dir=dir, filename=name):
            self._existing_dir(dir)
            target = resolve_within(self.storage_root, dir, name)
            if target.exists():
                raise ConflictError(
                    ErrorCodes.FILE_EXISTS,
                    f"File '{name}' already exists",
                    dir=dir,
                    filename=name,
                )

            target.write_bytes(content)

        logger.info(f"File uploaded: {join_dir(dir, name)!r} ({len(content)} bytes)")
        return self._image_for(target, dir)

    # =========================================================================
    # Delete
    # =========================================================================

    def delete(self, dir: str, path: str) -> str:
        """
        폴더 또는 이미지 삭제.

        path가 폴더면 재귀 삭제, 파일이면 unlink.

        Returns:
            "folder" 또는 "file"

        Raises:
            ValidationError: INVALID_PATH, SYMLINK_NOT_ALLOWED
            NotFoundError: ENTRY_NOT_FOUND
            StorageError: STORAGE_ERROR
        """
        dir = normalize_dir(dir)
        if not normalize_dir(path):
            raise ValidationError(
                ErrorCodes.INVALID_PATH,
                "Path is required",
                dir=dir,
            )

        with storage_io("delete", dir=dir, path=path):
            target = resolve_within(self.storage_root, dir, path)

            if target.is_symlink():
                raise ValidationError(
                    ErrorCodes.SYMLINK_NOT_ALLOWED,
                    "Symbolic links are not allowed",
                    path=path,
                )

            if not target.exists():
                raise NotFoundError(
                    ErrorCodes.ENTRY_NOT_FOUND,
                    f"'{path}' not found",
                    dir=dir,
                    path=path,
                )

            if target.is_dir():
                shutil.rmtree(target)
                kind = "folder"
            else:
                target.unlink()
                kind = "file"

        logger.info(f"Deleted {kind}: {join_dir(dir, path)!r}")
        return kind

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _existing_dir(self, dir: str) -> Path:
        """디렉토리 경로 반환 (존재 확인)."""
        target = resolve_within(self.storage_root, dir)
        if not target.is_dir():
            raise NotFoundError(
                ErrorCodes.DIRECTORY_NOT_FOUND,
                f"Directory '{dir}' not found",
                dir=dir,
            )
        return target

    @staticmethod
    def _is_visible_dir(path: Path) -> bool:
        return path.is_dir() and not path.is_symlink() and not path.name.startswith(".")

    def _sorted_folders(self, folder: Path) -> list[Path]:
        """하위 폴더 (이름순, 대소문자 무시)."""
        return sorted(
            (p for p in folder.iterdir() if self._is_visible_dir(p)),
            key=lambda p: p.name.casefold(),
        )

    def _list_images(self, folder: Path, dir: str) -> list[Image]:
        """폴더 바로 아래의 이미지 파일 (이름순)."""
        files = sorted(
            (
                p for p in folder.iterdir()
                if p.is_file()
                and not p.is_symlink()
                and not p.name.startswith(".")
                and is_image_filename(p.name)
            ),
            key=lambda p: p.name.casefold(),
        )
        return [self._image_for(p, dir) for p in files]

    def _image_for(self, path: Path, dir: str) -> Image:
        relative = join_dir(dir, path.name)
        category = dir.rsplit("/", 1)[-1] if dir else ""
        return Image(
            name=path.name,
            code=path.stem,
            url=f"{self.base_path}{FILES_STATIC_PATH}/{quote(relative)}",
            category=category,
        )
