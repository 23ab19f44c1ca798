"""
Mutation Coordinator: 폴더 생성, 업로드, 폴더 삭제, 이미지 삭제.

각 작업 = 요청 → 대기 → 결과(MutationResult).
다시 불러올지는 호출자(FileBrowser)가 result.reload로 결정한다.

실패 정책 (공통):
- BackendError → 서버 메시지를 toast
- UnexpectedError → 작업별 일반 메시지를 toast
- 재시도 없음, 모든 실패 후 화면은 조작 가능한 상태로 복귀

삭제 확인 비대칭:
- 폴더 삭제: 상태를 가진 대화상자 (확인 → 진행 중 → 완료)
- 이미지 삭제: 가벼운 예/아니오 확인 (영향 범위가 파일 1개)
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from src.browser.backend import FilesBackend, SelectedFile
from src.browser.notifications import ToastQueue
from src.core.paths import clean_dir
from src.domain.errors import BackendError, CatalogError, ErrorCodes, ValidationError
from src.domain.schemas import Category, Image

logger = logging.getLogger(__name__)

# 사용자 메시지
MSG_FOLDER_CREATED = "폴더가 생성되었습니다"
MSG_FOLDER_CREATE_FAILED = "폴더 생성에 실패했습니다"
MSG_FILE_UPLOADED = "파일이 업로드되었습니다"
MSG_FILE_UPLOAD_FAILED = "파일 업로드에 실패했습니다"
MSG_FOLDER_DELETED = "폴더가 삭제되었습니다!"
MSG_FOLDER_DELETE_FAILED = "폴더 삭제에 실패했습니다"
MSG_IMAGE_DELETED = "이미지가 삭제되었습니다!"
MSG_IMAGE_DELETE_FAILED = "이미지 삭제에 실패했습니다"


class MutationKind(str, Enum):
    CREATE_FOLDER = "create_folder"
    UPLOAD = "upload"
    DELETE_FOLDER = "delete_folder"
    DELETE_IMAGE = "delete_image"


@dataclass
class MutationResult:
    """작업 결과. reload=True면 목록을 통째로 다시 불러온다."""
    kind: MutationKind
    ok: bool
    message: str
    reload: bool = False


# =============================================================================
# Dialog / Picker State
# =============================================================================


@dataclass
class CreateFolderDialog:
    """폴더 생성 대화상자."""
    open: bool = False
    folder_name: str = ""
    error: str | None = None

    def show(self) -> None:
        self.open = True
        self.error = None

    def cancel(self) -> None:
        self.open = False
        self.error = None

    @property
    def can_submit(self) -> bool:
        return bool(self.folder_name.strip())


class DeletePhase(str, Enum):
    """폴더 삭제 대화상자 단계."""
    CLOSED = "closed"
    CONFIRM = "confirm"
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"


@dataclass
class DeleteFolderDialog:
    """
    폴더 삭제 대화상자.

    CLOSED → request() → CONFIRM → IN_PROGRESS → SUCCESS (사용자가 닫음)
                                         └→ 실패 시 CLOSED
    """
    phase: DeletePhase = DeletePhase.CLOSED
    selected: Category | None = None

    @property
    def is_open(self) -> bool:
        return self.phase != DeletePhase.CLOSED

    def request(self, category: Category) -> None:
        self.selected = category
        self.phase = DeletePhase.CONFIRM

    def dismiss(self) -> None:
        self.phase = DeletePhase.CLOSED
        self.selected = None


@dataclass
class FilePicker:
    """파일 선택기. 여러 개를 골라도 첫 번째만 사용한다."""
    files: list[SelectedFile] = field(default_factory=list)

    def select(self, files: list[SelectedFile]) -> None:
        self.files = list(files)

    def clear(self) -> None:
        self.files = []


def _failure_text(error: CatalogError, fallback: str) -> str:
    if isinstance(error, BackendError) and error.message:
        return error.message
    return fallback


# =============================================================================
# Coordinator
# =============================================================================


class MutationCoordinator:
    """
    백엔드 변경 작업 순서 조정.

    Args:
        backend: FilesBackend 구현
        notifier: toast 큐
        confirm: 이미지 삭제 확인 콜백 (메시지 → 예/아니오)
    """

    def __init__(
        self,
        backend: FilesBackend,
        notifier: ToastQueue,
        confirm: Callable[[str], bool] | None = None,
    ):
        self.backend = backend
        self.notifier = notifier
        self.confirm = confirm or (lambda message: True)

    async def create_folder(
        self, current_dir: str, dialog: CreateFolderDialog
    ) -> MutationResult:
        """
        폴더 생성.

        성공: 대화상자 닫기 + 입력 초기화 + reload
        실패: 서버 메시지 표시, 대화상자 유지

        Raises:
            ValidationError: EMPTY_FOLDER_NAME (요청 전에 검사)
        """
        name = dialog.folder_name.strip()
        if not name:
            raise ValidationError(
                ErrorCodes.EMPTY_FOLDER_NAME,
                "Folder name cannot be empty",
            )

        try:
            await self.backend.create_folder(clean_dir(current_dir), name)
        except CatalogError as e:
            text = _failure_text(e, MSG_FOLDER_CREATE_FAILED)
            logger.warning(f"Create folder {name!r} failed: {e}")
            self.notifier.error(text)
            dialog.error = text
            return MutationResult(MutationKind.CREATE_FOLDER, ok=False, message=text)

        self.notifier.success(MSG_FOLDER_CREATED)
        dialog.open = False
        dialog.folder_name = ""
        dialog.error = None
        return MutationResult(
            MutationKind.CREATE_FOLDER, ok=True, message=MSG_FOLDER_CREATED, reload=True
        )

    async def upload_file(
        self, current_dir: str, picker: FilePicker
    ) -> MutationResult | None:
        """
        파일 업로드 (첫 번째 파일만).

        선택된 파일이 없으면 요청하지 않는다 (None).
        성공/실패와 관계없이 선택기를 비운다 (같은 파일 재선택 가능).
        """
        if not picker.files:
            return None

        file = picker.files[0]
        try:
            await self.backend.upload(clean_dir(current_dir), file)
        except CatalogError as e:
            text = _failure_text(e, MSG_FILE_UPLOAD_FAILED)
            logger.warning(f"Upload {file.name!r} failed: {e}")
            self.notifier.error(text)
            return MutationResult(MutationKind.UPLOAD, ok=False, message=text)
        finally:
            picker.clear()

        self.notifier.success(MSG_FILE_UPLOADED)
        return MutationResult(
            MutationKind.UPLOAD, ok=True, message=MSG_FILE_UPLOADED, reload=True
        )

    async def delete_folder(
        self, current_dir: str, dialog: DeleteFolderDialog
    ) -> MutationResult | None:
        """
        확인된 폴더 삭제.

        CONFIRM 단계가 아니면 아무것도 하지 않는다 (None).
        성공: SUCCESS 단계 (자동으로 닫지 않음) + reload
        실패: 대화상자 즉시 닫기 + toast, reload 없음
        """
        if dialog.phase != DeletePhase.CONFIRM or dialog.selected is None:
            return None

        category = dialog.selected
        dialog.phase = DeletePhase.IN_PROGRESS
        try:
            await self.backend.delete(clean_dir(current_dir), category.name)
        except CatalogError as e:
            text = _failure_text(e, MSG_FOLDER_DELETE_FAILED)
            logger.warning(f"Delete folder {category.name!r} failed: {e}")
            self.notifier.error(text)
            dialog.dismiss()
            return MutationResult(MutationKind.DELETE_FOLDER, ok=False, message=text)

        dialog.phase = DeletePhase.SUCCESS
        self.notifier.success(MSG_FOLDER_DELETED)
        return MutationResult(
            MutationKind.DELETE_FOLDER, ok=True, message=MSG_FOLDER_DELETED, reload=True
        )

    async def delete_image(
        self, current_dir: str, image: Image
    ) -> MutationResult | None:
        """
        이미지 삭제.

        확인 거절 시 요청하지 않는다 (None).
        """
        if not self.confirm(f'이미지 "{image.name}"을(를) 삭제하시겠습니까?'):
            return None

        try:
            await self.backend.delete(clean_dir(current_dir), image.name)
        except CatalogError as e:
            text = _failure_text(e, MSG_IMAGE_DELETE_FAILED)
            logger.warning(f"Delete image {image.name!r} failed: {e}")
            self.notifier.error(text)
            return MutationResult(MutationKind.DELETE_IMAGE, ok=False, message=text)

        self.notifier.success(MSG_IMAGE_DELETED)
        return MutationResult(
            MutationKind.DELETE_IMAGE, ok=True, message=MSG_IMAGE_DELETED, reload=True
        )
