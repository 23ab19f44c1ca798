"""
FileBrowser: 파일 관리 화면 상태 + 흐름.

DirectoryState, Listing View Model, MutationCoordinator를 묶는다.

동시성:
- 단일 이벤트 루프, 모든 백엔드 호출은 독립적인 왕복
- load()마다 generation 토큰 증가, 늦게 도착한 이전 응답은 버림
- loading은 화면 전체가 공유하는 하나의 플래그
- 변경 작업 후 목록은 통째로 다시 불러옴 (부분 갱신 없음)
"""

import logging
from collections.abc import Callable

from src.browser.backend import FilesBackend, SelectedFile
from src.browser.listing import ListingView, build_listing
from src.browser.mutations import (
    CreateFolderDialog,
    DeleteFolderDialog,
    FilePicker,
    MutationCoordinator,
    MutationResult,
)
from src.browser.navigation import DirectoryState
from src.browser.notifications import ToastQueue
from src.core.paths import clean_dir
from src.domain.errors import BackendError, CatalogError, ValidationError
from src.domain.schemas import Breadcrumb, Category, FilesResponse, Image

logger = logging.getLogger(__name__)

MSG_LOAD_FAILED = "파일 목록을 불러오지 못했습니다"


class FileBrowser:
    """
    파일 관리 화면 컨트롤러.

    사용법:
        browser = FileBrowser(backend, current_directory="shoes")
        await browser.load()
        view = browser.listing()
    """

    def __init__(
        self,
        backend: FilesBackend,
        current_directory: str | None = "",
        notifier: ToastQueue | None = None,
        confirm: Callable[[str], bool] | None = None,
    ):
        self.backend = backend
        self.state = DirectoryState(current_directory)
        self.toasts = notifier or ToastQueue()
        self.mutations = MutationCoordinator(backend, self.toasts, confirm)

        self.files: FilesResponse | None = None
        self.loading = False
        self.error: str | None = None
        self.search = ""

        self.create_dialog = CreateFolderDialog()
        self.delete_dialog = DeleteFolderDialog()
        self.picker = FilePicker()

        self._generation = 0

    # =========================================================================
    # Directory State
    # =========================================================================

    @property
    def current_directory(self) -> str:
        return self.state.current_directory

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        return self.state.breadcrumbs

    async def navigate_to(self, path: str) -> bool:
        """경로 이동. 바뀌었으면 정확히 한 번 load()."""
        changed = self.state.navigate_to(path)
        if changed:
            await self.load()
        return changed

    async def navigate_up(self) -> bool:
        """상위 폴더. 루트면 no-op (load 없음)."""
        changed = self.state.navigate_up()
        if changed:
            await self.load()
        return changed

    # =========================================================================
    # Listing
    # =========================================================================

    async def load(self) -> None:
        """
        현재 경로 목록 불러오기.

        더 새로운 load()가 시작된 뒤 도착한 응답은 버린다.
        """
        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None

        try:
            response = await self.backend.list_files(clean_dir(self.current_directory))
        except CatalogError as e:
            if generation != self._generation:
                return
            detail = e.message if isinstance(e, BackendError) else ""
            self.error = f"{MSG_LOAD_FAILED}: {detail}" if detail else MSG_LOAD_FAILED
            logger.error(f"Load {self.current_directory!r} failed: {e}")
            return
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug(f"Discarding stale listing (generation {generation})")
            return
        self.files = response

    async def refresh(self) -> None:
        await self.load()

    def set_search(self, query: str) -> None:
        self.search = query

    def listing(self) -> ListingView | None:
        """렌더용 목록. 불러오는 중이거나 에러면 None."""
        if self.files is None or self.loading or self.error:
            return None
        return build_listing(self.files, self.current_directory, self.search)

    # =========================================================================
    # Mutations
    # =========================================================================

    def open_create_folder(self) -> None:
        self.create_dialog.show()

    async def create_folder(self, name: str | None = None) -> MutationResult | None:
        """
        폴더 생성.

        빈 이름은 요청 없이 대화상자에 인라인 에러로 표시한다 (None).
        """
        if name is not None:
            self.create_dialog.folder_name = name

        self.loading = True
        try:
            result = await self.mutations.create_folder(
                self.current_directory, self.create_dialog
            )
        except ValidationError as e:
            self.create_dialog.error = e.message
            return None
        finally:
            self.loading = False

        await self._apply(result)
        return result

    async def upload(self, files: list[SelectedFile]) -> MutationResult | None:
        """파일 업로드 (첫 번째 파일만). 선택이 비었으면 None."""
        self.picker.select(files)
        if not self.picker.files:
            return None

        self.loading = True
        try:
            result = await self.mutations.upload_file(self.current_directory, self.picker)
        finally:
            self.loading = False

        await self._apply(result)
        return result

    def request_delete_folder(self, category: Category) -> None:
        self.delete_dialog.request(category)

    async def confirm_delete_folder(self) -> MutationResult | None:
        result = await self.mutations.delete_folder(
            self.current_directory, self.delete_dialog
        )
        await self._apply(result)
        return result

    def close_delete_dialog(self) -> None:
        self.delete_dialog.dismiss()

    async def delete_image(self, image: Image) -> MutationResult | None:
        self.loading = True
        try:
            result = await self.mutations.delete_image(self.current_directory, image)
        finally:
            self.loading = False

        await self._apply(result)
        return result

    async def _apply(self, result: MutationResult | None) -> None:
        if result is not None and result.reload:
            await self.load()
