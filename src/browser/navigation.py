"""
Directory State: 현재 경로, breadcrumb, 이동.

규칙:
- Current Directory는 항상 정규화된 경로 ("" = 루트, 선행 "files/" 없음)
- 경로가 바뀌면 정확히 한 번 다시 불러온다 (FileBrowser가 처리)
- 루트에서 navigate_up() → no-op
"""

from urllib.parse import urlencode

from src.core.paths import normalize_dir, parent_dir, split_segments
from src.domain.constants import ADMIN_FILES_PATH, ROOT_BREADCRUMB_NAME
from src.domain.schemas import Breadcrumb


def build_breadcrumbs(current_dir: str) -> list[Breadcrumb]:
    """
    Breadcrumb 목록.

    첫 항목은 항상 루트 ("Files", ""), 이후 세그먼트마다 누적 경로.

    예: "a/b" → [Files:"", a:"a", b:"a/b"]
    """
    breadcrumbs = [Breadcrumb(name=ROOT_BREADCRUMB_NAME, path="")]

    current_path = ""
    for part in split_segments(current_dir):
        current_path = f"{current_path}/{part}" if current_path else part
        breadcrumbs.append(Breadcrumb(name=part, path=current_path))

    return breadcrumbs


def page_href(path: str, base: str = ADMIN_FILES_PATH) -> str:
    """경로 → 관리 화면 주소 (?dir=...)."""
    return f"{base}?{urlencode({'dir': path})}"


class DirectoryState:
    """
    현재 탐색 경로.

    주소(?dir=)에서 매번 복원되는 임시 UI 상태. 다시 불러오기는 하지 않으며
    navigate_to()/navigate_up()의 반환값으로 변경 여부만 알린다.
    """

    def __init__(self, current_directory: str | None = ""):
        self._current = normalize_dir(current_directory)

    @property
    def current_directory(self) -> str:
        return self._current

    @property
    def is_root(self) -> bool:
        return self._current == ""

    @property
    def breadcrumbs(self) -> list[Breadcrumb]:
        return build_breadcrumbs(self._current)

    def navigate_to(self, path: str) -> bool:
        """
        경로 교체.

        Returns:
            경로가 실제로 바뀌었으면 True (→ 다시 불러오기 필요)
        """
        new_path = normalize_dir(path)
        if new_path == self._current:
            return False
        self._current = new_path
        return True

    def navigate_up(self) -> bool:
        """상위 폴더로 이동. 루트면 아무것도 하지 않는다."""
        if self.is_root:
            return False
        return self.navigate_to(parent_dir(self._current))
