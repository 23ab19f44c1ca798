"""
Browser layer: 파일 관리 화면의 상태와 흐름.

역할:
- navigation: 현재 경로, breadcrumb, 이동
- listing: 응답 → 폴더/이미지/빈 폴더 목록
- mutations: 폴더 생성, 업로드, 삭제 + 대화상자 상태
- session: 관리 화면 진입 비밀번호 (보안 경계 아님)
- controller: 위를 묶는 FileBrowser
- backend: HTTP / in-process 저장소 클라이언트

⚠️ 렌더링 없음 (src/app/routes/admin.py가 HTML로 그림)
"""

from .backend import FilesBackend, HttpFilesBackend, LocalFilesBackend, SelectedFile
from .controller import FileBrowser
from .listing import ListingKind, ListingView, build_listing, filter_categories
from .mutations import DeletePhase, MutationCoordinator, MutationKind, MutationResult
from .navigation import DirectoryState, build_breadcrumbs
from .notifications import Toast, ToastQueue, ToastVariant
from .session import SessionGate, SessionRegistry, SessionState

__all__ = [
    # backend
    "FilesBackend",
    "HttpFilesBackend",
    "LocalFilesBackend",
    "SelectedFile",
    # controller
    "FileBrowser",
    # listing
    "ListingKind",
    "ListingView",
    "build_listing",
    "filter_categories",
    # mutations
    "DeletePhase",
    "MutationCoordinator",
    "MutationKind",
    "MutationResult",
    # navigation
    "DirectoryState",
    "build_breadcrumbs",
    # notifications
    "Toast",
    "ToastQueue",
    "ToastVariant",
    # session
    "SessionGate",
    "SessionRegistry",
    "SessionState",
]
