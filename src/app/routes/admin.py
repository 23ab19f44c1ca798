"""
Admin Routes: 파일 관리 화면 (HTMX).

- GET  /admin/files                       → 로그인 화면 (Session Gate)
- POST /admin/files/login                 → 로그인 → 파일 관리 화면
- GET  /admin/files/panel?dir=&q=         → 목록 조각
- POST /admin/files/panel/folders         → 폴더 생성
- POST /admin/files/panel/upload          → 이미지 업로드
- GET  /admin/files/panel/delete-folder   → 폴더 삭제 확인 대화상자
- POST /admin/files/panel/delete-folder   → 폴더 삭제 실행
- POST /admin/files/panel/delete-image    → 이미지 삭제 (hx-confirm)

세션 토큰은 페이지 안(hx-headers)에만 있으므로, 전체 새로고침 시 다시 로그인해야 한다.
각 요청은 LocalFilesBackend 위의 FileBrowser를 새로 만들어 처리한 뒤 목록 조각을 그린다.
"""

import html
import json
import logging
from typing import Any
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, File, Form, Header, Request, UploadFile
from fastapi.responses import HTMLResponse

from src.browser.backend import LocalFilesBackend, SelectedFile
from src.browser.controller import FileBrowser
from src.browser.listing import ListingKind, ListingView
from src.browser.mutations import DeletePhase
from src.browser.navigation import page_href
from src.browser.notifications import Toast, ToastVariant
from src.browser.session import SessionGate, SessionRegistry, SessionState
from src.core.ids import slugify
from src.core.paths import normalize_dir, parent_dir
from src.domain.constants import ADMIN_FILES_PATH
from src.domain.errors import UnauthorizedError
from src.domain.schemas import Category, Image

logger = logging.getLogger(__name__)

router = APIRouter()

SESSION_HEADER = "X-Admin-Session"
MSG_WRONG_PASSWORD = "비밀번호가 올바르지 않습니다!"


# =============================================================================
# Dependencies
# =============================================================================


def get_sessions(request: Request) -> SessionRegistry:
    return request.app.state.sessions


def get_session_gate(request: Request) -> SessionGate:
    return request.app.state.session_gate


def require_session(
    request: Request,
    x_admin_session: str | None = Header(None),
) -> SessionState:
    """인증된 세션만 통과."""
    state = get_sessions(request).get(x_admin_session)
    if state is None or not state.authenticated:
        raise UnauthorizedError(path=request.url.path)
    return state


async def unauthorized_handler(request: Request, exc: UnauthorizedError) -> HTMLResponse:
    """세션 없음 → 401 + 로그인 카드 조각."""
    logger.warning(f"{request.method} {request.url.path} rejected: no admin session")
    return HTMLResponse(
        content=build_login_html(_root(request), normalize_dir(request.query_params.get("dir"))),
        status_code=exc.status_code,
    )


def _root(request: Request) -> str:
    return request.scope.get("root_path", "").rstrip("/")


def _new_browser(request: Request, dir: str, q: str = "") -> FileBrowser:
    backend = LocalFilesBackend(request.app.state.file_store)
    browser = FileBrowser(backend, current_directory=dir)
    browser.set_search(q)
    return browser


async def _ensure_loaded(browser: FileBrowser) -> None:
    if browser.files is None and browser.error is None:
        await browser.load()


# =============================================================================
# HTML Helpers
# =============================================================================


def escape_html(text: str) -> str:
    """HTML escape (XSS 방지)."""
    return html.escape(text, quote=True)


def _hx_vals(values: dict[str, Any]) -> str:
    return escape_html(json.dumps(values, ensure_ascii=False))


def _panel_url(root: str, dir: str, action: str = "", **params: str) -> str:
    query = urlencode({"dir": dir, **params})
    suffix = f"/{action}" if action else ""
    return f"{root}{ADMIN_FILES_PATH}/panel{suffix}?{query}"


def build_login_html(root: str, dir: str = "", error: str | None = None) -> str:
    """로그인 카드."""
    error_html = f"<p class='error'>{escape_html(error)}</p>" if error else ""
    return f"""
<div class="card login">
    <h2>관리자 영역 - 파일</h2>
    <p>파일 관리자에 들어가려면 비밀번호를 입력하세요</p>
    <form hx-post="{root}{ADMIN_FILES_PATH}/login" hx-target="#app" hx-swap="innerHTML">
        <input type="hidden" name="dir" value="{escape_html(dir)}">
        <label for="password">비밀번호</label>
        <input id="password" type="password" name="password" placeholder="비밀번호 입력" autofocus>
        {error_html}
        <button type="submit" class="primary">들어가기</button>
    </form>
    <a href="{root}/admin" class="back-link">← 관리 화면으로</a>
</div>
"""


def build_toasts_html(toasts: list[Toast]) -> str:
    if not toasts:
        return ""
    items = "".join(
        f"""<li class="toast{' destructive' if t.variant == ToastVariant.DESTRUCTIVE else ''}">
            <strong>{escape_html(t.title)}</strong> {escape_html(t.description)}</li>"""
        for t in toasts
    )
    return f"<ul class='toasts' hx-swap-oob='innerHTML:#toasts'>{items}</ul>"


def build_breadcrumbs_html(browser: FileBrowser, root: str) -> str:
    parts = []
    for index, crumb in enumerate(browser.breadcrumbs):
        label = f"🏠 {crumb.name}" if index == 0 else crumb.name
        parts.append(
            f"""<a hx-get="{escape_html(_panel_url(root, crumb.path))}"
                   hx-target="#panel" hx-push-url="{escape_html(root + page_href(crumb.path))}"
                   class="crumb">{escape_html(label)}</a>"""
        )
    return "<nav class='breadcrumb'>" + " <span>/</span> ".join(parts) + "</nav>"


def build_toolbar_html(browser: FileBrowser, root: str) -> str:
    dir = browser.current_directory
    dialog = browser.create_dialog
    error_html = (
        f"<p class='error'>{escape_html(dialog.error)}</p>" if dialog.error else ""
    )
    return f"""
<div class="toolbar">
    <form hx-post="{root}{ADMIN_FILES_PATH}/panel/upload" hx-target="#panel"
          hx-encoding="multipart/form-data" hx-trigger="change">
        <input type="hidden" name="dir" value="{escape_html(dir)}">
        <label class="button">🖼️ 이미지 추가
            <input type="file" name="file" accept="image/*" hidden>
        </label>
    </form>
    <details class="dialog"{' open' if dialog.open else ''}>
        <summary class="button">📁 폴더 추가</summary>
        <form hx-post="{root}{ADMIN_FILES_PATH}/panel/folders" hx-target="#panel">
            <h3>새 폴더 만들기</h3>
            <input type="hidden" name="dir" value="{escape_html(dir)}">
            <label for="folderName">폴더 이름</label>
            <input id="folderName" name="folderName" value="{escape_html(dialog.folder_name)}"
                   placeholder="폴더 이름 입력" required>
            {error_html}
            <button type="submit">폴더 만들기</button>
        </form>
    </details>
    <button hx-get="{escape_html(_panel_url(root, dir))}" hx-target="#panel">🔄 새로고침</button>
</div>
"""


def build_search_html(browser: FileBrowser, root: str) -> str:
    """검색 입력 (#panel 밖, 목록 교체 대상 아님). dir은 #panel-dir에서."""
    return f"""
<input id="search" type="search" name="q" class="search" placeholder="폴더 검색..."
       value="{escape_html(browser.search)}"
       hx-get="{root}{ADMIN_FILES_PATH}/panel" hx-target="#panel"
       hx-trigger="keyup changed delay:300ms, search"
       hx-include="#panel-dir">
"""


def build_folder_grid_html(view: ListingView, root: str) -> str:
    tiles = []
    for tile in view.folders:
        name = tile.category.name
        tiles.append(f"""
        <div class="tile folder">
            <a hx-get="{escape_html(_panel_url(root, tile.path))}" hx-target="#panel"
               hx-push-url="{escape_html(root + page_href(tile.path))}">
                <span class="icon">📁</span>
                <p class="name">{escape_html(name)}</p>
            </a>
            <button class="danger" title="폴더 삭제"
                    hx-get="{escape_html(_panel_url(root, view.current_dir, 'delete-folder', name=name))}"
                    hx-target="#panel">🗑️</button>
        </div>""")
    return "<div class='grid'>" + "".join(tiles) + "</div>"


def build_image_grid_html(view: ListingView, root: str) -> str:
    tiles = []
    for tile in view.images:
        image = tile.image
        tiles.append(f"""
        <div class="tile image" id="img-{escape_html(image.code)}">
            <img src="{escape_html(image.url)}" alt="{escape_html(image.name)}">
            <p class="name">{escape_html(image.name)}</p>
            <button class="danger" title="이미지 삭제"
                    hx-post="{root}{ADMIN_FILES_PATH}/panel/delete-image" hx-target="#panel"
                    hx-vals="{_hx_vals({'dir': view.current_dir, 'name': image.name})}"
                    hx-confirm="{escape_html(f'이미지 "{image.name}"을(를) 삭제하시겠습니까?')}">🗑️</button>
        </div>""")
    return "<div class='grid'>" + "".join(tiles) + "</div>"


def build_listing_html(browser: FileBrowser, root: str) -> str:
    """목록 카드 (에러 / 폴더 / 이미지 / 빈 폴더)."""
    dir = browser.current_directory

    if browser.error:
        return f"""
<div class="card error-card">
    <h2>파일 목록 오류</h2>
    <p>{escape_html(browser.error)}</p>
    <button hx-get="{escape_html(_panel_url(root, dir))}" hx-target="#panel">다시 시도</button>
</div>
"""

    view = browser.listing()
    if view is None or browser.files is None:
        return ""

    title = f"{dir} 폴더 내용" if dir else "루트 폴더 내용"
    count = len(browser.files.categories)

    up_html = ""
    if dir:
        parent = parent_dir(dir)
        up_html = f"""<button hx-get="{escape_html(_panel_url(root, parent))}" hx-target="#panel"
            hx-push-url="{escape_html(root + page_href(parent))}">← 상위 폴더</button>"""

    if view.kind == ListingKind.FOLDERS:
        body = build_folder_grid_html(view, root)
    elif view.kind == ListingKind.IMAGES:
        body = build_image_grid_html(view, root)
    else:
        body = "<p class='empty'>빈 폴더</p>"

    return f"""
<div class="card listing" data-kind="{view.kind.value}">
    <h2>{escape_html(title)}</h2>
    <p class="count">폴더 {count}개</p>
    {up_html}
    {body}
</div>
"""


def build_delete_dialog_html(browser: FileBrowser, root: str) -> str:
    dialog = browser.delete_dialog
    if not dialog.is_open or dialog.selected is None:
        return ""

    dir = browser.current_directory
    close_url = escape_html(_panel_url(root, dir))

    if dialog.phase == DeletePhase.SUCCESS:
        return f"""
<div class="modal" data-phase="{dialog.phase.value}">
    <h3>삭제 완료</h3>
    <p class="success">✅ 폴더가 삭제되었습니다!</p>
    <button hx-get="{close_url}" hx-target="#panel">닫기</button>
</div>
"""

    name = dialog.selected.name
    return f"""
<div class="modal" data-phase="{dialog.phase.value}">
    <h3>폴더 삭제</h3>
    <p>"{escape_html(name)}" 폴더를 삭제하시겠습니까?
       안의 모든 파일이 삭제됩니다. 이 작업은 되돌릴 수 없습니다.</p>
    <button hx-get="{close_url}" hx-target="#panel">취소</button>
    <button class="danger" hx-post="{root}{ADMIN_FILES_PATH}/panel/delete-folder" hx-target="#panel"
            hx-vals="{_hx_vals({'dir': dir, 'name': name})}"
            hx-disabled-elt="this">삭제</button>
</div>
"""


def build_panel_html(browser: FileBrowser, root: str) -> str:
    """목록 조각 전체 (#panel 내용)."""
    dir_input = (
        f'<input type="hidden" id="panel-dir" name="dir" '
        f'value="{escape_html(browser.current_directory)}">'
    )
    return (
        dir_input
        + build_toolbar_html(browser, root)
        + build_breadcrumbs_html(browser, root)
        + build_listing_html(browser, root)
        + build_delete_dialog_html(browser, root)
        + build_toasts_html(browser.toasts.drain())
    )


def build_shell_html(browser: FileBrowser, state: SessionState, root: str) -> str:
    """
    로그인 후 화면 틀. 세션 토큰은 여기(hx-headers)에만 있다.

    hx-include="#search"는 하위 요청에 상속되어 이동/변경 후에도 검색어가 유지된다.
    """
    headers = _hx_vals({SESSION_HEADER: state.token})
    return f"""
<div id="browser" hx-headers="{headers}" hx-include="#search">
    <header>
        <h1>파일 관리자</h1>
        <p>카탈로그 파일을 관리합니다</p>
        <a href="{root}/admin" class="button primary">← 관리 화면으로</a>
    </header>
    {build_search_html(browser, root)}
    <div id="panel">{build_panel_html(browser, root)}</div>
</div>
"""


def _panel_response(browser: FileBrowser, request: Request) -> HTMLResponse:
    return HTMLResponse(content=build_panel_html(browser, _root(request)))


# =============================================================================
# Page Routes (HTML)
# =============================================================================

@router.get("", response_class=HTMLResponse)
async def files_page(request: Request, dir: str = "") -> HTMLResponse:
    """파일 관리 화면 (로그인부터)."""
    root = _root(request)
    return HTMLResponse(content=f"""
<!DOCTYPE html>
<html lang="ko">
<head>
    <meta charset="UTF-8">
    <title>파일 관리자</title>
    <script src="https://unpkg.com/htmx.org@1.9.10"></script>
    <link rel="stylesheet" href="{root}/static/css/style.css">
</head>
<body>
    <div class="container">
        <div id="app">{build_login_html(root, normalize_dir(dir))}</div>
        <div id="toasts"></div>
    </div>
</body>
</html>
    """)


@router.post("/login", response_class=HTMLResponse)
async def login(
    request: Request,
    password: str = Form(""),
    dir: str = Form(""),
) -> HTMLResponse:
    """비밀번호 확인 → 파일 관리 화면."""
    root = _root(request)
    state = get_sessions(request).create()

    if not get_session_gate(request).login(state, password):
        get_sessions(request).discard(state.token)
        return HTMLResponse(content=build_login_html(root, dir, error=MSG_WRONG_PASSWORD))

    browser = _new_browser(request, dir)
    await browser.load()
    return HTMLResponse(content=build_shell_html(browser, state, root))


# =============================================================================
# Panel Routes (HTMX fragments, 세션 필요)
# =============================================================================

@router.get("/panel", response_class=HTMLResponse)
async def panel(
    request: Request,
    dir: str = "",
    q: str = "",
    session: SessionState = Depends(require_session),
) -> HTMLResponse:
    """목록 조각."""
    browser = _new_browser(request, dir, q)
    await browser.load()
    return _panel_response(browser, request)


@router.post("/panel/folders", response_class=HTMLResponse)
async def create_folder(
    request: Request,
    dir: str = Form(""),
    q: str = Form(""),
    folderName: str = Form(""),  # noqa: N803 - 폼 필드명 유지
    session: SessionState = Depends(require_session),
) -> HTMLResponse:
    """폴더 생성."""
    browser = _new_browser(request, dir, q)
    browser.open_create_folder()
    await browser.create_folder(folderName)
    await _ensure_loaded(browser)
    return _panel_response(browser, request)


@router.post("/panel/upload", response_class=HTMLResponse)
async def upload(
    request: Request,
    dir: str = Form(""),
    q: str = Form(""),
    file: list[UploadFile] | None = File(None),
    session: SessionState = Depends(require_session),
) -> HTMLResponse:
    """이미지 업로드 (첫 번째 파일만)."""
    browser = _new_browser(request, dir, q)
    selected = [
        SelectedFile(name=f.filename, content=await f.read(), content_type=f.content_type or "")
        for f in (file or [])
        if f.filename
    ]
    await browser.upload(selected)
    await _ensure_loaded(browser)
    return _panel_response(browser, request)


@router.get("/panel/delete-folder", response_class=HTMLResponse)
async def delete_folder_dialog(
    request: Request,
    dir: str = "",
    q: str = "",
    name: str = "",
    session: SessionState = Depends(require_session),
) -> HTMLResponse:
    """폴더 삭제 확인 대화상자."""
    browser = _new_browser(request, dir, q)
    browser.request_delete_folder(Category(id=name, name=name, slug=slugify(name)))
    await browser.load()
    return _panel_response(browser, request)


@router.post("/panel/delete-folder", response_class=HTMLResponse)
async def delete_folder(
    request: Request,
    dir: str = Form(""),
    q: str = Form(""),
    name: str = Form(""),
    session: SessionState = Depends(require_session),
) -> HTMLResponse:
    """확인된 폴더 삭제."""
    browser = _new_browser(request, dir, q)
    browser.request_delete_folder(Category(id=name, name=name, slug=slugify(name)))
    await browser.confirm_delete_folder()
    await _ensure_loaded(browser)
    return _panel_response(browser, request)


@router.post("/panel/delete-image", response_class=HTMLResponse)
async def delete_image(
    request: Request,
    dir: str = Form(""),
    q: str = Form(""),
    name: str = Form(""),
    session: SessionState = Depends(require_session),
) -> HTMLResponse:
    """이미지 삭제 (확인은 브라우저의 hx-confirm)."""
    browser = _new_browser(request, dir, q)
    image = Image(name=name, code=name.rsplit(".", 1)[0], url="", category="")
    await browser.delete_image(image)
    await _ensure_loaded(browser)
    return _panel_response(browser, request)
