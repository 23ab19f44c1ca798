#!/usr/bin/env python3
"""
files_cli.py - 실행 중인 서버의 /api/files 를 다루는 명령행 도구

관리 화면과 같은 FileBrowser 흐름을 HTTP 백엔드 위에서 실행한다.

사용법:
    # 루트 목록
    uv run python scripts/files_cli.py ls

    # 폴더 안 목록 + 이름 검색
    uv run python scripts/files_cli.py ls shoes --search sand

    # 폴더 생성
    uv run python scripts/files_cli.py mkdir shoes "Summer 2024"

    # 이미지 업로드
    uv run python scripts/files_cli.py upload shoes/summer ./photo.jpg

    # 폴더 또는 이미지 삭제 (--yes: 확인 생략)
    uv run python scripts/files_cli.py rm shoes summer --yes

종료 코드: 0 성공, 1 실패
"""

import argparse
import asyncio
import logging
import sys
from collections.abc import Callable
from pathlib import Path

# scripts/ 에서 직접 실행할 때 src 패키지를 찾기 위한 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.browser.backend import FilesBackend, HttpFilesBackend, SelectedFile  # noqa: E402
from src.browser.controller import FileBrowser  # noqa: E402
from src.browser.listing import ListingKind  # noqa: E402
from src.domain.schemas import Category  # noqa: E402

logger = logging.getLogger(__name__)

DEFAULT_SERVER = "http://127.0.0.1:8000"


def make_confirm(assume_yes: bool) -> Callable[[str], bool]:
    """확인 질문 함수. --yes면 항상 True."""
    if assume_yes:
        return lambda message: True

    def ask(message: str) -> bool:
        answer = input(f"{message} [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    return ask


def print_toasts(browser: FileBrowser) -> None:
    for toast in browser.toasts.drain():
        print(f"[{toast.title}] {toast.description}")


# =============================================================================
# Commands
# =============================================================================


async def cmd_ls(browser: FileBrowser, search: str = "") -> int:
    browser.set_search(search)
    await browser.load()
    if browser.error:
        logger.error(browser.error)
        return 1

    view = browser.listing()
    if view is None:
        return 1

    print(f"{browser.current_directory or '/'}")
    if view.kind == ListingKind.FOLDERS:
        for tile in view.folders:
            print(f"  📁 {tile.category.name}  ({len(tile.category.images)} images)")
        print(f"폴더 {view.total_categories}개")
    elif view.kind == ListingKind.IMAGES:
        for tile in view.images:
            print(f"  🖼️ {tile.image.name}  {tile.image.url}")
    else:
        print("  (빈 폴더)")
    return 0


async def cmd_mkdir(browser: FileBrowser, name: str) -> int:
    browser.open_create_folder()
    result = await browser.create_folder(name)
    print_toasts(browser)
    if result is None:
        logger.error(browser.create_dialog.error)
        return 1
    return 0 if result.ok else 1


async def cmd_upload(browser: FileBrowser, file_path: Path) -> int:
    if not file_path.is_file():
        logger.error(f"파일 없음: {file_path}")
        return 1

    selected = SelectedFile(name=file_path.name, content=file_path.read_bytes())
    result = await browser.upload([selected])
    print_toasts(browser)
    return 0 if result is not None and result.ok else 1


async def cmd_rm(browser: FileBrowser, name: str) -> int:
    """이름으로 폴더 또는 이미지를 찾아 삭제."""
    await browser.load()
    if browser.error or browser.files is None:
        logger.error(browser.error or "목록을 불러오지 못했습니다")
        return 1

    category = next((c for c in browser.files.categories if c.name == name), None)
    if category is not None:
        return await _rm_folder(browser, category)

    image = next((i for i in browser.files.images or [] if i.name == name), None)
    if image is not None:
        result = await browser.delete_image(image)
        print_toasts(browser)
        if result is None:
            logger.info("취소됨")
            return 1
        return 0 if result.ok else 1

    logger.error(f"'{name}' 없음: {browser.current_directory or '/'}")
    return 1


async def _rm_folder(browser: FileBrowser, category: Category) -> int:
    browser.request_delete_folder(category)
    if not browser.mutations.confirm(f'"{category.name}" 폴더와 안의 모든 파일을 삭제하시겠습니까?'):
        browser.close_delete_dialog()
        logger.info("취소됨")
        return 1

    result = await browser.confirm_delete_folder()
    print_toasts(browser)
    return 0 if result is not None and result.ok else 1


async def run(args: argparse.Namespace, backend: FilesBackend) -> int:
    """명령 실행 (백엔드 주입 가능)."""
    browser = FileBrowser(
        backend,
        current_directory=args.dir,
        confirm=make_confirm(getattr(args, "yes", False)),
    )

    if args.command == "ls":
        return await cmd_ls(browser, args.search)
    if args.command == "mkdir":
        return await cmd_mkdir(browser, args.name)
    if args.command == "upload":
        return await cmd_upload(browser, Path(args.file))
    if args.command == "rm":
        return await cmd_rm(browser, args.name)

    logger.error(f"알 수 없는 명령: {args.command}")
    return 1


# =============================================================================
# Entry Point
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="카탈로그 파일 관리 명령행 도구",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--server",
        type=str,
        default=DEFAULT_SERVER,
        help=f"서버 주소 (기본: {DEFAULT_SERVER})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    ls = sub.add_parser("ls", help="목록")
    ls.add_argument("dir", nargs="?", default="", help="폴더 경로 (기본: 루트)")
    ls.add_argument("--search", type=str, default="", help="폴더 이름 검색")

    mkdir = sub.add_parser("mkdir", help="폴더 생성")
    mkdir.add_argument("dir", help="상위 폴더 경로 (루트는 \"\")")
    mkdir.add_argument("name", help="새 폴더 이름")

    upload = sub.add_parser("upload", help="이미지 업로드")
    upload.add_argument("dir", help="대상 폴더 경로")
    upload.add_argument("file", help="업로드할 파일")

    rm = sub.add_parser("rm", help="폴더 또는 이미지 삭제")
    rm.add_argument("dir", help="폴더 경로")
    rm.add_argument("name", help="삭제할 폴더/이미지 이름")
    rm.add_argument("--yes", action="store_true", help="확인 없이 삭제")

    return parser


async def _main_async(args: argparse.Namespace) -> int:
    async with HttpFilesBackend(args.server) as backend:
        return await run(args, backend)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    args = build_parser().parse_args(argv)
    return asyncio.run(_main_async(args))


if __name__ == "__main__":
    exit(main())
