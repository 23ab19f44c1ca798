"""
Listing View Model: FilesResponse → 화면용 목록.

3분기 (순서 중요):
1. categories 있음 → 폴더 타일 (이름 검색 필터, 백엔드 순서 유지)
2. categories 없음 + images 있음 + 루트 아님 → 이미지 타일
3. 그 외 → "빈 폴더"

루트에서 categories 0 + images > 0 은 비정상 payload → 빈 폴더로 표시.
categories / images 상호 배타는 백엔드 계약이며 여기서 다시 검증하지 않는다.
"""

from dataclasses import dataclass, field
from enum import Enum

from src.core.paths import join_dir
from src.domain.schemas import Category, FilesResponse, Image


class ListingKind(str, Enum):
    """목록 표시 형태."""
    FOLDERS = "folders"
    IMAGES = "images"
    EMPTY = "empty"


@dataclass
class FolderTile:
    """폴더 타일 (클릭 → 이동, 삭제 버튼)."""
    category: Category
    path: str
    deletable: bool = True


@dataclass
class ImageTile:
    """이미지 타일 (삭제 버튼)."""
    image: Image
    deletable: bool = True


@dataclass
class ListingView:
    """화면 렌더용 목록."""
    kind: ListingKind
    current_dir: str
    folders: list[FolderTile] = field(default_factory=list)
    images: list[ImageTile] = field(default_factory=list)
    total_categories: int = 0
    search: str = ""

    @property
    def is_empty(self) -> bool:
        return self.kind == ListingKind.EMPTY


def filter_categories(categories: list[Category], search: str) -> list[Category]:
    """대소문자 무시 부분 문자열 필터. 순서는 그대로."""
    needle = search.lower()
    return [cat for cat in categories if needle in cat.name.lower()]


def build_listing(
    response: FilesResponse,
    current_dir: str,
    search: str = "",
) -> ListingView:
    """
    화면용 목록 생성.

    Args:
        response: GET /api/files 응답
        current_dir: Current Directory
        search: 폴더 이름 검색어 (폴더 목록에만 적용)
    """
    categories = response.categories
    images = response.images or []

    if categories:
        return ListingView(
            kind=ListingKind.FOLDERS,
            current_dir=current_dir,
            folders=[
                FolderTile(category=cat, path=join_dir(current_dir, cat.name))
                for cat in filter_categories(categories, search)
            ],
            total_categories=len(categories),
            search=search,
        )

    if images and current_dir.strip() != "":
        return ListingView(
            kind=ListingKind.IMAGES,
            current_dir=current_dir,
            images=[ImageTile(image=img) for img in images],
            search=search,
        )

    return ListingView(kind=ListingKind.EMPTY, current_dir=current_dir, search=search)
