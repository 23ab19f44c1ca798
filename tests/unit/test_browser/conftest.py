"""
Browser 테스트용 가짜 백엔드.

- 호출 기록 (calls)
- 실패 주입 (fail_with)
- list_files 응답 지연 (gate) → 늦게 도착하는 응답 재현
"""

import asyncio
from typing import Any

import pytest

from src.browser.backend import SelectedFile
from src.domain.errors import CatalogError
from src.domain.schemas import Category, FilesResponse, Image, Pagination


def make_response(
    categories: list[str] | None = None,
    images: list[str] | None = None,
    dir: str = "",
) -> FilesResponse:
    """이름 목록 → FilesResponse."""
    names = categories or []
    return FilesResponse(
        categories=[
            Category(id=str(i + 1), name=name, slug=name.lower())
            for i, name in enumerate(names)
        ],
        images=[
            Image(
                name=name,
                code=name.rsplit(".", 1)[0],
                url=f"/files/{dir}/{name}",
                category=dir.rsplit("/", 1)[-1],
            )
            for name in images
        ] if images is not None else None,
        pagination=Pagination(total=len(names), page=1, limit=50, total_pages=1),
    )


class FakeFilesBackend:
    """FilesBackend 계약을 따르는 기록용 백엔드."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.responses: dict[str, FilesResponse] = {}
        self.fail_with: dict[str, CatalogError] = {}
        self.gates: dict[str, asyncio.Event] = {}

    def count(self, method: str) -> int:
        return sum(1 for name, _ in self.calls if name == method)

    def _maybe_fail(self, method: str) -> None:
        error = self.fail_with.get(method)
        if error is not None:
            raise error

    async def list_files(self, dir: str) -> FilesResponse:
        self.calls.append(("list_files", (dir,)))
        gate = self.gates.get(dir)
        if gate is not None:
            await gate.wait()
        self._maybe_fail("list_files")
        return self.responses.get(dir, make_response())

    async def create_folder(self, dir: str, folder_name: str) -> None:
        self.calls.append(("create_folder", (dir, folder_name)))
        self._maybe_fail("create_folder")

    async def upload(self, dir: str, file: SelectedFile) -> None:
        self.calls.append(("upload", (dir, file.name)))
        self._maybe_fail("upload")

    async def delete(self, dir: str, path: str) -> None:
        self.calls.append(("delete", (dir, path)))
        self._maybe_fail("delete")


@pytest.fixture
def backend() -> FakeFilesBackend:
    return FakeFilesBackend()


@pytest.fixture
def files_response():
    """FilesResponse 생성 함수."""
    return make_response
