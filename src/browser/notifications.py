"""Toast 알림 큐."""

from dataclasses import dataclass
from enum import Enum


class ToastVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Toast:
    title: str
    description: str
    variant: ToastVariant = ToastVariant.DEFAULT


class ToastQueue:
    """화면에 띄울 toast 목록. 렌더 후 drain()으로 비운다."""

    def __init__(self) -> None:
        self.items: list[Toast] = []

    def success(self, description: str, title: str = "성공") -> None:
        self.items.append(Toast(title=title, description=description))

    def error(self, description: str, title: str = "오류") -> None:
        self.items.append(
            Toast(title=title, description=description, variant=ToastVariant.DESTRUCTIVE)
        )

    def drain(self) -> list[Toast]:
        items, self.items = self.items, []
        return items
