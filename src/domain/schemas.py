"""
Data schemas for the catalog admin.

규칙:
- 필드명 통일: 와이어 포맷(JSON)은 camelCase (totalPages, orderNumber ...)
- 파이썬 속성은 snake_case, to_dict()/from_dict()에서 변환
- categories / images 상호 배타: 백엔드 계약 (클라이언트에서 강제하지 않음)
"""

from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# Catalog Schemas
# =============================================================================

@dataclass
class Image:
    """
    이미지 (폴더 안의 leaf 파일).

    code는 표시용 name과 별개인 안정 식별자 (파일명 stem).
    """
    name: str
    code: str
    url: str
    category: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "code": self.code,
            "url": self.url,
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Image":
        return cls(
            name=data["name"],
            code=data.get("code", data["name"]),
            url=data.get("url", ""),
            category=data.get("category", ""),
        )


@dataclass
class Category:
    """카테고리 (폴더 노드). 이름은 상위 디렉토리 안에서 유일 (백엔드 보장)."""
    id: str
    name: str
    slug: str
    images: list[Image] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "images": [img.to_dict() for img in self.images],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            slug=data.get("slug", ""),
            images=[Image.from_dict(img) for img in data.get("images") or []],
        )


@dataclass
class Pagination:
    """목록 페이지 정보."""
    total: int
    page: int
    limit: int
    total_pages: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "page": self.page,
            "limit": self.limit,
            "totalPages": self.total_pages,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Pagination":
        return cls(
            total=int(data.get("total", 0)),
            page=int(data.get("page", 1)),
            limit=int(data.get("limit", 0)),
            total_pages=int(data.get("totalPages", 0)),
        )


@dataclass
class FilesResponse:
    """
    GET /api/files 응답.

    images는 선택 필드: 하위 폴더가 없는 leaf 디렉토리에서만 채워짐.
    """
    categories: list[Category]
    pagination: Pagination
    images: list[Image] | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "categories": [cat.to_dict() for cat in self.categories],
            "pagination": self.pagination.to_dict(),
        }
        if self.images is not None:
            data["images"] = [img.to_dict() for img in self.images]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FilesResponse":
        images = data.get("images")
        return cls(
            categories=[Category.from_dict(c) for c in data.get("categories") or []],
            pagination=Pagination.from_dict(data.get("pagination") or {}),
            images=[Image.from_dict(img) for img in images] if images is not None else None,
        )


@dataclass(frozen=True)
class Breadcrumb:
    """경로 표시용 항목."""
    name: str
    path: str


# =============================================================================
# Order Schemas
# =============================================================================

@dataclass
class OrderItem:
    """주문 항목 (카탈로그 이미지 1건)."""
    code: str
    name: str = ""
    category: str = ""
    quantity: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "category": self.category,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "OrderItem":
        return cls(
            code=str(data["code"]),
            name=data.get("name", ""),
            category=data.get("category", ""),
            quantity=int(data.get("quantity", 1)),
        )


@dataclass
class Order:
    """
    주문.

    pending=True → 진행 중, PATCH /api/orders로 완료 처리 시 False.
    """
    id: str
    order_number: str
    customer_name: str
    created_at: str
    items: list[OrderItem] = field(default_factory=list)
    customer_phone: str | None = None
    notes: str | None = None
    pending: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "orderNumber": self.order_number,
            "customerName": self.customer_name,
            "customerPhone": self.customer_phone,
            "notes": self.notes,
            "items": [item.to_dict() for item in self.items],
            "createdAt": self.created_at,
            "pending": self.pending,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Order":
        return cls(
            id=data["id"],
            order_number=data["orderNumber"],
            customer_name=data["customerName"],
            created_at=data["createdAt"],
            items=[OrderItem.from_dict(i) for i in data.get("items") or []],
            customer_phone=data.get("customerPhone"),
            notes=data.get("notes"),
            pending=bool(data.get("pending", True)),
        )
