"""Domain layer: errors and schemas."""

from .errors import (
    BackendError,
    CatalogError,
    ConflictError,
    NotFoundError,
    StorageError,
    UnauthorizedError,
    UnexpectedError,
    ValidationError,
)
from .schemas import (
    Breadcrumb,
    Category,
    FilesResponse,
    Image,
    Order,
    OrderItem,
    Pagination,
)

__all__ = [
    "CatalogError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "BackendError",
    "UnauthorizedError",
    "UnexpectedError",
    "Breadcrumb",
    "Category",
    "FilesResponse",
    "Image",
    "Order",
    "OrderItem",
    "Pagination",
]
