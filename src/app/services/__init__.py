"""
Application Services.

역할:
- file_store: 카테고리 폴더/이미지 CRUD (/api/files)
- order_store: 주문 JSON 저장소 (/api/orders)
"""

from .file_store import FileStore
from .order_store import OrderStore

__all__ = [
    "FileStore",
    "OrderStore",
]
