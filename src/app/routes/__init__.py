"""
FastAPI Routes.

페이지 라우트 (HTML, HTMX) + API 라우트 (REST)
"""

from . import admin, files, orders

__all__ = ["admin", "files", "orders"]
