"""
Core layer: 저장소 안전 핵심 모듈.

역할:
- JSON 파일 락 + 원자적 쓰기
- 경로 정규화, 저장소 밖 경로 차단
- ID / 주문 번호 / slug
"""

from .ids import format_order_number, generate_order_id, slugify
from .jsonfile import atomic_write_json, json_file_lock, load_json
from .paths import (
    clean_dir,
    join_dir,
    normalize_dir,
    parent_dir,
    resolve_within,
    split_segments,
    validate_entry_name,
)

__all__ = [
    # jsonfile
    "json_file_lock",
    "atomic_write_json",
    "load_json",
    # ids
    "generate_order_id",
    "format_order_number",
    "slugify",
    # paths
    "clean_dir",
    "split_segments",
    "normalize_dir",
    "parent_dir",
    "join_dir",
    "validate_entry_name",
    "resolve_within",
]
