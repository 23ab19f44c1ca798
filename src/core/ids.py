"""
ID 생성: order id, order number, category slug

규칙:
- order id: 고유 (UUID v4)
- order number: 순번, 사람이 읽는 용도
- slug: 결정론적, 동일 이름 → 동일 slug
"""

import re
import unicodedata
import uuid

ORDER_NUMBER_WIDTH = 4

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


def generate_order_id() -> str:
    """
    주문 ID 생성.

    Returns:
        32자 hex 문자열
    """
    return uuid.uuid4().hex


def format_order_number(sequence: int) -> str:
    """
    주문 번호 포맷.

    예: 7 → "0007", 12345 → "12345"
    """
    return str(sequence).zfill(ORDER_NUMBER_WIDTH)


def slugify(name: str) -> str:
    """
    폴더 이름 → slug.

    - 악센트 제거 (NFKD → ASCII)
    - 소문자, 영숫자 외 문자는 "-"
    - 앞뒤 "-" 제거

    예: "Sapatos Femininos" → "sapatos-femininos", "Acessórios" → "acessorios"
    """
    ascii_name = (
        unicodedata.normalize("NFKD", name)
        .encode("ascii", "ignore")
        .decode("ascii")
        .lower()
    )
    slug = _SLUG_INVALID.sub("-", ascii_name).strip("-")
    return slug or "folder"
