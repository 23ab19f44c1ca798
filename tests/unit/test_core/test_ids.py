"""
test_ids.py - ID 생성 테스트

DoD:
- order id 고유성: 매 호출 시 다른 값
- order number 포맷
- slug 결정론적
"""

import re

from src.core.ids import format_order_number, generate_order_id, slugify

# =============================================================================
# generate_order_id 테스트
# =============================================================================


class TestGenerateOrderId:
    """generate_order_id 함수 테스트."""

    def test_unique(self):
        ids = {generate_order_id() for _ in range(100)}

        assert len(ids) == 100

    def test_format(self):
        assert re.fullmatch(r"[0-9a-f]{32}", generate_order_id())


class TestFormatOrderNumber:
    """format_order_number 함수 테스트."""

    def test_zero_padded(self):
        assert format_order_number(7) == "0007"

    def test_wider_numbers_kept(self):
        assert format_order_number(12345) == "12345"


class TestSlugify:
    """slugify 함수 테스트."""

    def test_deterministic(self):
        assert slugify("Sapatos Femininos") == slugify("Sapatos Femininos")

    def test_basic(self):
        assert slugify("Sapatos Femininos") == "sapatos-femininos"

    def test_accents_removed(self):
        assert slugify("Acessórios") == "acessorios"

    def test_symbols_collapsed(self):
        assert slugify("  Bags & Co.  ") == "bags-co"

    def test_non_ascii_only_falls_back(self):
        assert slugify("신발") == "folder"
