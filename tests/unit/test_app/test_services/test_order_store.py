"""
test_order_store.py - 주문 저장소 테스트

DoD:
- 필수 필드 누락 → ValidationError (400)
- 주문 번호 순번 (0001, 0002 ...)
- 날짜 / 번호 조회
- 완료 처리, 없는 id → 404
"""

import json
import threading
from pathlib import Path

import pytest

from src.app.services.order_store import OrderStore
from src.domain.errors import CatalogError, ErrorCodes, NotFoundError, ValidationError


class TestCreateOrder:
    """주문 생성 테스트."""

    def test_create(self, order_store: OrderStore, orders_path: Path, sample_order: dict):
        order = order_store.create_order(sample_order)

        assert order.order_number == "0001"
        assert order.customer_name == "홍길동"
        assert order.pending is True
        assert len(order.id) == 32
        assert order.items[0].quantity == 2
        assert order.items[1].quantity == 1

        saved = json.loads(orders_path.read_text(encoding="utf-8"))
        assert saved[0]["orderNumber"] == "0001"
        assert saved[0]["customerName"] == "홍길동"

    def test_sequential_numbers(self, order_store: OrderStore, sample_order: dict):
        numbers = [order_store.create_order(sample_order).order_number for _ in range(3)]

        assert numbers == ["0001", "0002", "0003"]

    @pytest.mark.parametrize(
        "body,field",
        [
            ({"items": [{"code": "A1"}]}, "customerName"),
            ({"customerName": "  ", "items": [{"code": "A1"}]}, "customerName"),
            ({"customerName": "홍길동"}, "items"),
            ({"customerName": "홍길동", "items": []}, "items"),
            ({"customerName": "홍길동", "items": [{"name": "no code"}]}, "items"),
        ],
    )
    def test_missing_required(self, order_store: OrderStore, orders_path: Path, body, field):
        with pytest.raises(ValidationError) as exc_info:
            order_store.create_order(body)

        assert exc_info.value.code == ErrorCodes.MISSING_REQUIRED_FIELD
        assert exc_info.value.context["field"] == field
        assert not orders_path.exists()

    def test_concurrent_creates_unique_numbers(
        self, order_store: OrderStore, sample_order: dict
    ):
        """동시 생성 → 락으로 번호 중복 없음."""
        numbers: list[str] = []

        def worker() -> None:
            numbers.append(order_store.create_order(sample_order).order_number)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(numbers) == ["0001", "0002", "0003", "0004", "0005"]


class TestListOrders:
    """조회 테스트."""

    def test_empty(self, order_store: OrderStore):
        assert order_store.list_orders() == []

    def test_newest_first(self, order_store: OrderStore, sample_order: dict):
        order_store.create_order(sample_order)
        order_store.create_order(sample_order)

        numbers = [o.order_number for o in order_store.list_orders()]

        assert numbers == ["0002", "0001"]

    def test_by_date(self, order_store: OrderStore, sample_order: dict):
        order = order_store.create_order(sample_order)
        today = order.created_at[:10]

        assert [o.id for o in order_store.list_orders_by_date(today)] == [order.id]
        assert order_store.list_orders_by_date("2000-01-01") == []

    def test_invalid_date(self, order_store: OrderStore):
        with pytest.raises(ValidationError) as exc_info:
            order_store.list_orders_by_date("15/01/2024")

        assert exc_info.value.code == ErrorCodes.INVALID_DATE

    def test_by_number(self, order_store: OrderStore, sample_order: dict):
        order_store.create_order(sample_order)
        second = order_store.create_order(sample_order)

        assert [o.id for o in order_store.list_orders_by_number("0002")] == [second.id]
        assert order_store.list_orders_by_number("9999") == []

    def test_corrupt_file(self, order_store: OrderStore, orders_path: Path):
        orders_path.parent.mkdir(parents=True)
        orders_path.write_text("{not json", encoding="utf-8")

        with pytest.raises(CatalogError) as exc_info:
            order_store.list_orders()

        assert exc_info.value.code == ErrorCodes.ORDERS_FILE_CORRUPT


class TestUpdateOrderStatus:
    """완료 처리 테스트."""

    def test_complete(self, order_store: OrderStore, sample_order: dict):
        order = order_store.create_order(sample_order)

        updated = order_store.update_order_status(order.id, pending=False)

        assert updated.pending is False
        assert order_store.list_orders()[0].pending is False

    def test_unknown_id(self, order_store: OrderStore, sample_order: dict):
        order_store.create_order(sample_order)

        with pytest.raises(NotFoundError) as exc_info:
            order_store.update_order_status("nope", pending=False)

        assert exc_info.value.code == ErrorCodes.ORDER_NOT_FOUND

    def test_empty_id(self, order_store: OrderStore):
        with pytest.raises(ValidationError):
            order_store.update_order_status("", pending=False)
