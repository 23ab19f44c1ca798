"""
주문 저장소: JSON 파일 기반 (orders.json).

규칙:
- orders.json = 주문 목록의 유일한 진실 원천
- read-modify-write는 파일 락으로 보호
- 원자적 쓰기: temp → rename
- 필수 필드 누락 → ValidationError (400)
"""

import logging
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

from src.core.ids import format_order_number, generate_order_id
from src.core.jsonfile import atomic_write_json, json_file_lock, load_json
from src.domain.errors import ErrorCodes, NotFoundError, ValidationError
from src.domain.schemas import Order, OrderItem

logger = logging.getLogger(__name__)


class OrderStore:
    """주문 CRUD."""

    def __init__(self, orders_path: Path):
        """
        Args:
            orders_path: orders.json 경로
        """
        self.orders_path = orders_path

    # =========================================================================
    # Create
    # =========================================================================

    def create_order(self, data: dict[str, Any]) -> Order:
        """
        주문 생성.

        필수: customerName, items (1개 이상, 각 항목에 code)
        자동: id, orderNumber(순번), createdAt, pending=True

        Raises:
            ValidationError: MISSING_REQUIRED_FIELD
        """
        customer_name = str(data.get("customerName") or "").strip()
        if not customer_name:
            raise ValidationError(
                ErrorCodes.MISSING_REQUIRED_FIELD,
                "customerName is required",
                field="customerName",
            )

        raw_items = data.get("items")
        if not isinstance(raw_items, list) or not raw_items:
            raise ValidationError(
                ErrorCodes.MISSING_REQUIRED_FIELD,
                "items must be a non-empty list",
                field="items",
            )

        try:
            items = [OrderItem.from_dict(item) for item in raw_items]
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(
                ErrorCodes.MISSING_REQUIRED_FIELD,
                f"Invalid order item: {e}",
                field="items",
            ) from e

        with json_file_lock(self.orders_path):
            records = self._load()
            order = Order(
                id=generate_order_id(),
                order_number=format_order_number(self._next_sequence(records)),
                customer_name=customer_name,
                customer_phone=data.get("customerPhone"),
                notes=data.get("notes"),
                items=items,
                created_at=datetime.now(UTC).isoformat(),
                pending=True,
            )
            records.append(order.to_dict())
            atomic_write_json(self.orders_path, records)

        logger.info(f"Order created: {order.order_number} ({len(items)} items)")
        return order

    # =========================================================================
    # Read
    # =========================================================================

    def list_orders(self) -> list[Order]:
        """전체 주문 (최신순)."""
        orders = [Order.from_dict(r) for r in self._load()]
        orders.sort(key=lambda o: o.created_at, reverse=True)
        return orders

    def list_orders_by_date(self, day: str) -> list[Order]:
        """
        특정 날짜(UTC, YYYY-MM-DD)에 생성된 주문.

        Raises:
            ValidationError: INVALID_DATE
        """
        try:
            date.fromisoformat(day)
        except ValueError:
            raise ValidationError(
                ErrorCodes.INVALID_DATE,
                f"Invalid date: {day!r} (expected YYYY-MM-DD)",
                date=day,
            ) from None

        return [o for o in self.list_orders() if o.created_at[:10] == day]

    def list_orders_by_number(self, order_number: str) -> list[Order]:
        """주문 번호로 조회."""
        return [o for o in self.list_orders() if o.order_number == order_number]

    # =========================================================================
    # Update
    # =========================================================================

    def update_order_status(self, order_id: str, pending: bool) -> Order:
        """
        주문 상태 변경.

        Raises:
            ValidationError: MISSING_REQUIRED_FIELD
            NotFoundError: ORDER_NOT_FOUND
        """
        if not order_id:
            raise ValidationError(
                ErrorCodes.MISSING_REQUIRED_FIELD,
                "Order id is required",
                field="id",
            )

        with json_file_lock(self.orders_path):
            records = self._load()
            for record in records:
                if record.get("id") == order_id:
                    record["pending"] = pending
                    atomic_write_json(self.orders_path, records)
                    logger.info(f"Order {record.get('orderNumber')} pending={pending}")
                    return Order.from_dict(record)

        raise NotFoundError(
            ErrorCodes.ORDER_NOT_FOUND,
            f"Order '{order_id}' not found",
            id=order_id,
        )

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _load(self) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = load_json(self.orders_path, default=[])
        return records

    @staticmethod
    def _next_sequence(records: list[dict[str, Any]]) -> int:
        numbers = [
            int(r["orderNumber"])
            for r in records
            if str(r.get("orderNumber", "")).isdigit()
        ]
        return max(numbers, default=0) + 1
