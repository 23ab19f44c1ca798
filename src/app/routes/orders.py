"""
Orders Routes: 주문 생성 / 조회 / 완료 처리.

- POST  /api/orders            → 주문 생성 (JSON body)
- GET   /api/orders?order=<no> → 주문 번호로 조회
- GET   /api/orders?date=<d>   → 날짜(YYYY-MM-DD)로 조회
- GET   /api/orders            → 전체
- PATCH /api/orders  {id}      → 주문 완료 (pending=false)

에러: {error, message, timestamp}, 필수 값 누락 400, 예상 못한 실패 500
"""

import logging
from typing import Any

from fastapi import APIRouter, Request

from src.app.responses import error_response, internal_error_response
from src.app.services.order_store import OrderStore
from src.domain.errors import CatalogError

logger = logging.getLogger(__name__)

api_router = APIRouter()

ORDER_ID_REQUIRED = "Order id is required"
INVALID_BODY = "Invalid body"


def get_order_store(request: Request) -> OrderStore:
    """Request에서 OrderStore 가져오기."""
    return request.app.state.order_store


async def read_json_object(request: Request) -> dict[str, Any] | None:
    """JSON 객체 body. JSON이 아니거나 객체가 아니면 None."""
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


@api_router.post("")
async def create_order(request: Request) -> Any:
    """주문 생성."""
    try:
        logger.info("Creating order...")
        body = await read_json_object(request)
        if body is None:
            return error_response(INVALID_BODY, "Expected a JSON object", 400)
        order = get_order_store(request).create_order(body)
        return order.to_dict()
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Order creation failed: {e}", exc_info=True)
        return internal_error_response(e)


@api_router.get("")
async def list_orders(
    request: Request,
    date: str | None = None,
    order: str | None = None,
) -> Any:
    """주문 목록. order > date > 전체 순으로 적용."""
    try:
        store = get_order_store(request)
        if order:
            orders = store.list_orders_by_number(order)
        elif date:
            orders = store.list_orders_by_date(date)
        else:
            orders = store.list_orders()
        return [o.to_dict() for o in orders]
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Order listing failed: {e}", exc_info=True)
        return internal_error_response(e)


@api_router.patch("")
async def complete_order(request: Request) -> Any:
    """주문 완료 처리."""
    try:
        body = await read_json_object(request)
        order_id = body.get("id") if body else None

        if not order_id:
            return error_response(ORDER_ID_REQUIRED, "Missing 'id' in request body", 400)

        logger.info(f"Completing order {order_id}...")
        updated = get_order_store(request).update_order_status(str(order_id), pending=False)
        return updated.to_dict()
    except CatalogError:
        raise
    except Exception as e:
        logger.error(f"Order completion failed: {e}", exc_info=True)
        return internal_error_response(e, title="Failed to complete order")
