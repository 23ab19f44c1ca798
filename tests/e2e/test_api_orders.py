"""
test_api_orders.py - Orders API E2E 테스트

엔드포인트:
- POST /api/orders
- GET /api/orders[?date=|?order=]
- PATCH /api/orders
"""

from unittest.mock import patch


def _create(client, sample_order: dict) -> dict:
    response = client.post("/api/orders", json=sample_order)
    assert response.status_code == 200
    return response.json()


class TestCreateOrder:
    """POST /api/orders."""

    def test_create(self, client, sample_order):
        order = _create(client, sample_order)

        assert order["orderNumber"] == "0001"
        assert order["customerName"] == "홍길동"
        assert order["pending"] is True
        assert len(order["items"]) == 2

    def test_missing_customer(self, client):
        response = client.post("/api/orders", json={"items": [{"code": "A1"}]})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "MISSING_REQUIRED_FIELD"
        assert "customerName" in body["message"]
        assert "timestamp" in body

    def test_not_json(self, client):
        response = client.post(
            "/api/orders", content=b"not json", headers={"content-type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid body"

    def test_unexpected_failure(self, client, sample_order):
        """예상 못한 실패 → 500 + 공통 에러 형태."""
        with patch(
            "src.app.services.order_store.OrderStore.create_order",
            side_effect=RuntimeError("disk full"),
        ):
            response = client.post("/api/orders", json=sample_order)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Internal server error"
        assert body["message"] == "disk full"


class TestListOrders:
    """GET /api/orders."""

    def test_all(self, client, sample_order):
        _create(client, sample_order)
        _create(client, sample_order)

        response = client.get("/api/orders")

        assert [o["orderNumber"] for o in response.json()] == ["0002", "0001"]

    def test_by_number(self, client, sample_order):
        _create(client, sample_order)
        second = _create(client, sample_order)

        response = client.get("/api/orders", params={"order": "0002"})

        assert [o["id"] for o in response.json()] == [second["id"]]

    def test_by_date(self, client, sample_order):
        order = _create(client, sample_order)

        today = client.get("/api/orders", params={"date": order["createdAt"][:10]})
        other = client.get("/api/orders", params={"date": "2000-01-01"})

        assert len(today.json()) == 1
        assert other.json() == []

    def test_order_takes_precedence_over_date(self, client, sample_order):
        order = _create(client, sample_order)

        response = client.get(
            "/api/orders", params={"order": "0001", "date": "2000-01-01"}
        )

        assert [o["id"] for o in response.json()] == [order["id"]]

    def test_invalid_date(self, client):
        response = client.get("/api/orders", params={"date": "yesterday"})

        assert response.status_code == 400
        assert response.json()["error"] == "INVALID_DATE"


class TestCompleteOrder:
    """PATCH /api/orders."""

    def test_complete(self, client, sample_order):
        order = _create(client, sample_order)

        response = client.patch("/api/orders", json={"id": order["id"]})

        assert response.status_code == 200
        assert response.json()["pending"] is False
        assert client.get("/api/orders").json()[0]["pending"] is False

    def test_missing_id(self, client):
        response = client.patch("/api/orders", json={})

        assert response.status_code == 400
        assert response.json()["error"] == "Order id is required"

    def test_unknown_id(self, client, sample_order):
        _create(client, sample_order)

        response = client.patch("/api/orders", json={"id": "nope"})

        assert response.status_code == 404
        assert response.json()["error"] == "ORDER_NOT_FOUND"
