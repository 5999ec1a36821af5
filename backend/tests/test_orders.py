"""
Tests for order confirmation and guest order tracking.
"""
import pytest

from app.core.exceptions import OrderLookupError, OrderNotFoundError
from app.services.order_service import (
    OrderService,
    format_order_number,
    is_uuid,
    order_to_dict,
    parse_order_number,
)

ORDER_ID = "3f1c2a9e-8b4d-4c1e-9a7f-2d6e5b8c9a01"


class TestOrderNumbers:

    @pytest.mark.parametrize("raw,expected", [
        ("AF-1042", 1042),
        ("af-1042", 1042),
        ("1042", 1042),
        (" AF-7 ", 7),
        (1042, 1042),
        ("AF-", None),
        ("order", None),
    ])
    def test_parse(self, raw, expected):
        assert parse_order_number(raw) == expected

    def test_format(self):
        assert format_order_number(1042) == "AF-1042"

    def test_is_uuid(self):
        assert is_uuid(ORDER_ID)
        assert not is_uuid("1042")
        assert not is_uuid("{" + ORDER_ID + "}")
        assert not is_uuid(ORDER_ID.replace("-", ""))
        assert not is_uuid("12345678-12341234-1234-1234-12345678")
        assert not is_uuid(ORDER_ID + "\n")
        assert is_uuid(ORDER_ID.upper())


class TestOrderToDict:

    def test_serializes_items(self, stored_order):
        data = order_to_dict(stored_order)

        assert data["display_id"] == 1042
        assert data["shipping_method"] == "Free Shipping"
        assert [i["title"] for i in data["items"]] == ["Aurora Gown", "Pearl Veil"]
        assert data["items"][0]["metadata"]["color"] == "Ivory"


class TestOrderService:

    @pytest.mark.asyncio
    async def test_get_by_id_validation(self, mock_db):
        service = OrderService(mock_db)

        with pytest.raises(OrderLookupError, match="Missing order ID"):
            await service.get_by_id(None)
        with pytest.raises(OrderLookupError, match="Invalid order ID format"):
            await service.get_by_id("1042")

        mock_db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, mock_db, make_result):
        mock_db.execute.return_value = make_result(scalar=None)

        with pytest.raises(OrderNotFoundError) as exc_info:
            await OrderService(mock_db).get_by_id(ORDER_ID)

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_lookup_validation(self, mock_db):
        service = OrderService(mock_db)

        with pytest.raises(OrderLookupError, match="Email and order number are required"):
            await service.lookup("elona@example.com", "")
        with pytest.raises(OrderLookupError, match="Email and order number are required"):
            await service.lookup(None, "AF-1042")
        with pytest.raises(OrderLookupError, match="Invalid order number"):
            await service.lookup("elona@example.com", "AF-abc")

    @pytest.mark.asyncio
    async def test_lookup_match(self, mock_db, make_result, stored_order):
        mock_db.execute.return_value = make_result(scalar=stored_order)

        order = await OrderService(mock_db).lookup(" Elona@Example.com ", "af-1042")

        assert order is stored_order
        compiled = mock_db.execute.call_args.args[0].compile()
        assert compiled.params["display_id_1"] == 1042
        assert compiled.params["email_1"] == "elona@example.com"


class TestOrderEndpoints:
    """GET /api/orders and POST /api/orders/lookup"""

    def test_get_order(self, client, mock_db, make_result, stored_order):
        mock_db.execute.return_value = make_result(scalar=stored_order)

        resp = client.get("/api/orders", params={"id": ORDER_ID})

        assert resp.status_code == 200
        order = resp.json()["order"]
        assert order["id"] == ORDER_ID
        assert order["display_id"] == 1042
        assert order["total"] == 129000
        assert order["payment_status"] == "awaiting"
        assert len(order["items"]) == 2
        assert order["items"][1]["total"] == 9000

    def test_get_order_missing_id(self, client):
        resp = client.get("/api/orders")

        assert resp.status_code == 400
        assert resp.json() == {"error": "Missing order ID"}

    def test_get_order_invalid_id(self, client):
        resp = client.get("/api/orders?id=not-a-uuid")

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid order ID format"}

    def test_get_order_not_found(self, client, mock_db, make_result):
        mock_db.execute.return_value = make_result(scalar=None)

        resp = client.get("/api/orders", params={"id": ORDER_ID})

        assert resp.status_code == 404
        assert resp.json() == {"error": "Order not found"}

    @pytest.mark.parametrize("number", ["AF-1042", "af-1042", "1042", 1042])
    def test_lookup(self, client, mock_db, make_result, stored_order, number):
        mock_db.execute.return_value = make_result(scalar=stored_order)

        resp = client.post(
            "/api/orders/lookup",
            json={"email": "elona@example.com", "orderNumber": number},
        )

        assert resp.status_code == 200
        assert resp.json()["order"]["display_id"] == 1042

    def test_lookup_missing_fields(self, client):
        resp = client.post("/api/orders/lookup", json={"email": "elona@example.com"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Email and order number are required"}

    def test_lookup_invalid_number(self, client):
        resp = client.post(
            "/api/orders/lookup",
            json={"email": "elona@example.com", "orderNumber": "AF-x"},
        )

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid order number"}

    def test_lookup_not_found(self, client, mock_db, make_result):
        mock_db.execute.return_value = make_result(scalar=None)

        resp = client.post(
            "/api/orders/lookup",
            json={"email": "someone@example.com", "orderNumber": "AF-1"},
        )

        assert resp.status_code == 404
        assert resp.json() == {"error": "Order not found. Please check your email and order number."}

    def test_get_order_misplaced_hyphens(self, client, mock_db):
        resp = client.get("/api/orders?id=12345678-12341234-1234-1234-12345678")

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid order ID format"}
        mock_db.execute.assert_not_awaited()

    def test_lookup_oversized_number(self, client, mock_db):
        resp = client.post(
            "/api/orders/lookup",
            json={"email": "elona@example.com", "orderNumber": "AF-" + "9" * 5000},
        )

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid order number"}
