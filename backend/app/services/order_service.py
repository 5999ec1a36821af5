"""
Order Service

Read-only order access for the confirmation page and guest order tracking.
"""
import logging
import re
from typing import Any, Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.config import settings
from app.core.exceptions import OrderLookupError, OrderNotFoundError
from app.core.utils import parse_int_prefix
from app.models.order import Order

logger = logging.getLogger(__name__)


def format_order_number(display_id: int) -> str:
    return f"{settings.ORDER_NUMBER_PREFIX}-{display_id}"


def parse_order_number(value: Any) -> Optional[int]:
    """Accept "AF-123", "af-123" or "123"."""
    prefix = re.escape(settings.ORDER_NUMBER_PREFIX)
    stripped = re.sub(rf"^{prefix}-", "", str(value).strip(), flags=re.IGNORECASE)
    return parse_int_prefix(stripped)


_CANONICAL_UUID = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)


def is_uuid(value: str) -> bool:
    """Canonical 8-4-4-4-12 hex form only."""
    return bool(_CANONICAL_UUID.fullmatch(value))


def order_to_dict(order: Order) -> Dict[str, Any]:
    """Serialize an order and its items for the storefront."""
    return {
        "id": order.id,
        "display_id": order.display_id,
        "email": order.email,
        "status": order.status,
        "created_at": order.created_at,
        "items": [
            {
                "id": item.id,
                "title": item.title,
                "subtitle": item.subtitle,
                "thumbnail": item.thumbnail,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total": item.total,
                "metadata": item.item_metadata,
            }
            for item in (order.items or [])
        ],
        "shipping_address": order.shipping_address,
        "shipping_method": order.shipping_method,
        "currency_code": order.currency_code,
        "subtotal": order.subtotal,
        "shipping_total": order.shipping_total,
        "total": order.total,
        "payment_status": order.payment_status,
        "fulfillment_status": order.fulfillment_status,
    }


class OrderService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, order_id: Optional[str]) -> Order:
        """
        Fetch an order for the confirmation page.

        Raises:
            OrderLookupError: id missing or not a UUID
            OrderNotFoundError: no such order
        """
        if not order_id:
            raise OrderLookupError("Missing order ID")
        if not is_uuid(order_id):
            raise OrderLookupError("Invalid order ID format")

        result = await self.db.execute(
            select(Order)
            .where(Order.id == order_id.lower())
            .options(selectinload(Order.items))
        )
        order = result.scalar_one_or_none()
        if not order:
            raise OrderNotFoundError("Order not found")
        return order

    async def lookup(self, email: Optional[str], order_number: Any) -> Order:
        """
        Guest order tracking by e-mail and public order number.

        Raises:
            OrderLookupError: missing fields or unparsable order number
            OrderNotFoundError: no order with that number for that e-mail
        """
        if not email or order_number is None or order_number == "":
            raise OrderLookupError("Email and order number are required")

        display_id = parse_order_number(order_number)
        if display_id is None:
            raise OrderLookupError("Invalid order number")

        result = await self.db.execute(
            select(Order)
            .where(
                Order.display_id == display_id,
                Order.email == email.lower().strip(),
            )
            .options(selectinload(Order.items))
        )
        order = result.scalar_one_or_none()
        if not order:
            logger.info(f"Order lookup miss for {format_order_number(display_id)}")
            raise OrderNotFoundError("Order not found. Please check your email and order number.")
        return order
