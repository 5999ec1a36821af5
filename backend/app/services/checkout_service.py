"""
Checkout Service

Creates guest orders from the storefront cart. Totals are computed here from
the submitted line items; the client never supplies a subtotal.
"""
import logging
import uuid
from typing import List, Optional, Tuple, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import CheckoutError, OrderCreateError
from app.core.utils import parse_int_prefix
from app.models.order import Order, OrderItem
from app.models.shipping_option import ShippingOption, STANDARD_SHIPPING_NAME
from app.schemas.order import CheckoutItem, CheckoutRequest

logger = logging.getLogger(__name__)

EXPRESS_SHIPPING_NAME = "Express Shipping"

# Option ids the cart drawer sends before the catalog has loaded
BUILTIN_OPTION_IDS = ("standard", "express")


def item_subtitle(item: CheckoutItem) -> Optional[str]:
    """Join color and size as "<color> / <size>", skipping missing parts."""
    parts = [part for part in (item.color, item.size) if part]
    return " / ".join(parts) or None


def build_order_items(items: List[CheckoutItem]) -> Tuple[int, List[dict]]:
    """
    Snapshot cart lines into order item rows.

    Returns:
        Tuple of (subtotal, item rows without order_id)
    """
    subtotal = 0
    rows = []
    for item in items:
        line_total = item.price * item.quantity
        subtotal += line_total
        rows.append({
            "title": item.title,
            "subtitle": item_subtitle(item),
            "thumbnail": item.thumbnail,
            "quantity": item.quantity,
            "unit_price": item.price,
            "total": line_total,
            "item_metadata": {
                "handle": item.handle,
                "size": item.size or None,
                "color": item.color or None,
            },
        })
    return subtotal, rows


class CheckoutService:
    """Order creation for the storefront checkout page."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_shipping_method(self, option_id: Optional[Union[int, str]]) -> str:
        """
        Name of the shipping method recorded on the order.

        Unknown or unreadable ids fall back to Standard Shipping.
        """
        if option_id is None or option_id == "":
            return STANDARD_SHIPPING_NAME

        key = str(option_id)
        if key == "express":
            return EXPRESS_SHIPPING_NAME
        if key in BUILTIN_OPTION_IDS:
            return STANDARD_SHIPPING_NAME

        pk = parse_int_prefix(key)
        if pk is None or str(pk) != key.strip():
            logger.info(f"Ignoring non-numeric shipping option id {key!r}")
            return STANDARD_SHIPPING_NAME

        try:
            result = await self.db.execute(
                select(ShippingOption.name).where(ShippingOption.id == pk)
            )
            name = result.scalar_one_or_none()
        except Exception as e:
            logger.warning(f"Shipping option lookup failed for id {pk}: {e}")
            return STANDARD_SHIPPING_NAME

        return name or STANDARD_SHIPPING_NAME

    async def create_order(self, payload: CheckoutRequest) -> Order:
        """
        Create an order and its items.

        Raises:
            CheckoutError: email or items missing
            OrderCreateError: the order row could not be written
        """
        email = (payload.email or "").strip().lower()
        if not email or not payload.items:
            raise CheckoutError("Missing required fields")

        subtotal, item_rows = build_order_items(payload.items)
        shipping_total = payload.shipping_cost or 0
        shipping_method = await self.resolve_shipping_method(payload.shipping_option_id)

        order = Order(
            id=str(uuid.uuid4()),
            email=email,
            status="pending",
            fulfillment_status="not_fulfilled",
            payment_status="awaiting",
            currency_code=settings.STORE_CURRENCY,
            subtotal=subtotal,
            shipping_total=shipping_total,
            total=subtotal + shipping_total,
            shipping_address=payload.shipping_address,
            billing_address=payload.shipping_address,
            shipping_method=shipping_method,
            order_metadata={"note": payload.order_note} if payload.order_note else {},
        )

        try:
            self.db.add(order)
            await self.db.flush()
        except Exception as e:
            logger.error(f"Order creation error: {type(e).__name__}: {e}")
            await self.db.rollback()
            raise OrderCreateError(
                "Failed to create order",
                details={"email": order.email, "total": order.total},
            ) from e

        # Items go in a savepoint so a bad line never loses the order itself
        try:
            async with self.db.begin_nested():
                for row in item_rows:
                    self.db.add(OrderItem(order_id=order.id, **row))
                await self.db.flush()
        except Exception as e:
            logger.error(f"Order items error for order {order.id}: {type(e).__name__}: {e}")

        logger.info(
            f"Order {order.id} created: {len(item_rows)} items, "
            f"subtotal={subtotal} shipping={shipping_total} method={shipping_method!r}"
        )
        return order
