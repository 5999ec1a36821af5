from app.models.shipping_option import (
    ShippingOption,
    ShippingTier,
    classify_tier,
    FREE_SHIPPING_NAME,
    STANDARD_SHIPPING_NAME,
)
from app.models.order import Order, OrderItem

__all__ = [
    "ShippingOption",
    "ShippingTier",
    "classify_tier",
    "FREE_SHIPPING_NAME",
    "STANDARD_SHIPPING_NAME",
    "Order",
    "OrderItem",
]
