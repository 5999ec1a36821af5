# Services layer for business logic
from app.services.shipping_quote import ShippingQuoteService, resolve_shipping_options
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService

__all__ = [
    "ShippingQuoteService",
    "resolve_shipping_options",
    "CheckoutService",
    "OrderService",
]
