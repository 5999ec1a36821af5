"""
Checkout API Routes

Guest checkout: the storefront posts the cart, the order is recorded as
pending/awaiting payment. Rate limited to prevent abuse.
"""
import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.error_handler import error_response
from app.core.exceptions import CheckoutError
from app.core.rate_limit import limiter
from app.schemas.order import CheckoutOrder, CheckoutRequest, CheckoutResponse
from app.services.checkout_service import CheckoutService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/checkout", response_model=CheckoutResponse)
@limiter.limit(settings.RATE_LIMIT_CHECKOUT)
async def create_checkout_order(
    request: Request,
    payload: CheckoutRequest,
    db: AsyncSession = Depends(get_db),
):
    """
    Create an order from the cart.

    Subtotal and total are computed from the submitted line items.
    """
    service = CheckoutService(db)
    try:
        order = await service.create_order(payload)
    except CheckoutError as e:
        return error_response(e)

    return CheckoutResponse(
        order=CheckoutOrder(
            id=order.id,
            display_id=order.display_id,
            email=order.email,
            status=order.status,
            total=order.total,
            subtotal=order.subtotal,
            shipping_total=order.shipping_total,
        )
    )
