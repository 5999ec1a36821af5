"""
Shipping API Routes

Checkout shipping quote. Always answers 200: when the catalog is unavailable
the shopper gets an empty list and checkout carries on.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.schemas.shipping import FreeShippingProgress, ShippingQuoteResponse
from app.services.shipping_quote import (
    ShippingQuoteService,
    free_shipping_progress,
    normalize_subtotal,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/checkout", tags=["shipping"])


@router.get("/shipping", response_model=ShippingQuoteResponse)
async def get_shipping_options(
    subtotal: Optional[str] = Query(None, description="Cart subtotal in minor units (cents)"),
    db: AsyncSession = Depends(get_db),
):
    """
    Shipping options for the cart.

    Free Shipping replaces Standard Shipping once the subtotal reaches the
    free-shipping threshold.
    """
    service = ShippingQuoteService(db)
    options = await service.quote(subtotal)
    return ShippingQuoteResponse(options=options)


@router.get("/shipping/progress", response_model=FreeShippingProgress)
async def get_free_shipping_progress(
    subtotal: Optional[str] = Query(None, description="Cart subtotal in minor units (cents)"),
):
    """Progress bar data for the cart page."""
    return free_shipping_progress(normalize_subtotal(subtotal))
