"""
Order routes
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import get_db
from app.core.error_handler import error_response
from app.core.exceptions import OrderLookupError
from app.core.rate_limit import limiter
from app.schemas.order import OrderDetailResponse, OrderLookupRequest
from app.services.order_service import OrderService, order_to_dict

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("", response_model=OrderDetailResponse)
async def get_order(
    id: Optional[str] = Query(None, description="Order UUID"),
    db: AsyncSession = Depends(get_db),
):
    """Order confirmation page data"""
    try:
        order = await OrderService(db).get_by_id(id)
    except OrderLookupError as e:
        return error_response(e)
    return {"order": order_to_dict(order)}


@router.post("/lookup", response_model=OrderDetailResponse)
@limiter.limit(settings.RATE_LIMIT_LOOKUP)
async def lookup_order(
    request: Request,
    payload: OrderLookupRequest,
    db: AsyncSession = Depends(get_db),
):
    """Guest order tracking by e-mail and order number"""
    try:
        order = await OrderService(db).lookup(payload.email, payload.order_number)
    except OrderLookupError as e:
        return error_response(e)
    return {"order": order_to_dict(order)}
