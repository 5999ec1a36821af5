"""
Order schemas

Request bodies use the camelCase keys the storefront sends; responses are
snake_case like the order rows.
"""
from datetime import datetime
from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, Field


class CheckoutItem(BaseModel):
    product_id: Optional[str] = Field(None, alias="productId")
    handle: Optional[str] = None
    title: str
    thumbnail: Optional[str] = None
    quantity: int = Field(..., ge=1)
    price: int = Field(..., ge=0, description="Unit price in minor units")
    size: Optional[str] = None
    color: Optional[str] = None

    class Config:
        populate_by_name = True


class CheckoutRequest(BaseModel):
    email: Optional[str] = None
    items: Optional[List[CheckoutItem]] = None
    shipping_address: Optional[Dict[str, Any]] = Field(None, alias="shippingAddress")
    shipping_option_id: Optional[Union[int, str]] = Field(None, alias="shippingOptionId")
    shipping_cost: Optional[int] = Field(None, ge=0, alias="shippingCost")
    order_note: Optional[str] = Field(None, alias="orderNote")

    class Config:
        populate_by_name = True


class CheckoutOrder(BaseModel):
    id: str
    display_id: Optional[int] = None
    email: str
    status: str
    total: int
    subtotal: int
    shipping_total: int


class CheckoutResponse(BaseModel):
    order: CheckoutOrder


class OrderLookupRequest(BaseModel):
    email: Optional[str] = None
    order_number: Optional[Union[str, int]] = Field(None, alias="orderNumber")

    class Config:
        populate_by_name = True


class OrderItemResponse(BaseModel):
    id: int
    title: str
    subtitle: Optional[str] = None
    thumbnail: Optional[str] = None
    quantity: int
    unit_price: int
    total: int
    metadata: Optional[Dict[str, Any]] = None


class OrderDetail(BaseModel):
    id: str
    display_id: Optional[int] = None
    email: str
    status: str
    created_at: Optional[datetime] = None
    items: List[OrderItemResponse] = []
    shipping_address: Optional[Dict[str, Any]] = None
    shipping_method: Optional[str] = None
    currency_code: Optional[str] = None
    subtotal: int
    shipping_total: int
    total: int
    payment_status: str
    fulfillment_status: str


class OrderDetailResponse(BaseModel):
    order: OrderDetail
