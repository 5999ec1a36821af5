"""
Shipping Schemas

Pydantic models for the checkout shipping quote API.
"""
from typing import Optional, List
from pydantic import BaseModel, Field


class CalculatedPrice(BaseModel):
    """Price after promotions, in minor units."""
    calculated_amount: int


class QuotedOption(BaseModel):
    """
    A shipping option as presented to the shopper, post-discount.

    `amount` always equals `calculated_price.calculated_amount`; the nested
    shape is what the cart and checkout pages read.
    """
    id: int
    name: str
    amount: int = Field(..., ge=0, description="Quoted amount in minor units")
    is_tax_inclusive: bool = True
    estimated_days: Optional[str] = None
    calculated_price: CalculatedPrice


class ShippingQuoteResponse(BaseModel):
    """Shipping options available for a subtotal."""
    options: List[QuotedOption] = []


class FreeShippingProgress(BaseModel):
    """Cart progress toward the free-shipping threshold."""
    threshold: int
    subtotal: int
    qualifies: bool
    remaining: int = Field(..., ge=0, description="Minor units still needed")
    progress: float = Field(..., ge=0, le=1)
