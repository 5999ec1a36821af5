"""
Shipping option model

Flat-rate shipping methods offered at checkout. Rows are maintained from the
admin dashboard; the storefront only reads them.
"""
import enum

from sqlalchemy import Column, Integer, String, DateTime, Index

from app.core.database import Base
from app.core.utils import utcnow

FREE_SHIPPING_NAME = "Free Shipping"
STANDARD_SHIPPING_NAME = "Standard Shipping"


class ShippingTier(str, enum.Enum):
    """
    Promotional role of a shipping option.

    FREE and STANDARD are mutually exclusive at checkout: which one is shown
    depends on the free-shipping threshold.
    """
    FREE = "free"
    STANDARD = "standard"
    OTHER = "other"


def classify_tier(name: str) -> ShippingTier:
    """Map an option name to its tier. Matching is exact."""
    if name == FREE_SHIPPING_NAME:
        return ShippingTier.FREE
    if name == STANDARD_SHIPPING_NAME:
        return ShippingTier.STANDARD
    return ShippingTier.OTHER


class ShippingOption(Base):
    __tablename__ = "shipping_options"
    __table_args__ = (
        Index("ix_shipping_options_amount", "amount"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    amount = Column(Integer, nullable=False, default=0)  # minor units (cents)
    estimated_days = Column(String(50))  # display only, e.g. "3-5"

    created_at = Column(DateTime(timezone=True), default=utcnow)

    @property
    def tier(self) -> ShippingTier:
        return classify_tier(self.name)

    def __repr__(self) -> str:
        return f"<ShippingOption {self.name!r} amount={self.amount}>"
