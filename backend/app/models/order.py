"""
Order models

Guest checkout orders. Money columns are integers in minor currency units.
The public order number is `<ORDER_NUMBER_PREFIX>-<display_id>`.
"""
import uuid
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, JSON, Identity
from sqlalchemy.orm import relationship

from app.core.database import Base
from app.core.utils import utcnow


class Order(Base):
    __tablename__ = "orders"
    # display_id is assigned by the database; fetch it on INSERT
    __mapper_args__ = {"eager_defaults": True}

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    display_id = Column(Integer, Identity(), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=False, index=True)

    # pending, completed, cancelled
    status = Column(String(20), nullable=False, default="pending")
    fulfillment_status = Column(String(20), nullable=False, default="not_fulfilled")
    payment_status = Column(String(20), nullable=False, default="awaiting")

    # Pricing
    currency_code = Column(String(3), nullable=False, default="eur")
    subtotal = Column(Integer, nullable=False)
    shipping_total = Column(Integer, nullable=False, default=0)
    total = Column(Integer, nullable=False)

    # Shipping
    shipping_address = Column(JSON)
    billing_address = Column(JSON)
    shipping_method = Column(String(100))

    # "metadata" is reserved on declarative classes
    order_metadata = Column("metadata", JSON, default=dict)

    created_at = Column(DateTime(timezone=True), default=utcnow)

    items = relationship("OrderItem", back_populates="order", order_by="OrderItem.id")


class OrderItem(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)

    # Snapshot of the cart line at time of order
    title = Column(String(255), nullable=False)
    subtitle = Column(String(255))  # "<color> / <size>"
    thumbnail = Column(String(500))
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Integer, nullable=False)
    total = Column(Integer, nullable=False)
    item_metadata = Column("metadata", JSON, default=dict)

    order = relationship("Order", back_populates="items")
