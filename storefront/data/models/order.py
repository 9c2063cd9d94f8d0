from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from storefront.data.database import Base
from storefront.domain.enums import OrderStatus, PaymentStatus


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    shipping_address_id = Column(Integer, ForeignKey("shipping_addresses.id"), nullable=False)

    subtotal = Column(Numeric(10, 2), nullable=False)
    shipping_cost = Column(Numeric(10, 2), nullable=False)
    total = Column(Numeric(10, 2), nullable=False)  # subtotal + shipping_cost

    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    payment_method = Column(String(20), nullable=False)
    payment_status = Column(String(20), nullable=False, default=PaymentStatus.PENDING.value)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=True)

    shipping_address = relationship("ShippingAddressModel")
    details = relationship(
        "OrderDetailModel",
        back_populates="order",
        order_by="OrderDetailModel.id",
        cascade="all, delete-orphan",
    )
