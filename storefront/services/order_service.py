# storefront/services/order_service.py
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy.exc import SQLAlchemyError

from storefront.data.models.order import OrderModel
from storefront.domain.enums import OrderStatus, PaymentStatus, enum_values
from storefront.domain.results import Err, Ok, Result, ServiceError
from storefront.repos.order_repo import OrderRepo
from storefront.utils.db_guard import persistence_guard
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domenę zamówień (odczyt i zmiany statusow).
    Zamowienia powstaja tylko przez CheckoutService, kwoty i pozycje sa niezmienne.
    """

    def __init__(self, orders: OrderRepo):
        self.orders = orders

    @persistence_guard("Error retrieving order", "orders")
    def get_order(self, order_id: int) -> Result:
        order = self.orders.get_order(order_id)

        if not order:
            return Err(ServiceError.not_found(f"Order with ID {order_id} not found"))

        return Ok(order_view(order))

    @persistence_guard("Error retrieving orders", "orders")
    def list_user_orders(self, user_id: int) -> Result:
        return Ok([order_view(o) for o in self.orders.list_user_orders(user_id)])

    def update_status(self, order_id: int, status: str) -> Result:
        valid = enum_values(OrderStatus)
        if status not in valid:
            return Err(
                ServiceError.validation(f"Invalid status. Valid statuses are: {', '.join(valid)}")
            )
        return self._set_field(order_id, "status", status)

    def update_payment_status(self, order_id: int, payment_status: str) -> Result:
        valid = enum_values(PaymentStatus)
        if payment_status not in valid:
            return Err(
                ServiceError.validation(
                    f"Invalid payment status. Valid statuses are: {', '.join(valid)}"
                )
            )
        return self._set_field(order_id, "payment_status", payment_status)

    @persistence_guard("Failed to update order", "orders")
    def _set_field(self, order_id: int, field: str, value: str) -> Result:
        order = self.orders.get_order(order_id)
        if not order:
            return Err(ServiceError.not_found(f"Order with ID {order_id} not found"))

        try:
            setattr(order, field, value)
            order.updated_at = datetime.now(timezone.utc)
            self.orders.commit()
        except SQLAlchemyError:
            self.orders.rollback()
            logger.exception(f"Failed to update {field} of order {order_id} to {value}")
            return Err(ServiceError.persistence(f"Failed to update order {field}"))

        logger.info(f"Order {order_id} {field} -> {value}")
        return Ok(order_view(self.orders.refresh(order)))


def order_view(order: OrderModel) -> Dict[str, Any]:
    address = order.shipping_address
    return {
        "id": order.id,
        "user_id": order.user_id,
        "shipping_address_id": order.shipping_address_id,
        "subtotal": order.subtotal,
        "shipping_cost": order.shipping_cost,
        "total": order.total,
        "status": order.status,
        "payment_method": order.payment_method,
        "payment_status": order.payment_status,
        "created_at": order.created_at,
        "shipping_address": address_view(address) if address else None,
        "details": [
            {
                "id": d.id,
                "product_id": d.product_id,
                "product_name": d.product.product_name if d.product else "Unknown Product",
                "size": d.size,
                "quantity": d.quantity,
                "price": d.price,
                "subtotal": d.subtotal,
            }
            for d in order.details
        ],
    }


def address_view(address) -> Dict[str, Any]:
    return {
        "id": address.id,
        "user_id": address.user_id,
        "street_address": address.street_address,
        "city": address.city,
        "state": address.state,
        "country": address.country,
        "phone": address.phone,
    }
