# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Path

from storefront.api.deps import get_order_service
from storefront.api.errors import unwrap
from storefront.domain.schemas import OrderOut, OrderStatusIn, PaymentStatusIn
from storefront.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/user/{user_id}", response_model=List[OrderOut])
def list_user_orders(user_id: int = Path(..., gt=0), svc: OrderService = Depends(get_order_service)):
    """
    Zamowienia uzytkownika, najnowsze pierwsze.
    """
    return unwrap(svc.list_user_orders(user_id))


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: int = Path(..., gt=0), svc: OrderService = Depends(get_order_service)):
    """
    Pobiera szczegóły zamówienia.
    """
    return unwrap(svc.get_order(order_id))


@router.put("/{order_id}/status", response_model=OrderOut)
def update_status(
    payload: OrderStatusIn,
    order_id: int = Path(..., gt=0),
    svc: OrderService = Depends(get_order_service),
):
    return unwrap(svc.update_status(order_id, payload.status))


@router.put("/{order_id}/payment-status", response_model=OrderOut)
def update_payment_status(
    payload: PaymentStatusIn,
    order_id: int = Path(..., gt=0),
    svc: OrderService = Depends(get_order_service),
):
    return unwrap(svc.update_payment_status(order_id, payload.payment_status))
