#storefront/api/routers/carts.py
from fastapi import APIRouter, Depends, Path

from storefront.api.deps import get_cart_service, get_checkout_service
from storefront.api.errors import unwrap
from storefront.domain.schemas import (
    CartOut,
    CartSummaryOut,
    CheckoutIn,
    CheckoutOut,
    ItemIn,
    ItemUpdate,
    MessageOut,
)
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/{user_id}", response_model=CartOut)
def get_cart(user_id: int = Path(..., gt=0), svc: CartService = Depends(get_cart_service)):
    return unwrap(svc.get_cart(user_id))


@router.post("/{user_id}/add", response_model=CartOut)
def add_item(
    payload: ItemIn,
    user_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    return unwrap(
        svc.add_item(
            user_id=user_id,
            product_id=payload.product_id,
            size=payload.size,
            quantity=payload.quantity,
        )
    )


@router.put("/{user_id}/update", response_model=CartOut)
def update_item(
    payload: ItemUpdate,
    user_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    return unwrap(svc.update_item(user_id, payload.cart_item_id, payload.quantity))


@router.delete("/{user_id}/items/{cart_item_id}", response_model=CartOut)
def remove_item(
    user_id: int = Path(..., gt=0),
    cart_item_id: int = Path(..., gt=0),
    svc: CartService = Depends(get_cart_service),
):
    return unwrap(svc.remove_item(user_id, cart_item_id))


@router.get("/{user_id}/summary", response_model=CartSummaryOut)
def get_summary(user_id: int = Path(..., gt=0), svc: CartService = Depends(get_cart_service)):
    return unwrap(svc.get_summary(user_id))


@router.delete("/{user_id}/clear", response_model=MessageOut)
def clear_cart(user_id: int = Path(..., gt=0), svc: CartService = Depends(get_cart_service)):
    return unwrap(svc.clear(user_id))


@router.post("/{user_id}/checkout", response_model=CheckoutOut)
def checkout(
    payload: CheckoutIn,
    user_id: int = Path(..., gt=0),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Zamienia koszyk w zamowienie (Order + OrderDetail) i czysci koszyk.
    Wszystko albo nic.
    """
    return unwrap(svc.checkout(user_id, payload.shipping_address_id, payload.payment_method))
