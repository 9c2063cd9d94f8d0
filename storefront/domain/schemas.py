# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated, List
from decimal import Decimal
from datetime import datetime

#kwoty w JSON jako liczby, nie stringi
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class ApiModel(BaseModel):
    """Wspolna baza: camelCase na zewnatrz, snake_case w kodzie."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =====================================================
# USERS / ADDRESSES
# =====================================================
class UserCreate(ApiModel):
    """Schema dla tworzenia użytkownika."""

    user_name: str = Field(..., min_length=1, max_length=100, description="Imię i nazwisko")
    email: str = Field(..., min_length=3, max_length=255, pattern=r"^[^@\s]+@[^@\s]+$")


class UserRead(ApiModel):
    id: int
    user_name: str
    email: str


class ShippingAddressIn(ApiModel):
    street_address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    country: str = Field(..., min_length=1, max_length=100)
    phone: str = Field(..., max_length=20, pattern=r"^01[0125][0-9]{8}$")


class ShippingAddressOut(ApiModel):
    id: int
    user_id: int
    street_address: str
    city: str
    state: str
    country: str
    phone: str


# =====================================================
# CART
# =====================================================
class ItemIn(ApiModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    size: str = Field(..., min_length=1, max_length=10)
    quantity: int = Field(..., gt=0, description="Ilość produktu (musi być > 0)")


class ItemUpdate(ApiModel):
    cart_item_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class CartItemOut(ApiModel):
    """Schema dla produktu w koszyku (response)."""

    cart_item_id: int
    product_id: int
    product_name: str
    size: str
    quantity: int
    price: Money
    subtotal: Money


class CartOut(ApiModel):
    """Schema dla koszyka (response)."""

    cart_id: int
    user_id: int
    items: List[CartItemOut]
    total: Money
    item_count: int


class CartSummaryOut(ApiModel):
    item_count: int
    total: Money


class MessageOut(ApiModel):
    message: str


# =====================================================
# CHECKOUT / ORDERS
# =====================================================
class CheckoutIn(ApiModel):
    shipping_address_id: int = Field(..., gt=0)
    payment_method: str = Field(..., min_length=1, max_length=20)


class CheckoutOut(ApiModel):
    message: str
    order_id: int
    total: Money


class OrderDetailOut(ApiModel):
    id: int
    product_id: int
    product_name: str
    size: str
    quantity: int
    price: Money
    subtotal: Money


class OrderOut(ApiModel):
    """Schema dla zamówienia (response)."""

    id: int
    user_id: int
    shipping_address_id: int
    subtotal: Money
    shipping_cost: Money
    total: Money
    status: str
    payment_method: str
    payment_status: str
    created_at: datetime
    shipping_address: ShippingAddressOut | None = None
    details: List[OrderDetailOut] = []


class OrderStatusIn(ApiModel):
    status: str


class PaymentStatusIn(ApiModel):
    payment_status: str
