# storefront/domain/pricing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

CENT = Decimal("0.01")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def line_subtotal(price, quantity: int) -> Decimal:
    return money(money(price) * quantity)


def lines_total(lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
    """Suma (cena, ilosc) dla linii koszyka lub zamowienia."""
    return sum((line_subtotal(price, qty) for price, qty in lines), Decimal("0.00"))


def order_total(subtotal, shipping_cost) -> Decimal:
    return money(money(subtotal) + money(shipping_cost))
