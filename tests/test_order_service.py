from decimal import Decimal

import pytest
from sqlalchemy.exc import OperationalError

from storefront.domain.results import ErrorKind


@pytest.fixture
def placed_order(shop, fill_cart, make_checkout):
    fill_cart(shop.user_id, [(shop.shirt_id, "M", 1), (shop.shoes_id, "42", 2)])
    return make_checkout().checkout(shop.user_id, shop.address_id, "CashOnDelivery").value["order_id"]


def test_get_order_with_details_and_address(shop, placed_order, order_service):
    order = order_service.get_order(placed_order).value

    assert order["subtotal"] == Decimal("260.99")
    assert order["total"] == Decimal("270.99")
    assert order["shipping_address"]["city"] == "Cairo"
    assert [(d["product_name"], d["quantity"], d["subtotal"]) for d in order["details"]] == [
        ("Shirt", 1, Decimal("19.99")),
        ("Shoes", 2, Decimal("241.00")),
    ]


def test_get_missing_order(order_service):
    res = order_service.get_order(42)

    assert res.error.kind is ErrorKind.NOT_FOUND
    assert res.error.message == "Order with ID 42 not found"


def test_list_user_orders_newest_first(shop, fill_cart, make_checkout, order_service):
    checkout = make_checkout()
    fill_cart(shop.user_id, [(shop.shirt_id, "M", 1)])
    first = checkout.checkout(shop.user_id, shop.address_id, "Card").value["order_id"]
    fill_cart(shop.user_id, [(shop.shoes_id, "42", 1)])
    second = checkout.checkout(shop.user_id, shop.address_id, "Card").value["order_id"]

    orders = order_service.list_user_orders(shop.user_id).value

    assert [o["id"] for o in orders] == [second, first]
    assert order_service.list_user_orders(shop.other_user_id).value == []


def test_update_status(placed_order, order_service):
    res = order_service.update_status(placed_order, "Shipped")

    assert res.value["status"] == "Shipped"
    assert order_service.get_order(placed_order).value["status"] == "Shipped"


def test_update_status_rejects_unknown_value(placed_order, order_service):
    res = order_service.update_status(placed_order, "Lost")

    assert res.error.kind is ErrorKind.VALIDATION
    assert "Pending, Processing, Shipped, Delivered, Cancelled" in res.error.message
    assert order_service.get_order(placed_order).value["status"] == "Pending"


def test_update_payment_status(placed_order, order_service):
    assert order_service.update_payment_status(placed_order, "Paid").value["payment_status"] == "Paid"

    bad = order_service.update_payment_status(placed_order, "Refunded")
    assert bad.error.kind is ErrorKind.VALIDATION


def test_status_change_keeps_amounts(placed_order, order_service):
    before = order_service.get_order(placed_order).value

    after = order_service.update_status(placed_order, "Cancelled").value

    assert after["total"] == before["total"]
    assert after["details"] == before["details"]


def test_update_status_of_missing_order(order_service):
    assert order_service.update_status(7, "Shipped").error.kind is ErrorKind.NOT_FOUND


def test_database_error_is_a_persistence_error(placed_order, order_service, monkeypatch):
    def broken(*args):
        raise OperationalError("SELECT", {}, Exception("server closed the connection"))

    monkeypatch.setattr(order_service.orders, "get_order", broken)

    assert order_service.get_order(placed_order).error.kind is ErrorKind.PERSISTENCE
    assert order_service.update_status(placed_order, "Shipped").error.message == "Failed to update order"
