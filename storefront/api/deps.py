# storefront/api/deps.py
from fastapi import Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.services.order_service import OrderService
from storefront.services.user_service import UserService


def get_lock_service() -> LockService:
    return LockService()


def get_notification_service() -> NotificationService:
    return NotificationService()


def get_cart_service(db: Session = Depends(get_db)) -> CartService:
    return CartService(
        carts=CartRepo(db),
        products=ProductRepo(db),
        users=UserRepo(db),
    )


def get_checkout_service(
    db: Session = Depends(get_db),
    lock_service: LockService = Depends(get_lock_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> CheckoutService:
    return CheckoutService(
        carts=CartRepo(db),
        orders=OrderRepo(db),
        addresses=AddressRepo(db),
        products=ProductRepo(db),
        lock_service=lock_service,
        notification_service=notification_service,
    )


def get_order_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(OrderRepo(db))


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepo(db), AddressRepo(db))
