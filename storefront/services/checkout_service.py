# storefront/services/checkout_service.py
import uuid
from decimal import Decimal

from redis.exceptions import RedisError
from sqlalchemy.exc import SQLAlchemyError

from storefront.data.models.order import OrderModel
from storefront.data.models.order_detail import OrderDetailModel
from storefront.domain.enums import OrderStatus, PaymentStatus
from storefront.domain.pricing import line_subtotal, lines_total, money, order_total
from storefront.domain.results import Err, Ok, Result, ServiceError
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.lock_service import LockService
from storefront.services.notification_service import NotificationService
from storefront.utils.db_guard import persistence_guard
from storefront.utils.settings import CHECKOUT_LOCK_TTL_SECONDS, SHIPPING_COST
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Use Case: zlozenie zamowienia z koszyka.

    1. Blokada checkoutu dla uzytkownika (Redis)
    2. Walidacja: koszyk niepusty, adres nalezy do uzytkownika, stan magazynowy
    3. Subtotal z aktualnych cen + stala oplata za wysylke
    4. Order + OrderDetail (cena zamrozona) + usuniecie pozycji koszyka
       w jednej transakcji
    5. Powiadomienie (async) po commicie

    Walidacja odbywa sie przed jakimkolwiek zapisem.
    """

    def __init__(
        self,
        carts: CartRepo,
        orders: OrderRepo,
        addresses: AddressRepo,
        products: ProductRepo,
        lock_service: LockService,
        notification_service: NotificationService,
        shipping_cost: Decimal = SHIPPING_COST,
        lock_ttl: int = CHECKOUT_LOCK_TTL_SECONDS,
    ):
        self.carts = carts
        self.orders = orders
        self.addresses = addresses
        self.products = products
        self.lock_service = lock_service
        self.notification_service = notification_service
        self.shipping_cost = money(shipping_cost)
        self.lock_ttl = lock_ttl

    def checkout(self, user_id: int, shipping_address_id: int, payment_method: str) -> Result:
        token = uuid.uuid4().hex

        try:
            locked = self.lock_service.acquire_checkout_lock(user_id, token, self.lock_ttl)
        except RedisError:
            logger.exception(f"Lock store unavailable, checkout for user {user_id} aborted")
            return Err(ServiceError.unavailable("Checkout temporarily unavailable"))

        if not locked:
            logger.warning(f"Checkout already in progress for user {user_id}")
            return Err(ServiceError.conflict("Checkout already in progress"))

        try:
            return self._place_order(user_id, shipping_address_id, payment_method)
        finally:
            try:
                self.lock_service.release_checkout_lock(user_id, token)
            except RedisError:
                #lock i tak wygasnie po TTL
                logger.warning(f"Failed to release checkout lock for user {user_id}")

    @persistence_guard("Error during checkout", "orders")
    def _place_order(self, user_id: int, shipping_address_id: int, payment_method: str) -> Result:
        cart = self.carts.get_cart_by_user(user_id)
        items = self.carts.get_cart_items(cart.id) if cart else []

        if not items:
            logger.warning(f"Checkout rejected for user {user_id}: cart is empty")
            return Err(ServiceError.validation("Cart is empty"))

        address = self.addresses.get_user_address(shipping_address_id, user_id)
        if not address:
            logger.warning(
                f"Checkout rejected for user {user_id}: address {shipping_address_id} not found or not owned"
            )
            return Err(ServiceError.validation("Invalid shipping address"))

        for item in items:
            stock = self.products.get_product_size(item.product_id, item.size)
            if not stock or stock.quantity < item.quantity:
                logger.warning(
                    f"Checkout rejected for user {user_id}: not enough stock "
                    f"for product {item.product_id} size {item.size}"
                )
                return Err(
                    ServiceError.validation(
                        f"Not enough stock for product {item.product_id} in size {item.size}"
                    )
                )

        #ceny czytane raz, te same ida do subtotalu i do OrderDetail
        lines = [(item, money(item.product.price)) for item in items]
        subtotal = lines_total((price, item.quantity) for item, price in lines)
        total = order_total(subtotal, self.shipping_cost)

        try:
            order = self.orders.add_order(
                OrderModel(
                    user_id=user_id,
                    shipping_address_id=address.id,
                    subtotal=subtotal,
                    shipping_cost=self.shipping_cost,
                    total=total,
                    status=OrderStatus.PENDING.value,
                    payment_method=payment_method,
                    payment_status=PaymentStatus.PENDING.value,
                )
            )

            for item, price in lines:
                self.orders.add_order_detail(
                    OrderDetailModel(
                        order_id=order.id,
                        product_id=item.product_id,
                        size=item.size,
                        quantity=item.quantity,
                        price=price,
                        subtotal=line_subtotal(price, item.quantity),
                    )
                )

            #tylko przeczytane pozycje, linie dodane w trakcie zostaja w koszyku
            self.carts.delete_items([item.id for item, _ in lines])
            self.orders.commit()
        except SQLAlchemyError:
            #nic nie zostaje: ani zamowienie, ani zmiany w koszyku
            self.orders.rollback()
            logger.exception(f"Error during checkout for user {user_id}")
            return Err(ServiceError.persistence("Error during checkout"))

        order_id = order.id
        logger.info(f"Order {order_id} placed by user {user_id}, total {total}")

        try:
            self.notification_service.send_order_placed(user_id, order_id, total)
        except Exception:
            #zamowienie jest juz zapisane, brak brokera nie cofa checkoutu
            logger.exception(f"Failed to enqueue notification for order {order_id}")

        return Ok({
            "message": "Order placed successfully",
            "order_id": order_id,
            "total": total,
        })
