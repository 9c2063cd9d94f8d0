from datetime import datetime, timezone
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.domain.pricing import line_subtotal, lines_total
from storefront.domain.results import Err, Ok, Result, ServiceError
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.utils.db_guard import persistence_guard
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka: odczyt (get, summary) i komendy (add, update, remove, clear).
    Koszyk tworzony leniwie przy pierwszym dostepie, jeden na uzytkownika.
    Ceny w koszyku sa zawsze aktualnymi cenami produktow.
    """

    def __init__(self, carts: CartRepo, products: ProductRepo, users: UserRepo):
        self.carts = carts
        self.products = products
        self.users = users

    #query - odczyt
    @persistence_guard("Error retrieving cart", "carts")
    def get_cart(self, user_id: int) -> Result:
        res = self._get_or_create_cart(user_id)
        if not res.ok:
            return res
        return Ok(self._cart_view(res.value))

    @persistence_guard("Error retrieving cart summary", "carts")
    def get_summary(self, user_id: int) -> Result:
        res = self._get_or_create_cart(user_id)
        if not res.ok:
            return res

        view = self._cart_view(res.value)
        return Ok({"item_count": view["item_count"], "total": view["total"]})

    #commands
    @persistence_guard("Error adding item to cart", "carts")
    def add_item(self, user_id: int, product_id: int, size: str, quantity: int) -> Result:
        if quantity <= 0:
            return Err(ServiceError.validation("Quantity must be greater than 0"))

        res = self._get_or_create_cart(user_id)
        if not res.ok:
            return res
        cart = res.value

        product = self.products.get_product(product_id)
        if not product:
            return Err(ServiceError.not_found("Product not found"))

        stock = self.products.get_product_size(product_id, size)
        if not stock:
            return Err(ServiceError.validation("Invalid size selected"))

        existing = self.carts.find_line(cart.id, product_id, size)
        wanted = quantity + (existing.quantity if existing else 0)

        #stan liczony razem z tym co juz jest w koszyku
        if stock.quantity < wanted:
            return Err(ServiceError.validation("Not enough stock available"))

        now = datetime.now(timezone.utc)
        try:
            if existing:
                logger.info(
                    f"Product {product_id}/{size} already in cart {cart.id}, "
                    f"quantity {existing.quantity} -> {wanted}"
                )
                existing.quantity = wanted
                existing.updated_at = now
            else:
                logger.info(f"Adding product {product_id}/{size} x{quantity} to cart {cart.id}")
                self.carts.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_id=product_id,
                        size=size,
                        quantity=quantity,
                    )
                )
            cart.updated_at = now
            self.carts.commit()
        except SQLAlchemyError:
            self.carts.rollback()
            logger.exception(f"Error adding item to cart for user {user_id}")
            return Err(ServiceError.persistence("Error adding item to cart"))

        return Ok(self._cart_view(cart))

    @persistence_guard("Error updating cart item", "carts")
    def update_item(self, user_id: int, cart_item_id: int, quantity: int) -> Result:
        if quantity <= 0:
            return Err(ServiceError.validation("Quantity must be greater than 0"))

        res = self._get_or_create_cart(user_id)
        if not res.ok:
            return res
        cart = res.value

        item = self.carts.get_cart_item(cart.id, cart_item_id)
        if not item:
            return Err(ServiceError.not_found("Cart item not found"))

        stock = self.products.get_product_size(item.product_id, item.size)
        if not stock or stock.quantity < quantity:
            return Err(ServiceError.validation("Not enough stock available"))

        now = datetime.now(timezone.utc)
        try:
            item.quantity = quantity
            item.updated_at = now
            cart.updated_at = now
            self.carts.commit()
        except SQLAlchemyError:
            self.carts.rollback()
            logger.exception(f"Error updating cart item {cart_item_id} for user {user_id}")
            return Err(ServiceError.persistence("Error updating cart item"))

        logger.info(f"Cart item {cart_item_id} quantity set to {quantity}")
        return Ok(self._cart_view(cart))

    @persistence_guard("Error removing cart item", "carts")
    def remove_item(self, user_id: int, cart_item_id: int) -> Result:
        res = self._get_or_create_cart(user_id)
        if not res.ok:
            return res
        cart = res.value

        item = self.carts.get_cart_item(cart.id, cart_item_id)
        if not item:
            return Err(ServiceError.not_found("Cart item not found"))

        try:
            self.carts.delete_cart_item(item)
            cart.updated_at = datetime.now(timezone.utc)
            self.carts.commit()
        except SQLAlchemyError:
            self.carts.rollback()
            logger.exception(f"Error removing cart item {cart_item_id} for user {user_id}")
            return Err(ServiceError.persistence("Error removing cart item"))

        logger.info(f"Cart item {cart_item_id} removed from cart {cart.id}")
        return Ok(self._cart_view(cart))

    @persistence_guard("Error clearing cart", "carts")
    def clear(self, user_id: int) -> Result:
        cart = self.carts.get_cart_by_user(user_id)
        if not cart:
            logger.warning(f"Cart not found for user {user_id}")
            return Err(ServiceError.not_found("Cart not found"))

        items = self.carts.get_cart_items(cart.id)
        if not items:
            logger.info(f"Cart is already empty for user {user_id}")
            return Ok({"message": "Cart is already empty"})

        logger.info(
            f"Clearing {len(items)} items from cart for user {user_id}: "
            f"{[(i.product_id, i.size, i.quantity) for i in items]}"
        )

        try:
            self.carts.delete_cart_items(cart.id)
            cart.updated_at = datetime.now(timezone.utc)
            self.carts.commit()
        except SQLAlchemyError:
            self.carts.rollback()
            logger.exception(f"Error clearing cart for user {user_id}")
            return Err(ServiceError.persistence("Error clearing cart"))

        return Ok({"message": "Cart cleared successfully"})

    def _get_or_create_cart(self, user_id: int) -> Result:
        cart = self.carts.get_cart_by_user(user_id)
        if cart:
            return Ok(cart)

        if not self.users.get_user(user_id):
            return Err(ServiceError.not_found("User not found"))

        try:
            created = self.carts.create_cart(CartModel(user_id=user_id))
        except SQLAlchemyError:
            self.carts.rollback()
            logger.exception(f"Error creating cart for user {user_id}")
            return Err(ServiceError.persistence("Error creating cart"))

        logger.info(f"Created cart {created.id} for user {user_id}")
        return Ok(created)

    def _cart_view(self, cart: CartModel) -> Dict[str, Any]:
        items = self.carts.get_cart_items(cart.id)

        #dict przeksztalcany w jsona
        return {
            "cart_id": cart.id,
            "user_id": cart.user_id,
            "items": [
                {
                    "cart_item_id": i.id,
                    "product_id": i.product_id,
                    "product_name": i.product.product_name,
                    "size": i.size,
                    "quantity": i.quantity,
                    "price": i.product.price,
                    "subtotal": line_subtotal(i.product.price, i.quantity),
                }
                for i in items
            ],
            "total": lines_total((i.product.price, i.quantity) for i in items),
            "item_count": sum(i.quantity for i in items),
        }
