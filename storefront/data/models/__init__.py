#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel, ProductSizeModel
from storefront.data.models.shipping_address import ShippingAddressModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_detail import OrderDetailModel

__all__ = [
    "UserModel",
    "ProductModel",
    "ProductSizeModel",
    "ShippingAddressModel",
    "CartModel",
    "CartItemModel",
    "OrderModel",
    "OrderDetailModel",
]
