import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"

from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from storefront.api.deps import get_lock_service, get_notification_service
from storefront.data.database import Base, get_db
from storefront.data.models import (
    CartItemModel,
    CartModel,
    ProductModel,
    ProductSizeModel,
    ShippingAddressModel,
    UserModel,
)
from storefront.main import create_app
from storefront.repos.address_repo import AddressRepo
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService
from storefront.services.order_service import OrderService


class FakeLockService:
    def __init__(self):
        self.held = {}
        self.released = []

    def acquire_checkout_lock(self, user_id, token, ttl):
        if user_id in self.held:
            return False
        self.held[user_id] = token
        return True

    def release_checkout_lock(self, user_id, token):
        self.released.append(user_id)
        if self.held.get(user_id) == token:
            del self.held[user_id]
            return True
        return False


class FakeNotificationService:
    def __init__(self):
        self.sent = []

    def send_order_placed(self, user_id, order_id, total):
        self.sent.append((user_id, order_id, total))


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False, autocommit=False)()
    yield session
    session.close()


@pytest.fixture
def lock():
    return FakeLockService()


@pytest.fixture
def notifier():
    return FakeNotificationService()


@pytest.fixture
def shop(db):
    user = UserModel(user_name="Ala Kowalska", email="ala@example.com")
    other = UserModel(user_name="Jan Nowak", email="jan@example.com")

    shirt = ProductModel(product_name="Shirt", price=Decimal("19.99"))
    shirt.sizes = [ProductSizeModel(size="M", quantity=10), ProductSizeModel(size="L", quantity=2)]
    shoes = ProductModel(product_name="Shoes", price=Decimal("120.50"))
    shoes.sizes = [ProductSizeModel(size="42", quantity=5)]

    db.add_all([user, other, shirt, shoes])
    db.flush()

    address = ShippingAddressModel(
        user_id=user.id, street_address="1 Nile St", city="Cairo",
        state="Cairo", country="Egypt", phone="01012345678",
    )
    other_address = ShippingAddressModel(
        user_id=other.id, street_address="2 Corniche", city="Alexandria",
        state="Alexandria", country="Egypt", phone="01112345678",
    )
    db.add_all([address, other_address])
    db.commit()

    return SimpleNamespace(
        user_id=user.id,
        other_user_id=other.id,
        shirt_id=shirt.id,
        shoes_id=shoes.id,
        address_id=address.id,
        other_address_id=other_address.id,
    )


@pytest.fixture
def fill_cart(db):
    """fill_cart(user_id, [(product_id, size, qty), ...]) -> cart_id"""

    def _fill(user_id, lines):
        cart = db.query(CartModel).filter_by(user_id=user_id).one_or_none()
        if cart is None:
            cart = CartModel(user_id=user_id)
            db.add(cart)
            db.flush()
        for product_id, size, qty in lines:
            db.add(CartItemModel(cart_id=cart.id, product_id=product_id, size=size, quantity=qty))
        db.commit()
        return cart.id

    return _fill


@pytest.fixture
def make_checkout(db, lock, notifier):
    def _make(**kwargs):
        kwargs.setdefault("lock_service", lock)
        kwargs.setdefault("notification_service", notifier)
        return CheckoutService(
            carts=CartRepo(db),
            orders=OrderRepo(db),
            addresses=AddressRepo(db),
            products=ProductRepo(db),
            **kwargs,
        )

    return _make


@pytest.fixture
def cart_service(db):
    return CartService(carts=CartRepo(db), products=ProductRepo(db), users=UserRepo(db))


@pytest.fixture
def order_service(db):
    return OrderService(OrderRepo(db))


@pytest.fixture
def app(db, lock, notifier):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_lock_service] = lambda: lock
    app.dependency_overrides[get_notification_service] = lambda: notifier
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)
