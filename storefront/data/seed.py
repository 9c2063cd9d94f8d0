# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db
from storefront.data.models import (
    ProductModel,
    ProductSizeModel,
    ShippingAddressModel,
    UserModel,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    ("Classic T-Shirt", Decimal("199.99"), {"S": 10, "M": 15, "L": 5}),
    ("Denim Jacket", Decimal("849.50"), {"M": 4, "L": 2}),
    ("Running Shoes", Decimal("1250.00"), {"42": 6, "43": 3, "44": 0}),
]


def seed(db=None):
    own_session = db is None
    db = db or SessionLocal()
    try:
        # not forcing: only seed if empty
        if db.query(ProductModel).first():
            logger.info("Database already seeded")
            return

        for name, price, sizes in PRODUCTS:
            product = ProductModel(product_name=name, price=price, description=name)
            product.sizes = [ProductSizeModel(size=s, quantity=q) for s, q in sizes.items()]
            db.add(product)

        user = UserModel(user_name="Demo User", email="demo@example.com")
        db.add(user)
        db.flush()

        db.add(
            ShippingAddressModel(
                user_id=user.id,
                street_address="12 Tahrir Street",
                city="Cairo",
                state="Cairo",
                country="Egypt",
                phone="01012345678",
            )
        )
        db.commit()
        logger.info(f"Seeded {len(PRODUCTS)} products and demo user {user.id}")
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    init_db()
    seed()
