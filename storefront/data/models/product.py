# storefront/data/models/product.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    product_name = Column(String(100), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    description = Column(String(500), nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    sizes = relationship(
        "ProductSizeModel",
        back_populates="product",
        cascade="all, delete-orphan",
    )


class ProductSizeModel(Base):
    """Stan magazynowy produktu w danym rozmiarze."""

    __tablename__ = "product_sizes"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    size = Column(String(10), nullable=False)
    quantity = Column(Integer, nullable=False, default=0)

    product = relationship("ProductModel", back_populates="sizes")

    __table_args__ = (UniqueConstraint("product_id", "size", name="u_product_size"),)
