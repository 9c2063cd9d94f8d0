# storefront/repos/product_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel, ProductSizeModel


class ProductRepo:
    """Odczyt katalogu: cena i stan magazynowy po (product_id, size)."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_product_size(self, product_id: int, size: str) -> ProductSizeModel | None:
        return self.db.execute(
            select(ProductSizeModel).where(
                ProductSizeModel.product_id == product_id,
                ProductSizeModel.size == size,
            )
        ).scalar_one_or_none()
