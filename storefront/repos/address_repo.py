from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.shipping_address import ShippingAddressModel


class AddressRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user_address(self, address_id: int, user_id: int) -> ShippingAddressModel | None:
        return self.db.execute(
            select(ShippingAddressModel).where(
                ShippingAddressModel.id == address_id,
                ShippingAddressModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def list_user_addresses(self, user_id: int) -> list[ShippingAddressModel]:
        return list(
            self.db.execute(
                select(ShippingAddressModel)
                .where(ShippingAddressModel.user_id == user_id)
                .order_by(ShippingAddressModel.id)
            ).scalars().all()
        )

    def create_address(self, address: ShippingAddressModel) -> ShippingAddressModel:
        self.db.add(address)
        self.db.commit()
        self.db.refresh(address)
        return address

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
