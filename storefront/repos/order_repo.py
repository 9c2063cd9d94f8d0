# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_detail import OrderDetailModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        #flush zeby dostac id, commit robi serwis
        self.db.add(order)
        self.db.flush()
        return order

    def add_order_detail(self, detail: OrderDetailModel) -> OrderDetailModel:
        self.db.add(detail)
        self.db.flush()
        return detail

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_user_orders(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
        )

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()

    def refresh(self, order: OrderModel) -> OrderModel:
        self.db.refresh(order)
        return order
