# app/repos/order_repo.py
from sqlalchemy.orm import Session
from app.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # flush so a reused transaction id collides on the primary key right away
        self.db.add(order)
        self.db.flush()
        return order
