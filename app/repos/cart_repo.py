# app/repos/cart_repo.py
from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel


class CartRepo:
    """
    Read access to a user's pending cart, plus the delete used at order commit.
    Nothing here commits; the caller owns the transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, user_id: str, cart_id: str) -> CartModel | None:
        return self.db.get(CartModel, (user_id, cart_id))

    def delete_cart(self, user_id: str, cart_id: str) -> int:
        result = self.db.execute(
            delete(CartModel).where(
                CartModel.user_id == user_id,
                CartModel.cart_id == cart_id,
            )
        )
        return result.rowcount
