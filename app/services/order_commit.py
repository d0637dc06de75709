# app/services/order_commit.py
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.order import OrderModel, ORDER_STATUS_COMPLETED, PAYMENT_METHOD_LABEL
from app.domain.errors import CommitFailed
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.services.gateway_client import SaleResult
from app.utils.logging import get_logger

logger = get_logger(__name__)


class _CartGone(Exception):
    pass


class OrderCommitService:
    """
    Turns a captured sale and the cart it paid for into an order.

    The order insert and the cart delete are one database transaction:
    either the order exists and the cart is gone, or neither change is visible.
    The transaction id is the order's primary key, so committing the same
    sale twice collides instead of creating a second order.
    """

    def __init__(self, db: Session):
        self.db = db
        self.orders = OrderRepo(db)
        self.carts = CartRepo(db)

    def commit_order(self, sale: SaleResult, cart: CartModel, session_id: str | None = None) -> OrderModel:
        if not sale.success or not sale.transaction_id:
            raise ValueError("Only a successful sale can be committed as an order")

        # plain values: rollback expires the cart instance, and its row may be gone
        user_id, cart_id = cart.user_id, cart.cart_id

        order = OrderModel(
            transaction_id=sale.transaction_id,
            user_id=user_id,
            cart_id=cart_id,
            session_id=session_id,
            amount=sale.amount,
            products=cart.products,
            status=ORDER_STATUS_COMPLETED,
            payment_method=PAYMENT_METHOD_LABEL,
            customer_email=sale.customer_email,
            shipping_address=sale.shipping_address,
        )

        try:
            self.orders.add_order(order)

            # exactly one row, otherwise someone else already consumed the cart
            if self.carts.delete_cart(user_id, cart_id) != 1:
                raise _CartGone()

            self.db.commit()
        except (SQLAlchemyError, _CartGone) as e:
            self.db.rollback()
            logger.critical(
                f"Order commit failed for transaction {sale.transaction_id} "
                f"(user {user_id}, cart {cart_id}): {e!r}. "
                f"Payment is captured, order NOT recorded - reconcile manually"
            )
            raise CommitFailed(transaction_id=sale.transaction_id) from e

        # load the server-assigned created_at
        self.db.refresh(order)

        logger.info(f"Order {order.transaction_id} created from cart {cart_id} of user {user_id}")
        return order
