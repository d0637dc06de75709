# app/services/payment_service.py
from decimal import Decimal, InvalidOperation

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.errors import (
    CartNotFound,
    CommitFailed,
    GatewayDecline,
    GatewayUnavailable,
    TransactionNotFound,
    ValidationError,
)
from app.domain.schemas import PaymentIn
from app.repos.cart_repo import CartRepo
from app.services.gateway_client import PaymentGateway
from app.services.order_commit import OrderCommitService
from app.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_PAYMENT_FIELDS = ("payment_method_nonce", "amount", "user_id", "cart_id")

CENTS = Decimal("0.01")


class PaymentService:
    """
    Checkout use cases.

    process_payment: validate -> charge -> read cart -> commit order.
    verify_payment: transaction status lookup.
    """

    def __init__(self, db: Session, gateway: PaymentGateway):
        self.gateway = gateway
        self.carts = CartRepo(db)
        self.committer = OrderCommitService(db)

    def process_payment(self, payload: PaymentIn) -> dict:
        missing = [f for f in REQUIRED_PAYMENT_FIELDS if not getattr(payload, f)]
        if missing:
            raise ValidationError()

        amount = _parse_amount(payload.amount)
        # clients may send numeric ids; the store keys are strings
        user_id, cart_id = str(payload.user_id), str(payload.cart_id)
        session_id = str(payload.session_id) if payload.session_id is not None else None

        sale = self.gateway.submit_sale(amount, payload.payment_method_nonce)
        if not sale.success:
            raise GatewayDecline(sale.message)

        # from here on the money is captured
        try:
            cart = self.carts.get_cart(user_id, cart_id)
        except SQLAlchemyError as e:
            logger.critical(
                f"Cart read failed after capture of transaction {sale.transaction_id} "
                f"(user {user_id}, cart {cart_id}): {e!r}"
            )
            raise CommitFailed(transaction_id=sale.transaction_id) from e

        if cart is None:
            logger.error(
                f"Cart {cart_id} of user {user_id} not found after capture "
                f"of transaction {sale.transaction_id} - payment captured without an order"
            )
            raise CartNotFound(transaction_id=sale.transaction_id)

        order = self.committer.commit_order(sale, cart, session_id=session_id)

        return {
            "success": True,
            "transaction_id": order.transaction_id,
            "amount": amount,
        }

    def verify_payment(self, transaction_id: str | None) -> dict:
        if not transaction_id:
            raise ValidationError("Transaction ID required")

        try:
            transaction = self.gateway.find_transaction(transaction_id)
        except GatewayUnavailable as e:
            # any failed lookup is reported as not found
            logger.warning(f"Lookup of transaction {transaction_id} failed: {e.message}")
            raise TransactionNotFound() from e

        return {
            "is_valid": transaction.is_valid,
            "status": transaction.status,
            "amount": transaction.amount,
        }


def _parse_amount(raw) -> Decimal:
    try:
        amount = Decimal(str(raw))
        in_cents = amount.quantize(CENTS)
    except InvalidOperation:
        raise ValidationError("Invalid amount")

    # sub-cent amounts are rejected, never rounded
    if not amount.is_finite() or amount <= 0 or amount != in_cents:
        raise ValidationError("Invalid amount")
    return in_cents
