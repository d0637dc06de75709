# app/domain/errors.py
"""
Failure kinds of the checkout relay.

Every error carries a short, client-safe message. Status codes and log levels
are assigned in one place, app/api/errors.py.
"""


class PaymentServiceError(Exception):
    message = "Payment service error"

    def __init__(self, message: str | None = None, transaction_id: str | None = None):
        self.message = message or self.message
        self.transaction_id = transaction_id
        super().__init__(self.message)

    def to_body(self) -> dict:
        body = {"error": self.message}
        if self.transaction_id:
            body["transactionId"] = self.transaction_id
        return body


class ValidationError(PaymentServiceError):
    """Missing or malformed input. Raised before any gateway or store call."""

    message = "Missing required fields"


class GatewayDecline(PaymentServiceError):
    """The processor refused the charge. A business outcome, not a fault."""

    message = "Payment processing failed"

    def to_body(self) -> dict:
        return {"message": self.message}


class NotFound(PaymentServiceError):
    message = "Not found"


class CartNotFound(NotFound):
    message = "Cart not found"


class TransactionNotFound(NotFound):
    message = "Transaction not found"


class GatewayUnavailable(PaymentServiceError):
    """Transport or processor fault, including timeouts."""

    message = "Payment gateway unavailable"


class CommitFailed(PaymentServiceError):
    """
    The order could not be stored after the charge was captured.
    The payment exists at the processor without an order; needs manual reconciliation.
    """

    message = "Payment captured but order could not be recorded"
