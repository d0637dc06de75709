# app/services/gateway_client.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from functools import cached_property

import braintree
from braintree.exceptions.braintree_error import BraintreeError
from braintree.exceptions.not_found_error import NotFoundError

from app.domain.errors import GatewayUnavailable, TransactionNotFound
from app.utils import settings
from app.utils.logging import get_logger

logger = get_logger(__name__)

VALID_STATUSES = frozenset({"settled", "submitted_for_settlement"})

_ENVIRONMENTS = {
    "sandbox": braintree.Environment.Sandbox,
    "production": braintree.Environment.Production,
}

_ADDRESS_FIELDS = (
    "first_name",
    "last_name",
    "company",
    "street_address",
    "extended_address",
    "locality",
    "region",
    "postal_code",
    "country_code_alpha2",
)


@dataclass(frozen=True)
class SaleResult:
    """Outcome of one sale attempt. Declines are results, not exceptions."""

    success: bool
    transaction_id: str | None = None
    amount: Decimal | None = None
    customer_email: str | None = None
    shipping_address: dict | None = None
    message: str | None = None


@dataclass(frozen=True)
class TransactionStatus:
    transaction_id: str
    status: str
    amount: Decimal

    @property
    def is_valid(self) -> bool:
        return self.status in VALID_STATUSES


class PaymentGateway(ABC):
    """Contract for payment processor adapters; swap in a fake for tests."""

    @abstractmethod
    def generate_token(self, merchant_account_id: str | None = None) -> str:
        """Client session token, optionally scoped to a merchant sub-account."""
        ...

    @abstractmethod
    def submit_sale(
        self,
        amount: Decimal,
        payment_method_nonce: str,
        submit_for_settlement: bool = True,
        store_in_vault_on_success: bool = True,
    ) -> SaleResult:
        """One-time charge. Raises only on transport/protocol failure."""
        ...

    @abstractmethod
    def find_transaction(self, transaction_id: str) -> TransactionStatus:
        """Status of a previous transaction."""
        ...


class BraintreeGatewayClient(PaymentGateway):
    def __init__(
        self,
        environment: str = "sandbox",
        merchant_id: str = "",
        public_key: str = "",
        private_key: str = "",
        timeout: int = 60,
        gateway: braintree.BraintreeGateway | None = None,
    ):
        self.environment = environment
        self.merchant_id = merchant_id
        self.public_key = public_key
        self.private_key = private_key
        self.timeout = timeout
        if gateway is not None:
            self.gateway = gateway

    @classmethod
    def from_settings(cls) -> "BraintreeGatewayClient":
        return cls(
            environment=settings.BT_ENVIRONMENT,
            merchant_id=settings.BT_MERCHANT_ID,
            public_key=settings.BT_PUBLIC_KEY,
            private_key=settings.BT_PRIVATE_KEY,
            timeout=settings.GATEWAY_TIMEOUT_SECONDS,
        )

    @cached_property
    def gateway(self) -> braintree.BraintreeGateway:
        # built on first use so the app imports without credentials
        environment = _ENVIRONMENTS.get(self.environment.lower())
        if environment is None:
            raise ValueError(f"Unknown Braintree environment: {self.environment}")

        return braintree.BraintreeGateway(
            braintree.Configuration(
                environment=environment,
                merchant_id=self.merchant_id,
                public_key=self.public_key,
                private_key=self.private_key,
                timeout=self.timeout,
                # transport errors surface as BraintreeError subclasses
                wrap_http_exceptions=True,
            )
        )

    def generate_token(self, merchant_account_id: str | None = None) -> str:
        params = {}
        if merchant_account_id:
            params["merchant_account_id"] = merchant_account_id

        logger.info(f"Generating client token (merchant account: {merchant_account_id or 'default'})")
        try:
            return self.gateway.client_token.generate(params)
        except (BraintreeError, ValueError) as e:
            # the SDK raises ValueError when the processor rejects token params
            logger.error(f"Client token error: {e!r}")
            raise GatewayUnavailable("Failed to generate client token") from e

    def submit_sale(
        self,
        amount: Decimal,
        payment_method_nonce: str,
        submit_for_settlement: bool = True,
        store_in_vault_on_success: bool = True,
    ) -> SaleResult:
        logger.info(f"Submitting sale for {amount}")
        try:
            result = self.gateway.transaction.sale(
                {
                    "amount": str(amount),
                    "payment_method_nonce": payment_method_nonce,
                    "options": {
                        "submit_for_settlement": submit_for_settlement,
                        "store_in_vault_on_success": store_in_vault_on_success,
                    },
                }
            )
        except (BraintreeError, ValueError) as e:
            # ValueError: the SDK gateway could not be configured
            logger.error(f"Sale error: {e!r}")
            raise GatewayUnavailable() from e

        transaction = getattr(result, "transaction", None)

        if not result.is_success:
            logger.info(f"Sale declined: {result.message}")
            return SaleResult(
                success=False,
                transaction_id=getattr(transaction, "id", None),
                message=result.message,
            )

        paypal = getattr(transaction, "paypal_details", None)
        return SaleResult(
            success=True,
            transaction_id=transaction.id,
            amount=Decimal(str(transaction.amount)),
            customer_email=getattr(paypal, "payer_email", None),
            shipping_address=_address_to_dict(getattr(transaction, "shipping_details", None)),
        )

    def find_transaction(self, transaction_id: str) -> TransactionStatus:
        try:
            transaction = self.gateway.transaction.find(transaction_id)
        except NotFoundError as e:
            raise TransactionNotFound() from e
        except (BraintreeError, ValueError) as e:
            logger.error(f"Transaction lookup error for {transaction_id}: {e!r}")
            raise GatewayUnavailable() from e

        return TransactionStatus(
            transaction_id=transaction.id,
            status=transaction.status,
            amount=Decimal(str(transaction.amount)),
        )


def _address_to_dict(address) -> dict | None:
    if address is None:
        return None

    data = {
        field: getattr(address, field)
        for field in _ADDRESS_FIELDS
        if getattr(address, field, None) is not None
    }
    return data or None
