import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("BT_MERCHANT_ACCOUNT_ID", "test-merchant-account")

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.data.database import Base, get_db  # noqa: E402
from app.data.models import CartModel, OrderModel  # noqa: E402
from app.domain.errors import GatewayUnavailable, TransactionNotFound  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.gateway_client import PaymentGateway, SaleResult, TransactionStatus  # noqa: E402


class FakeGateway(PaymentGateway):
    """Configurable in-memory payment gateway. Records every call."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.decline_message: str = "Processor Declined"
        self.unavailable: bool = False
        self.next_transaction_id: str = "TX1"
        self.customer_email: str | None = None
        self.shipping_address: dict | None = None
        self.transactions: dict[str, TransactionStatus] = {}
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, decline_message: str = "Processor Declined") -> None:
        self.should_succeed = should_succeed
        self.decline_message = decline_message

    def generate_token(self, merchant_account_id: str | None = None) -> str:
        self.calls.append({"method": "generate_token", "merchant_account_id": merchant_account_id})
        if self.unavailable:
            raise GatewayUnavailable("Failed to generate client token")
        return f"fake-token-{merchant_account_id or 'default'}"

    def submit_sale(
        self,
        amount: Decimal,
        payment_method_nonce: str,
        submit_for_settlement: bool = True,
        store_in_vault_on_success: bool = True,
    ) -> SaleResult:
        self.calls.append(
            {
                "method": "submit_sale",
                "amount": amount,
                "payment_method_nonce": payment_method_nonce,
                "submit_for_settlement": submit_for_settlement,
                "store_in_vault_on_success": store_in_vault_on_success,
            }
        )
        if self.unavailable:
            raise GatewayUnavailable()

        if not self.should_succeed:
            return SaleResult(success=False, message=self.decline_message)

        self.transactions[self.next_transaction_id] = TransactionStatus(
            transaction_id=self.next_transaction_id,
            status="submitted_for_settlement",
            amount=amount,
        )
        return SaleResult(
            success=True,
            transaction_id=self.next_transaction_id,
            amount=amount,
            customer_email=self.customer_email,
            shipping_address=self.shipping_address,
        )

    def find_transaction(self, transaction_id: str) -> TransactionStatus:
        self.calls.append({"method": "find_transaction", "transaction_id": transaction_id})
        if self.unavailable:
            raise GatewayUnavailable()
        if transaction_id not in self.transactions:
            raise TransactionNotFound()
        return self.transactions[transaction_id]


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def client(gateway, session_factory):
    app = create_app(gateway=gateway, create_tables=False)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture()
def make_cart(session_factory):
    def _make(user_id="U1", cart_id="C1", products=None):
        with session_factory() as session:
            session.add(
                CartModel(
                    user_id=user_id,
                    cart_id=cart_id,
                    products=products if products is not None else [{"sku": "A", "qty": 1}],
                )
            )
            session.commit()

    return _make


@pytest.fixture()
def read_back(session_factory):
    """Fresh-session lookups, so assertions see only committed state."""

    class _Reader:
        def cart(self, user_id="U1", cart_id="C1"):
            with session_factory() as session:
                return session.get(CartModel, (user_id, cart_id))

        def order(self, transaction_id="TX1"):
            with session_factory() as session:
                return session.get(OrderModel, transaction_id)

        def order_count(self):
            with session_factory() as session:
                return session.query(OrderModel).count()

    return _Reader()
