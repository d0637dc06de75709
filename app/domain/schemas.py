from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON uses camelCase keys, Python code uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaymentIn(CamelModel):
    """Checkout request. Presence of the fields is checked by PaymentService, not here."""

    payment_method_nonce: str | None = None
    amount: Decimal | None = None
    user_id: str | int | None = None
    cart_id: str | int | None = None
    session_id: str | int | None = None


class PaymentOut(CamelModel):
    success: bool
    transaction_id: str
    amount: Decimal


class VerifyOut(CamelModel):
    is_valid: bool
    status: str
    amount: Decimal


class TokenOut(BaseModel):
    token: str


class HealthOut(BaseModel):
    status: str
    service: str
    environment: str = Field(..., description="Braintree environment: sandbox or production")
