from sqlalchemy import Column, String, DateTime, Numeric, JSON
from sqlalchemy.sql import func

from app.data.database import Base

ORDER_STATUS_COMPLETED = "Completed"
PAYMENT_METHOD_LABEL = "PayPal"


class OrderModel(Base):
    __tablename__ = "orders"

    # gateway transaction id, one order per successful sale
    transaction_id = Column(String, primary_key=True)

    user_id = Column(String, nullable=False, index=True)
    cart_id = Column(String, nullable=False)
    session_id = Column(String, nullable=True)

    amount = Column(Numeric(12, 2), nullable=False)
    products = Column(JSON, nullable=False)

    status = Column(String, nullable=False, default=ORDER_STATUS_COMPLETED)
    payment_method = Column(String, nullable=False, default=PAYMENT_METHOD_LABEL)
    customer_email = Column(String, nullable=True)
    shipping_address = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
