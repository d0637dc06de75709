#app/data/models/cart.py
from sqlalchemy import Column, String, JSON

from app.data.database import Base


class CartModel(Base):
    __tablename__ = "carts"

    # carts live under the user's namespace: (user_id, cart_id) is the key
    user_id = Column(String, primary_key=True)
    cart_id = Column(String, primary_key=True)

    products = Column(JSON, nullable=False, default=list)
