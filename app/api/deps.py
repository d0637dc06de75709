# app/api/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.services.gateway_client import PaymentGateway
from app.services.payment_service import PaymentService


def get_gateway(request: Request) -> PaymentGateway:
    return request.app.state.gateway


def get_payment_service(
    db: Session = Depends(get_db),
    gateway: PaymentGateway = Depends(get_gateway),
) -> PaymentService:
    return PaymentService(db=db, gateway=gateway)
