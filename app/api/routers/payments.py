# app/api/routers/payments.py
from fastapi import APIRouter, Depends, Query

from app.api.deps import get_payment_service
from app.api.errors import error_response
from app.domain.errors import PaymentServiceError
from app.domain.schemas import PaymentIn, PaymentOut, VerifyOut
from app.services.payment_service import PaymentService

router = APIRouter(tags=["payments"])


@router.post("/process_payment", response_model=PaymentOut)
def process_payment(payload: PaymentIn, svc: PaymentService = Depends(get_payment_service)):
    """
    Charges the nonce, then turns the user's cart into an order.
    """
    try:
        return svc.process_payment(payload)
    except PaymentServiceError as e:
        return error_response(e, success=False)


@router.get("/verify_payment", response_model=VerifyOut)
def verify_payment(
    transaction_id: str | None = Query(None, alias="transactionId"),
    svc: PaymentService = Depends(get_payment_service),
):
    try:
        return svc.verify_payment(transaction_id)
    except PaymentServiceError as e:
        return error_response(e, isValid=False)
