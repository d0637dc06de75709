#app/api/routers/tokens.py
from fastapi import APIRouter, Depends, Request

from app.api.deps import get_gateway
from app.api.errors import error_response
from app.domain.errors import GatewayUnavailable
from app.domain.schemas import TokenOut
from app.services.gateway_client import PaymentGateway
from app.utils.settings import BT_MERCHANT_ACCOUNT_ID

router = APIRouter(tags=["tokens"])


@router.api_route("/generate-braintree-token", methods=["GET", "POST"], response_model=TokenOut)
def generate_token(request: Request, gateway: PaymentGateway = Depends(get_gateway)):
    """
    Client token for the payment SDK.
    POST scopes the token to the configured merchant account, GET uses the default one.
    """
    merchant_account_id = BT_MERCHANT_ACCOUNT_ID if request.method == "POST" else None
    try:
        return {"token": gateway.generate_token(merchant_account_id)}
    except GatewayUnavailable as e:
        return error_response(e)
