# app/api/errors.py
import logging

from fastapi.responses import JSONResponse

from app.domain.errors import (
    CommitFailed,
    GatewayDecline,
    GatewayUnavailable,
    NotFound,
    PaymentServiceError,
    ValidationError,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

# error kind -> (HTTP status, log level)
ERROR_TABLE: dict[type[PaymentServiceError], tuple[int, int]] = {
    ValidationError: (400, logging.INFO),
    GatewayDecline: (400, logging.INFO),
    NotFound: (404, logging.WARNING),
    GatewayUnavailable: (500, logging.ERROR),
    CommitFailed: (500, logging.CRITICAL),
}

_FALLBACK = (500, logging.ERROR)

# machine-checkable flags every error body of an endpoint carries
ENDPOINT_FLAGS = {
    "/process_payment": {"success": False},
    "/verify_payment": {"isValid": False},
}


def flags_for(path: str) -> dict:
    return ENDPOINT_FLAGS.get(path, {})


def lookup(exc: PaymentServiceError) -> tuple[int, int]:
    for kind in type(exc).__mro__:
        if kind in ERROR_TABLE:
            return ERROR_TABLE[kind]
    return _FALLBACK


def error_response(exc: PaymentServiceError, **flags) -> JSONResponse:
    """
    Map an error to its response. `flags` are the endpoint's machine-checkable
    fields (success / isValid) added next to the message.
    """
    status_code, level = lookup(exc)
    logger.log(level, f"{type(exc).__name__} -> {status_code}: {exc.message}")
    return JSONResponse(status_code=status_code, content={**flags, **exc.to_body()})
