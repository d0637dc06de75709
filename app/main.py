# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn

from app.api import api_router
from app.api.errors import error_response, flags_for
from app.data.database import init_db
from app.domain.errors import ValidationError
from app.services.gateway_client import BraintreeGatewayClient, PaymentGateway
from app.utils.logging import get_logger
from app.utils.settings import BT_ENVIRONMENT, CORS_ORIGINS, PORT

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"Server running on port {PORT}")
    logger.info(f"Braintree Environment: {BT_ENVIRONMENT}")
    yield


def create_app(gateway: PaymentGateway | None = None, create_tables: bool = True) -> FastAPI:
    app = FastAPI(
        title="Braintree Checkout Relay",
        version="1.0.0",
        lifespan=lifespan if create_tables else None,
    )

    # clients are built here and handed to the routes through app.state
    app.state.gateway = gateway or BraintreeGatewayClient.from_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return error_response(ValidationError("Invalid request body"), **flags_for(request.url.path))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=500,
            content={**flags_for(request.url.path), "error": "Internal server error"},
        )

    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=PORT)
