from fastapi import APIRouter

from app.api.routers import health, payments, tokens

api_router = APIRouter()
api_router.include_router(health.router)
api_router.include_router(tokens.router)
api_router.include_router(payments.router)
