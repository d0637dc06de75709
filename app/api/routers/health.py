from fastapi import APIRouter

from app.domain.schemas import HealthOut
from app.utils.settings import BT_ENVIRONMENT, SERVICE_NAME

router = APIRouter(tags=["health"])


@router.get("/", response_model=HealthOut)
def health():
    return {
        "status": "active",
        "service": SERVICE_NAME,
        "environment": BT_ENVIRONMENT,
    }
