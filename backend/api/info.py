from datetime import datetime, timezone

from fastapi import APIRouter

from config import settings
from schemas import ApiInfoResponse, HealthResponse

API_NAME = "Food Delivery Order Manager API"
API_VERSION = "1.0.0"

router = APIRouter(tags=["info"])


@router.get("/health", response_model=HealthResponse)
async def read_health() -> HealthResponse:
    return HealthResponse(
        message="Server is running",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
    )


@router.get("/", response_model=ApiInfoResponse)
async def read_index() -> ApiInfoResponse:
    return ApiInfoResponse(
        message=API_NAME,
        version=API_VERSION,
        endpoints={
            "health": "/health",
            "orders": {
                "create": "POST /api/orders",
                "getAll": "GET /api/orders",
                "filter": "GET /api/orders/filter?isPaid=true|false&maxDistance=X",
                "assign": "POST /api/orders/assign",
                "stats": "GET /api/orders/stats",
                "delete": "DELETE /api/orders/:orderId",
            },
        },
    )
