from fastapi import APIRouter, Depends

from auth import require_staff
from config import settings
from schemas import HealthResponse

router = APIRouter(prefix="/api", tags=["info"], dependencies=[Depends(require_staff)])


@router.get("/health", response_model=HealthResponse)
async def read_health() -> HealthResponse:
    return HealthResponse(
        status="ok",
        shop=settings.shopify_shop_domain,
        api_version=settings.shopify_api_version,
    )
