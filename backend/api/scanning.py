from fastapi import APIRouter, Depends, HTTPException, Query

from auth import get_admin_client, require_staff
from errors import OrderToolsError
from schemas import ScanOrderResponse, ScanRequest, ScanResponse
from services.scanning_service import load_scan_order, scan_sku
from shopify_admin import ShopifyAdminClient

router = APIRouter(
    prefix="/api/scanning", tags=["scanning"], dependencies=[Depends(require_staff)]
)


@router.get("/order", response_model=ScanOrderResponse)
async def read_scan_order(
    order_number: str = Query(..., min_length=1),
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> ScanOrderResponse:
    try:
        return await load_scan_order(client, order_number)
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/scan", response_model=ScanResponse)
async def scan(
    payload: ScanRequest,
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> ScanResponse:
    try:
        return await scan_sku(
            client, payload.order_number, payload.entered_skus, payload.sku
        )
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
