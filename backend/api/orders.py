from fastapi import APIRouter, Depends, HTTPException, Query

from auth import get_admin_client, require_staff
from config import settings
from errors import OrderToolsError
from schemas import CombineRequest, CombineResponse, OrderLookupResponse, TaggedOrdersResponse
from services.combine_service import combine_orders
from services.orders_service import list_tagged_orders, lookup_order
from shopify_admin import ShopifyAdminClient

router = APIRouter(
    prefix="/api/orders", tags=["orders"], dependencies=[Depends(require_staff)]
)


@router.get("/tagged", response_model=TaggedOrdersResponse)
async def read_tagged_orders(
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> TaggedOrdersResponse:
    try:
        orders = await list_tagged_orders(client)
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
    return TaggedOrdersResponse(tag=settings.combine_tag, orders=orders)


@router.get("/lookup", response_model=OrderLookupResponse)
async def read_order_lookup(
    order_number: str = Query(..., min_length=1),
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> OrderLookupResponse:
    try:
        return await lookup_order(client, order_number)
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/combine", response_model=CombineResponse)
async def combine(
    payload: CombineRequest,
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> CombineResponse:
    try:
        return await combine_orders(client, payload)
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
