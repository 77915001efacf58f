from fastapi import APIRouter, Depends, HTTPException, Query

from auth import get_admin_client, require_staff
from errors import OrderToolsError
from schemas import Order, SplitItemsRequest, SplitQuantitiesRequest, SplitResponse
from services.split_service import (
    load_order_for_split,
    split_order_by_quantity,
    split_order_by_selection,
)
from shopify_admin import ShopifyAdminClient

router = APIRouter(
    prefix="/api/orders/split", tags=["split"], dependencies=[Depends(require_staff)]
)


@router.get("", response_model=Order)
async def read_order(
    order_number: str = Query(..., min_length=1),
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> Order:
    try:
        return await load_order_for_split(client, order_number)
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/quantities", response_model=SplitResponse)
async def split_by_quantities(
    payload: SplitQuantitiesRequest,
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> SplitResponse:
    try:
        return await split_order_by_quantity(
            client, payload.order_number, payload.split_quantities
        )
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc


@router.post("/items", response_model=SplitResponse)
async def split_by_items(
    payload: SplitItemsRequest,
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> SplitResponse:
    try:
        return await split_order_by_selection(
            client, payload.order_number, payload.selected_item_ids
        )
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
