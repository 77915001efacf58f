from fastapi import APIRouter, Depends, HTTPException, status

from auth import get_admin_client, require_staff
from errors import OrderToolsError
from schemas import CombinedDraftRequest, CombinedDraftResponse
from services.draft_order_service import create_combined_draft
from shopify_admin import ShopifyAdminClient

router = APIRouter(
    prefix="/api/draft-orders", tags=["draft-orders"], dependencies=[Depends(require_staff)]
)


@router.post(
    "/combined",
    response_model=CombinedDraftResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_combined(
    payload: CombinedDraftRequest,
    client: ShopifyAdminClient = Depends(get_admin_client),
) -> CombinedDraftResponse:
    try:
        return await create_combined_draft(
            client, payload.customer_id, payload.line_items
        )
    except OrderToolsError as exc:
        raise HTTPException(status_code=exc.status_code, detail=str(exc)) from exc
