import logging
from typing import Any, Dict, List, Optional, Sequence

from errors import OrderValidationError, ShopifyAPIError
from graphql_queries import DRAFT_ORDER_COMPLETE, DRAFT_ORDER_CREATE
from schemas import CombinedDraftResponse, CreatedOrder, DraftLineItem, MailingAddress
from services.order_actions import created_order
from shopify_admin import ShopifyAdminClient, raise_for_user_errors

logger = logging.getLogger("order-tools")


def draft_line_items(items: Sequence[DraftLineItem]) -> List[Dict[str, Any]]:
    return [{"variantId": item.variant_id, "quantity": item.quantity} for item in items]


def draft_order_input(
    line_items: Sequence[DraftLineItem],
    *,
    customer_id: Optional[str] = None,
    email: Optional[str] = None,
    shipping_address: Optional[MailingAddress] = None,
    tags: Optional[List[str]] = None,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"lineItems": draft_line_items(line_items)}
    if customer_id:
        payload["customerId"] = customer_id
    if email:
        payload["email"] = email
    if shipping_address is not None:
        payload["shippingAddress"] = shipping_address.model_dump(exclude_none=True)
    if tags:
        payload["tags"] = tags
    return payload


async def create_draft_order(
    client: ShopifyAdminClient, draft_input: Dict[str, Any]
) -> Dict[str, Any]:
    data = await client.graphql(DRAFT_ORDER_CREATE, {"input": draft_input})
    payload = raise_for_user_errors(data.get("draftOrderCreate"), "draftOrderCreate")
    draft = payload.get("draftOrder")
    if not draft or not draft.get("id"):
        raise ShopifyAPIError("draftOrderCreate did not return a draft order")
    logger.info("Created draft order %s", draft["id"])
    return draft


async def complete_draft_order(client: ShopifyAdminClient, draft_id: str) -> CreatedOrder:
    data = await client.graphql(DRAFT_ORDER_COMPLETE, {"id": draft_id})
    payload = raise_for_user_errors(data.get("draftOrderComplete"), "draftOrderComplete")
    order = created_order((payload.get("draftOrder") or {}).get("order"))
    if order is None:
        raise ShopifyAPIError(f"Draft order {draft_id} completed without an order")
    logger.info("Completed draft order %s as %s", draft_id, order.name)
    return order


async def create_and_complete(
    client: ShopifyAdminClient, draft_input: Dict[str, Any]
) -> CreatedOrder:
    draft = await create_draft_order(client, draft_input)
    return await complete_draft_order(client, draft["id"])


async def create_combined_draft(
    client: ShopifyAdminClient,
    customer_id: str,
    line_items: Sequence[DraftLineItem],
) -> CombinedDraftResponse:
    if not line_items:
        raise OrderValidationError("At least one line item is required.")
    draft = await create_draft_order(
        client, draft_order_input(line_items, customer_id=customer_id)
    )
    return CombinedDraftResponse(
        success=True,
        draft_order_id=draft["id"],
        draft_order_name=draft.get("name"),
    )
