import logging
from typing import Any, Dict, Optional

from config import settings
from errors import ShopifyAPIError
from graphql_queries import ORDER_CANCEL, ORDER_CREATE
from schemas import CreatedOrder
from shopify_admin import ShopifyAdminClient, admin_order_url, raise_for_user_errors

logger = logging.getLogger("order-tools")


def created_order(raw: Optional[Dict[str, Any]]) -> Optional[CreatedOrder]:
    if not raw or not raw.get("id"):
        return None
    return CreatedOrder(
        id=raw["id"],
        name=raw.get("name"),
        admin_url=admin_order_url(settings.shopify_shop_domain, raw["id"]),
    )


async def create_order(
    client: ShopifyAdminClient,
    order: Dict[str, Any],
    options: Optional[Dict[str, Any]] = None,
) -> CreatedOrder:
    data = await client.graphql(ORDER_CREATE, {"order": order, "options": options})
    payload = raise_for_user_errors(data.get("orderCreate"), "orderCreate")
    result = created_order(payload.get("order"))
    if result is None:
        raise ShopifyAPIError("orderCreate did not return an order")
    logger.info("Created order %s (%s)", result.name, result.id)
    return result


async def cancel_order(
    client: ShopifyAdminClient,
    order_id: str,
    *,
    reason: str,
    staff_note: Optional[str] = None,
    refund: bool = False,
    restock: bool = True,
) -> Optional[str]:
    """Cancel an order; returns the id of Shopify's background cancel job."""
    data = await client.graphql(
        ORDER_CANCEL,
        {
            "orderId": order_id,
            "reason": reason,
            "refund": refund,
            "restock": restock,
            "staffNote": staff_note,
        },
    )
    payload = raise_for_user_errors(data.get("orderCancel"), "orderCancel")
    job = payload.get("job") or {}
    logger.info("Cancelled order %s (reason %s)", order_id, reason)
    return job.get("id")
