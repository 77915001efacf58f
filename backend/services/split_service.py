import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from constants import (
    CANCEL_REASON_SPLIT,
    CANCEL_REASON_SPLIT_BY_ITEMS,
    SPLIT_FIRST_TAG,
    SPLIT_SECOND_TAG,
    SPLIT_STAFF_NOTE,
)
from errors import OrderValidationError
from schemas import DraftLineItem, Order, SplitResponse
from services.draft_order_service import create_and_complete, draft_order_input
from services.line_items import (
    NOTHING_SELECTED_MESSAGE,
    partition_by_quantity,
    partition_by_selection,
)
from services.order_actions import cancel_order
from services.orders_service import find_order_by_name
from shopify_admin import ShopifyAdminClient

logger = logging.getLogger("order-tools")


async def load_order_for_split(client: ShopifyAdminClient, order_number: str) -> Order:
    return await find_order_by_name(client, order_number)


async def _split(
    client: ShopifyAdminClient,
    order: Order,
    halves: Tuple[List[DraftLineItem], List[DraftLineItem]],
    *,
    tags: Sequence[Optional[str]],
    cancel_reason: str,
    message: str,
) -> SplitResponse:
    customer = order.customer
    new_orders = []
    for items, tag in zip(halves, tags):
        draft_input = draft_order_input(
            items,
            customer_id=customer.id if customer else None,
            email=customer.email if customer else None,
            shipping_address=order.shipping_address,
            tags=[tag] if tag else None,
        )
        new_orders.append(await create_and_complete(client, draft_input))

    # Both replacement orders exist at this point.
    await cancel_order(
        client, order.id, reason=cancel_reason, staff_note=SPLIT_STAFF_NOTE
    )
    logger.info(
        "Split %s into %s and %s",
        order.name,
        new_orders[0].name,
        new_orders[1].name,
    )
    return SplitResponse(
        success=True,
        message=message,
        new_order_1=new_orders[0],
        new_order_2=new_orders[1],
        cancelled_order_id=order.id,
    )


async def split_order_by_quantity(
    client: ShopifyAdminClient,
    order_number: str,
    split_quantities: Mapping[str, int],
) -> SplitResponse:
    order = await find_order_by_name(client, order_number)
    halves = partition_by_quantity(order.line_items, split_quantities)
    return await _split(
        client,
        order,
        halves,
        tags=(None, None),
        cancel_reason=CANCEL_REASON_SPLIT,
        message="Order split successfully",
    )


async def split_order_by_selection(
    client: ShopifyAdminClient,
    order_number: str,
    selected_item_ids: Sequence[str],
) -> SplitResponse:
    if not selected_item_ids:
        raise OrderValidationError(NOTHING_SELECTED_MESSAGE)
    order = await find_order_by_name(client, order_number)
    halves = partition_by_selection(order.line_items, selected_item_ids)
    return await _split(
        client,
        order,
        halves,
        tags=(SPLIT_FIRST_TAG, SPLIT_SECOND_TAG),
        cancel_reason=CANCEL_REASON_SPLIT_BY_ITEMS,
        message="Order split successfully.",
    )
