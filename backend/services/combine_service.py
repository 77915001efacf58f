import logging
from datetime import datetime
from typing import Any, Dict, List, Optional
from zoneinfo import ZoneInfo

from config import settings
from constants import (
    CANCEL_REASON_COMBINED,
    COMBINED_STAFF_NOTE,
    INVENTORY_BEHAVIOUR,
    SHIPPING_LINE_CODE,
    SHIPPING_LINE_SOURCE,
    SHIPPING_LINE_TITLE,
    ZERO_AMOUNT,
)
from errors import OrderValidationError
from schemas import CombineRequest, CombineResponse, CreatedOrder, Customer, MailingAddress, Order
from services.addresses import addresses_match, normalize_address
from services.line_items import CombinedGroup, aggregate_line_items
from services.order_actions import cancel_order, create_order
from services.orders_service import find_order_by_name, list_customer_open_orders, require_customer
from shopify_admin import ShopifyAdminClient

logger = logging.getLogger("order-tools")


def combined_at_tag(now: Optional[datetime] = None) -> str:
    """``Combined at: 10/19/2026, 3:04:05 PM`` in the store's timezone."""
    zone = ZoneInfo(settings.store_timezone)
    local = (now or datetime.now(zone)).astimezone(zone)
    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"Combined at: {local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def _zero_money() -> Dict[str, Any]:
    return {"shopMoney": {"amount": ZERO_AMOUNT, "currencyCode": settings.store_currency}}


def _order_address(customer: Customer, address: Optional[MailingAddress]) -> Dict[str, Any]:
    fields = address.model_dump() if address is not None else {}
    return {
        "firstName": customer.first_name,
        "lastName": customer.last_name,
        **fields,
    }


def build_order_input(
    group: CombinedGroup,
    customer: Customer,
    shipping_address: Optional[MailingAddress],
    tag: str,
) -> Dict[str, Any]:
    address = _order_address(customer, shipping_address)
    return {
        "name": group.name,
        "lineItems": [
            {
                "variantId": item.variant_id,
                "quantity": item.quantity,
                "requiresShipping": True,
                "priceSet": _zero_money(),
            }
            for item in group.line_items
        ],
        "customerId": customer.id,
        "shippingAddress": address,
        "billingAddress": dict(address),
        "shippingLines": [
            {
                "title": SHIPPING_LINE_TITLE,
                "priceSet": _zero_money(),
                "code": SHIPPING_LINE_CODE,
                "source": SHIPPING_LINE_SOURCE,
            }
        ],
        "financialStatus": "PAID",
        "tags": [tag],
    }


def check_addresses(found: Order, customer: Customer, orders: List[Order]) -> None:
    reference = normalize_address(found.shipping_address, customer)
    for order in orders:
        if not addresses_match(reference, normalize_address(order.shipping_address, customer)):
            logger.warning(
                "Address of order %s differs from order %s", order.name, found.name
            )
            raise OrderValidationError(
                f"The shipping address for order {order.name} does not match the original "
                "order's shipping address. All orders must have the same shipping address "
                "to be combined."
            )


async def combine_orders(
    client: ShopifyAdminClient, request: CombineRequest
) -> CombineResponse:
    found = await find_order_by_name(client, request.order_number)
    customer = require_customer(found)
    orders = await list_customer_open_orders(client, customer.id)
    if request.selected_order_ids:
        wanted = set(request.selected_order_ids)
        orders = [order for order in orders if order.id in wanted]
    if not orders:
        raise OrderValidationError("No open orders to combine")

    if not request.disable_address_check:
        check_addresses(found, customer, orders)

    regular, preorder = aggregate_line_items(
        ((order.name, order.line_items) for order in orders),
        separate_preorders=not request.ignore_preorder_separation,
    )
    if not regular.line_items and not preorder.line_items:
        raise OrderValidationError("No items to combine")

    tag = combined_at_tag()
    options = {
        "inventoryBehaviour": INVENTORY_BEHAVIOUR,
        "sendReceipt": request.send_receipt,
    }

    async def _create(group: CombinedGroup) -> Optional[CreatedOrder]:
        line_items = group.line_items
        if not line_items:
            return None
        logger.info(
            "Combining into %s: %s",
            group.name,
            [(item.variant_id, item.quantity) for item in line_items],
        )
        order_input = build_order_input(group, customer, found.shipping_address, tag)
        return await create_order(client, order_input, options)

    completed = await _create(regular)
    preorder_completed = await _create(preorder)

    cancelled: List[str] = []
    for order in orders:
        await cancel_order(
            client,
            order.id,
            reason=CANCEL_REASON_COMBINED,
            staff_note=COMBINED_STAFF_NOTE,
        )
        cancelled.append(order.id)

    plural = "orders" if completed and preorder_completed else "order"
    return CombineResponse(
        success=True,
        message=f"New combined {plural} created, and original orders canceled successfully",
        completed_order=completed,
        preorder_completed_order=preorder_completed,
        cancelled_order_ids=cancelled,
    )
