import logging
from collections import Counter
from typing import Dict, List, Sequence

from config import settings
from schemas import Order, ScanLine, ScanOrderResponse, ScanResponse
from services.orders_service import find_order_by_name
from shopify_admin import ShopifyAdminClient, admin_order_url

logger = logging.getLogger("order-tools")


def required_quantities(order: Order) -> Dict[str, int]:
    required: Dict[str, int] = {}
    for item in order.line_items:
        if item.sku and item.quantity > 0:
            required[item.sku] = required.get(item.sku, 0) + item.quantity
    return required


def _valid_entries(entered_skus: Sequence[str], required: Dict[str, int]) -> List[str]:
    """Drop unknown SKUs and anything scanned beyond the ordered quantity."""
    seen: Counter = Counter()
    valid: List[str] = []
    for sku in entered_skus:
        if seen[sku] < required.get(sku, 0):
            seen[sku] += 1
            valid.append(sku)
    return valid


def build_progress(order: Order, entered_skus: Sequence[str]) -> ScanOrderResponse:
    required = required_quantities(order)
    entered = _valid_entries(entered_skus, required)
    counts = Counter(entered)
    # Lines sharing a SKU are filled in order.
    available = dict(counts)
    lines: List[ScanLine] = []
    unscannable: List[str] = []
    for item in order.line_items:
        if not item.sku:
            unscannable.append(item.name)
            scanned = 0
        else:
            scanned = min(available.get(item.sku, 0), item.quantity)
            available[item.sku] = available.get(item.sku, 0) - scanned
        lines.append(
            ScanLine(
                line_item_id=item.id,
                name=item.name,
                sku=item.sku,
                quantity=item.quantity,
                scanned=scanned,
                completed=bool(item.sku) and scanned >= item.quantity,
            )
        )
    complete = bool(required) and all(
        counts.get(sku, 0) == quantity for sku, quantity in required.items()
    )
    return ScanOrderResponse(
        order_id=order.id,
        order_number=order.name,
        lines=lines,
        entered_skus=entered,
        unscannable_items=unscannable,
        complete=complete,
        admin_url=admin_order_url(settings.shopify_shop_domain, order.id) if complete else None,
    )


def register_scan(order: Order, entered_skus: Sequence[str], sku: str) -> ScanResponse:
    scanned = (sku or "").strip()
    required = required_quantities(order)
    entered = _valid_entries(entered_skus, required)
    accepted = bool(scanned) and entered.count(scanned) < required.get(scanned, 0)
    if accepted:
        entered.append(scanned)
    else:
        logger.info("Rejected SKU %r for order %s", scanned, order.name)
    progress = build_progress(order, entered)
    return ScanResponse(accepted=accepted, **progress.model_dump())


async def load_scan_order(client: ShopifyAdminClient, order_number: str) -> ScanOrderResponse:
    order = await find_order_by_name(client, order_number)
    return build_progress(order, [])


async def scan_sku(
    client: ShopifyAdminClient,
    order_number: str,
    entered_skus: Sequence[str],
    sku: str,
) -> ScanResponse:
    order = await find_order_by_name(client, order_number)
    return register_scan(order, entered_skus, sku)
