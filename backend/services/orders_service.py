import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from config import settings
from constants import COMBINED_ORDER_SUFFIX, OPEN_UNFULFILLED_QUERY, TAGGED_ORDERS_PAGE_SIZE
from errors import OrderNotFoundError, OrderValidationError
from graphql_queries import CUSTOMER_OPEN_ORDERS, ORDER_BY_NAME, TAGGED_ORDERS
from schemas import (
    Customer,
    CustomerOrder,
    LineItem,
    MailingAddress,
    Order,
    OrderLookupResponse,
    UnfulfilledOrder,
)
from services.addresses import addresses_match, normalize_address
from shopify_admin import ShopifyAdminClient, numeric_id

logger = logging.getLogger("order-tools")


def _parse_int(value: Any) -> Optional[int]:
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _nodes(connection: Any) -> List[Dict[str, Any]]:
    if not isinstance(connection, dict):
        return []
    if isinstance(connection.get("nodes"), list):
        return connection["nodes"]
    edges = connection.get("edges")
    if not isinstance(edges, list):
        return []
    return [edge["node"] for edge in edges if isinstance(edge, dict) and edge.get("node")]


def _format_line_item(raw: Dict[str, Any]) -> LineItem:
    variant = raw.get("variant") or {}
    return LineItem(
        id=str(raw.get("id") or ""),
        name=raw.get("name") or "",
        quantity=_parse_int(raw.get("quantity")) or 0,
        unfulfilled_quantity=_parse_int(raw.get("unfulfilledQuantity")),
        variant_id=variant.get("id"),
        sku=variant.get("sku") or None,
    )


def _format_customer(raw: Optional[Dict[str, Any]]) -> Optional[Customer]:
    if not raw or not raw.get("id"):
        return None
    return Customer(
        id=raw["id"],
        first_name=raw.get("firstName"),
        last_name=raw.get("lastName"),
        email=raw.get("email"),
    )


def _format_address(raw: Optional[Dict[str, Any]]) -> Optional[MailingAddress]:
    if not raw:
        return None
    return MailingAddress(
        address1=raw.get("address1"),
        address2=raw.get("address2"),
        city=raw.get("city"),
        country=raw.get("country"),
        province=raw.get("province"),
        zip=raw.get("zip"),
    )


def format_order(raw: Dict[str, Any]) -> Order:
    money = ((raw.get("totalPriceSet") or {}).get("shopMoney")) or {}
    return Order(
        id=raw["id"],
        name=raw.get("name") or "",
        created_at=_parse_datetime(raw.get("createdAt")),
        total_price=money.get("amount"),
        currency_code=money.get("currencyCode"),
        tags=list(raw.get("tags") or []),
        line_items=[_format_line_item(node) for node in _nodes(raw.get("lineItems"))],
        customer=_format_customer(raw.get("customer")),
        shipping_address=_format_address(raw.get("shippingAddress")),
    )


async def find_order_by_name(client: ShopifyAdminClient, order_number: str) -> Order:
    name = (order_number or "").strip()
    if not name:
        raise OrderValidationError("Order number is required.")
    data = await client.graphql(ORDER_BY_NAME, {"query": f"name:{name}"})
    nodes = _nodes(data.get("orders"))
    if not nodes:
        raise OrderNotFoundError("Order not found")
    return format_order(nodes[0])


async def list_tagged_orders(client: ShopifyAdminClient) -> List[Order]:
    query = f'{OPEN_UNFULFILLED_QUERY} AND tag:"{settings.combine_tag}"'
    orders: List[Order] = []
    cursor: Optional[str] = None
    while True:
        data = await client.graphql(
            TAGGED_ORDERS,
            {"query": query, "first": TAGGED_ORDERS_PAGE_SIZE, "cursor": cursor},
        )
        connection = data.get("orders") or {}
        orders.extend(format_order(node) for node in _nodes(connection))
        page_info = connection.get("pageInfo") or {}
        cursor = page_info.get("endCursor")
        if not page_info.get("hasNextPage") or not cursor:
            break
    # Orders that are already the product of a combine are not offered again.
    return [order for order in orders if not order.name.endswith(COMBINED_ORDER_SUFFIX)]


async def list_customer_open_orders(
    client: ShopifyAdminClient, customer_id: str
) -> List[Order]:
    query = f"{OPEN_UNFULFILLED_QUERY} AND customer_id:{numeric_id(customer_id)}"
    data = await client.graphql(
        CUSTOMER_OPEN_ORDERS,
        {"query": query, "first": settings.customer_orders_limit},
    )
    return [format_order(node) for node in _nodes(data.get("orders"))]


def _is_unfulfilled(item: LineItem) -> bool:
    if item.unfulfilled_quantity is None:
        return True
    return item.unfulfilled_quantity > 0


def require_customer(order: Order) -> Customer:
    if order.customer is None:
        raise OrderValidationError(f"Order {order.name} has no customer.")
    return order.customer


async def lookup_order(client: ShopifyAdminClient, order_number: str) -> OrderLookupResponse:
    found = await find_order_by_name(client, order_number)
    customer = require_customer(found)
    reference = normalize_address(found.shipping_address, customer)
    orders = await list_customer_open_orders(client, customer.id)
    customer_orders = [
        CustomerOrder(
            id=order.id,
            order_number=order.name,
            total_price=order.total_price,
            created_at=order.created_at,
            line_items=order.line_items,
            shipping_address=order.shipping_address,
            address_matches=addresses_match(
                reference, normalize_address(order.shipping_address, customer)
            ),
        )
        for order in orders
    ]
    logger.info(
        "Order %s: customer %s has %d open unfulfilled orders",
        found.name,
        customer.id,
        len(customer_orders),
    )
    return OrderLookupResponse(
        unfulfilled_order=UnfulfilledOrder(
            order_number=found.name,
            total_price=found.total_price,
            unfulfilled_items=[item for item in found.line_items if _is_unfulfilled(item)],
        ),
        customer_orders=customer_orders,
    )
