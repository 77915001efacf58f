from datetime import datetime, timezone

from services.combine_service import combined_at_tag
from tests.factories import (
    DEFAULT_ADDRESS,
    gid,
    line_item_node,
    order_cancel_data,
    order_create_data,
    order_node,
    orders_data,
    user_errors,
)

FREE = "Free and Easy Returns or Exchanges"


def _setup(admin, *customer_orders, found=None):
    found = found or order_node(1001, "#1001", [line_item_node(9, "Shirt", 2, variant=11)])
    admin.on("getOrder", orders_data(found))
    admin.on("getCustomerOrders", orders_data(*customer_orders))
    admin.on("orderCancel", order_cancel_data())
    return found


def test_combine_splits_regular_and_preorder_items(client, admin):
    newest = order_node(
        1003,
        "#1003",
        [
            line_item_node(1, "Shirt", 1, variant=11),
            line_item_node(2, "Poster - PREORDER", 1, variant=22),
        ],
    )
    oldest = order_node(
        1001,
        "#1001",
        [
            line_item_node(3, "Shirt", 2, variant=11),
            line_item_node(4, FREE, 1, variant=99),
        ],
    )
    _setup(admin, newest, oldest)
    admin.on("OrderCreate", order_create_data(2001, "#1003-C"), order_create_data(2002, "#1003-C"))

    response = client.post("/api/orders/combine", json={"order_number": "#1001"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "New combined orders created, and original orders canceled successfully"
    assert body["completed_order"]["id"] == gid("Order", 2001)
    assert body["completed_order"]["admin_url"] == "https://test-store.myshopify.com/admin/orders/2001"
    assert body["preorder_completed_order"]["id"] == gid("Order", 2002)
    assert body["cancelled_order_ids"] == [gid("Order", 1003), gid("Order", 1001)]
    assert admin.operations == [
        "getOrder",
        "getCustomerOrders",
        "OrderCreate",
        "OrderCreate",
        "orderCancel",
        "orderCancel",
    ]

    regular, preorder = admin.variables("OrderCreate")
    order = regular["order"]
    assert order["name"] == "#1003-C"
    assert [(i["variantId"], i["quantity"]) for i in order["lineItems"]] == [
        (gid("ProductVariant", 11), 3),
        (gid("ProductVariant", 99), 1),
    ]
    assert all(i["requiresShipping"] for i in order["lineItems"])
    assert order["lineItems"][0]["priceSet"] == {
        "shopMoney": {"amount": "0.00", "currencyCode": "USD"}
    }
    assert order["customerId"] == gid("Customer", 77)
    assert order["shippingAddress"]["firstName"] == "Jo"
    assert order["shippingAddress"]["address1"] == DEFAULT_ADDRESS["address1"]
    assert order["billingAddress"] == order["shippingAddress"]
    assert order["shippingLines"][0]["title"] == "Standard Shipping"
    assert order["financialStatus"] == "PAID"
    assert order["tags"][0].startswith("Combined at: ")
    assert regular["options"] == {
        "inventoryBehaviour": "DECREMENT_IGNORING_POLICY",
        "sendReceipt": True,
    }
    assert [(i["variantId"], i["quantity"]) for i in preorder["order"]["lineItems"]] == [
        (gid("ProductVariant", 22), 1)
    ]

    cancel = admin.variables("orderCancel")[0]
    assert cancel["reason"] == "OTHER"
    assert cancel["refund"] is False
    assert cancel["restock"] is True
    assert cancel["staffNote"] == "Order combined with other orders"


def test_combine_ignoring_preorders_creates_one_order(client, admin):
    _setup(
        admin,
        order_node(1003, "#1003", [line_item_node(1, "Poster PREORDER", 1, variant=22)]),
        order_node(1001, "#1001", [line_item_node(2, "Shirt", 1, variant=11)]),
    )
    admin.on("OrderCreate", order_create_data(2001, "#1003-C"))

    response = client.post(
        "/api/orders/combine",
        json={"order_number": "#1001", "ignore_preorder_separation": True, "send_receipt": False},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "New combined order created, and original orders canceled successfully"
    assert body["preorder_completed_order"] is None
    (create,) = admin.variables("OrderCreate")
    assert len(create["order"]["lineItems"]) == 2
    assert create["options"]["sendReceipt"] is False


def test_combine_only_selected_orders(client, admin):
    _setup(
        admin,
        order_node(1003, "#1003", [line_item_node(1, "Shirt", 1, variant=11)]),
        order_node(1002, "#1002", [line_item_node(2, "Mug", 1, variant=12)]),
        order_node(1001, "#1001", [line_item_node(3, "Hat", 1, variant=13)]),
    )
    admin.on("OrderCreate", order_create_data(2001, "#1003-C"))

    response = client.post(
        "/api/orders/combine",
        json={
            "order_number": "#1001",
            "selected_order_ids": [gid("Order", 1003), gid("Order", 1001)],
        },
    )

    assert response.status_code == 200
    assert response.json()["cancelled_order_ids"] == [gid("Order", 1003), gid("Order", 1001)]
    (create,) = admin.variables("OrderCreate")
    assert [i["variantId"] for i in create["order"]["lineItems"]] == [
        gid("ProductVariant", 11),
        gid("ProductVariant", 13),
    ]


def test_combine_rejects_different_address(client, admin):
    elsewhere = dict(DEFAULT_ADDRESS, city="Boulder")
    _setup(
        admin,
        order_node(1003, "#1003", [line_item_node(1, "Shirt", 1, variant=11)], address=elsewhere),
        order_node(1001, "#1001", [line_item_node(2, "Mug", 1, variant=12)]),
    )

    response = client.post("/api/orders/combine", json={"order_number": "#1001"})

    assert response.status_code == 400
    assert "order #1003 does not match" in response.json()["detail"]
    assert "OrderCreate" not in admin.operations
    assert "orderCancel" not in admin.operations


def test_combine_address_check_can_be_disabled(client, admin):
    elsewhere = dict(DEFAULT_ADDRESS, city="Boulder")
    _setup(
        admin,
        order_node(1003, "#1003", [line_item_node(1, "Shirt", 1, variant=11)], address=elsewhere),
        order_node(1001, "#1001", [line_item_node(2, "Mug", 1, variant=12)]),
    )
    admin.on("OrderCreate", order_create_data(2001, "#1003-C"))

    response = client.post(
        "/api/orders/combine",
        json={"order_number": "#1001", "disable_address_check": True},
    )

    assert response.status_code == 200
    # The new order ships to the looked-up order's address.
    (create,) = admin.variables("OrderCreate")
    assert create["order"]["shippingAddress"]["city"] == "Denver"


def test_combine_without_items(client, admin):
    _setup(admin, order_node(1001, "#1001", [line_item_node(1, "Gift note", 1)]))

    response = client.post("/api/orders/combine", json={"order_number": "#1001"})

    assert response.status_code == 400
    assert response.json()["detail"] == "No items to combine"
    assert "orderCancel" not in admin.operations


def test_combine_stops_on_user_errors(client, admin):
    _setup(admin, order_node(1001, "#1001", [line_item_node(1, "Shirt", 1, variant=11)]))
    admin.on("OrderCreate", user_errors("orderCreate", "Name has already been taken", "Bad variant"))

    response = client.post("/api/orders/combine", json={"order_number": "#1001"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Name has already been taken, Bad variant"
    assert "orderCancel" not in admin.operations


def test_combine_unknown_order(client, admin):
    admin.on("getOrder", orders_data())

    response = client.post("/api/orders/combine", json={"order_number": "#404"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"


def test_customer_orders_query(client, admin):
    _setup(admin, order_node(1001, "#1001", [line_item_node(1, "Shirt", 1, variant=11)]))
    admin.on("OrderCreate", order_create_data(2001, "#1001-C"))

    client.post("/api/orders/combine", json={"order_number": " #1001 "})

    assert admin.variables("getOrder") == [{"query": "name:#1001"}]
    assert admin.variables("getCustomerOrders") == [
        {
            "query": "status:open AND fulfillment_status:unfulfilled AND customer_id:77",
            "first": 250,
        }
    ]


def test_combined_at_tag_uses_store_timezone():
    afternoon = datetime(2026, 1, 5, 22, 4, 5, tzinfo=timezone.utc)
    midnight = datetime(2026, 7, 5, 6, 0, 9, tzinfo=timezone.utc)
    assert combined_at_tag(afternoon) == "Combined at: 1/5/2026, 3:04:05 PM"
    assert combined_at_tag(midnight) == "Combined at: 7/5/2026, 12:00:09 AM"


def test_combine_with_unknown_selection_changes_nothing(client, admin):
    _setup(admin, order_node(1001, "#1001", [line_item_node(9, "Shirt", 2, variant=11)]))

    response = client.post(
        "/api/orders/combine",
        json={"order_number": "#1001", "selected_order_ids": [gid("Order", 5)]},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "No open orders to combine"
    assert "OrderCreate" not in admin.operations
    assert "orderCancel" not in admin.operations
