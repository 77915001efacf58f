import asyncio
import json

import httpx
import pytest

from config import settings
from errors import ShopifyAPIError, ShopifyUserError
from shopify_admin import (
    ShopifyAdminClient,
    admin_order_url,
    create_admin_client,
    numeric_id,
    raise_for_user_errors,
)


def _client(handler) -> ShopifyAdminClient:
    return ShopifyAdminClient(
        shop_domain="test-store.myshopify.com",
        access_token="shpat_test",
        api_version="2025-01",
        transport=httpx.MockTransport(handler),
    )


def test_graphql_posts_query_and_returns_data():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["token"] = request.headers["X-Shopify-Access-Token"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"shop": {"name": "Test"}}})

    data = asyncio.run(_client(handler).graphql("query shop { shop { name } }", {"a": 1}))

    assert data == {"shop": {"name": "Test"}}
    assert seen["url"] == "https://test-store.myshopify.com/admin/api/2025-01/graphql.json"
    assert seen["token"] == "shpat_test"
    assert seen["body"] == {"query": "query shop { shop { name } }", "variables": {"a": 1}}


def test_graphql_errors_raise():
    def handler(request):
        return httpx.Response(
            200, json={"errors": [{"message": "Throttled"}, {"message": "Field missing"}]}
        )

    with pytest.raises(ShopifyAPIError, match="Throttled, Field missing"):
        asyncio.run(_client(handler).graphql("query shop { shop { name } }"))


def test_http_status_raises():
    def handler(request):
        return httpx.Response(401, text="Invalid API key or access token")

    with pytest.raises(ShopifyAPIError, match="status 401"):
        asyncio.run(_client(handler).graphql("query shop { shop { name } }"))


def test_transport_failure_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ShopifyAPIError, match="connection refused"):
        asyncio.run(_client(handler).graphql("query shop { shop { name } }"))


def test_user_errors():
    assert raise_for_user_errors({"userErrors": [], "order": {}}, "orderCreate") == {
        "userErrors": [],
        "order": {},
    }
    with pytest.raises(ShopifyUserError) as excinfo:
        raise_for_user_errors(
            {"userErrors": [{"field": ["name"], "message": "Name is taken"}]}, "orderCreate"
        )
    assert str(excinfo.value) == "Name is taken"
    assert excinfo.value.operation == "orderCreate"
    with pytest.raises(ShopifyAPIError):
        raise_for_user_errors(None, "orderCancel")


def test_id_helpers():
    assert numeric_id("gid://shopify/Order/5531567751245") == "5531567751245"
    assert admin_order_url("s.myshopify.com", "gid://shopify/Order/42") == (
        "https://s.myshopify.com/admin/orders/42"
    )


def test_factory_uses_settings():
    client = create_admin_client(settings)
    assert client.graphql_url == (
        "https://test-store.myshopify.com/admin/api/2025-01/graphql.json"
    )
