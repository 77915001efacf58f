import os

# Settings are read at import time.
os.environ["SHOPIFY_SHOP_DOMAIN"] = "https://test-store.myshopify.com/"
os.environ["SHOPIFY_ACCESS_TOKEN"] = "shpat_test"
os.environ["SHOPIFY_API_VERSION"] = "2025-01"
os.environ["APP_ACCESS_TOKEN"] = ""
os.environ["STORE_TIMEZONE"] = "America/Denver"
os.environ["STORE_CURRENCY"] = "USD"
os.environ["COMBINE_TAG"] = "combine this"
os.environ["CUSTOMER_ORDERS_LIMIT"] = "250"

import pytest
from fastapi.testclient import TestClient

from tests.factories import FakeAdminClient


@pytest.fixture
def admin() -> FakeAdminClient:
    return FakeAdminClient()


@pytest.fixture
def client(admin):
    from auth import get_admin_client
    from main import app

    app.dependency_overrides[get_admin_client] = lambda: admin
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
