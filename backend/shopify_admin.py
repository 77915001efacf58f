from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from config import Settings
from errors import ShopifyAPIError, ShopifyUserError

logger = logging.getLogger("order-tools")


def numeric_id(gid: str) -> str:
    """``gid://shopify/Order/123`` -> ``123``."""
    return str(gid).rsplit("/", 1)[-1]


def admin_order_url(shop_domain: str, order_gid: str) -> str:
    return f"https://{shop_domain}/admin/orders/{numeric_id(order_gid)}"


def raise_for_user_errors(payload: Optional[Dict[str, Any]], operation: str) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise ShopifyAPIError(f"Empty response from {operation}")
    user_errors = payload.get("userErrors") or []
    if user_errors:
        messages = [
            str(error.get("message") or error) if isinstance(error, dict) else str(error)
            for error in user_errors
        ]
        logger.error("%s returned user errors: %s", operation, messages)
        raise ShopifyUserError(operation, messages)
    return payload


class ShopifyAdminClient:
    def __init__(
        self,
        shop_domain: str,
        access_token: str,
        api_version: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.shop_domain = shop_domain
        self.api_version = api_version
        self.timeout = timeout
        self._transport = transport
        self._headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": access_token,
        }

    @property
    def graphql_url(self) -> str:
        return f"https://{self.shop_domain}/admin/api/{self.api_version}/graphql.json"

    async def graphql(
        self, query: str, variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        payload = {"query": query, "variables": variables or {}}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.graphql_url, json=payload, headers=self._headers
                )
        except httpx.HTTPError as exc:
            logger.error("GraphQL request to %s failed: %s", self.shop_domain, exc)
            raise ShopifyAPIError(f"Shopify request failed: {exc}") from exc

        if response.status_code != 200:
            logger.error(
                "GraphQL request failed with status %s: %s",
                response.status_code,
                response.text,
            )
            raise ShopifyAPIError(
                f"Shopify responded with status {response.status_code}"
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise ShopifyAPIError("Shopify returned an invalid JSON body") from exc
        errors = body.get("errors")
        if errors:
            if isinstance(errors, list):
                message = ", ".join(
                    str(err.get("message") or err) if isinstance(err, dict) else str(err)
                    for err in errors
                )
            else:
                message = str(errors)
            logger.error("GraphQL errors: %s", message)
            raise ShopifyAPIError(message)
        return body.get("data") or {}


def create_admin_client(settings: Settings) -> ShopifyAdminClient:
    return ShopifyAdminClient(
        shop_domain=settings.shopify_shop_domain,
        access_token=settings.shopify_access_token,
        api_version=settings.shopify_api_version,
        timeout=settings.shopify_timeout_seconds,
    )
