import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent / ".env")


def _require_env(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing required environment variable: {name}")
    return value


def _get_list(name: str, fallback: str = "") -> List[str]:
    raw_value = os.getenv(name, fallback)
    if not raw_value:
        return []
    return [item.strip() for item in raw_value.split(",") if item.strip()]


def _normalize_shop_domain(value: str) -> str:
    domain = value.strip()
    for prefix in ("https://", "http://"):
        if domain.lower().startswith(prefix):
            domain = domain[len(prefix):]
    return domain.strip().strip("/")


@dataclass(frozen=True)
class Settings:
    shopify_shop_domain: str = _normalize_shop_domain(_require_env("SHOPIFY_SHOP_DOMAIN"))
    shopify_access_token: str = _require_env("SHOPIFY_ACCESS_TOKEN")
    shopify_api_version: str = os.getenv("SHOPIFY_API_VERSION", "2025-01")
    shopify_timeout_seconds: float = float(os.getenv("SHOPIFY_TIMEOUT_SECONDS", "30"))
    app_access_token: str | None = os.getenv("APP_ACCESS_TOKEN") or None
    store_timezone: str = os.getenv("STORE_TIMEZONE", "America/Denver")
    store_currency: str = os.getenv("STORE_CURRENCY", "USD")
    combine_tag: str = os.getenv("COMBINE_TAG", "combine this")
    customer_orders_limit: int = int(os.getenv("CUSTOMER_ORDERS_LIMIT", "250"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    allowed_origins: List[str] = field(
        default_factory=lambda: _get_list("ALLOWED_ORIGINS", "*")
    )


settings = Settings()
