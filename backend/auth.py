import secrets

from fastapi import Header, HTTPException, status

from config import settings
from shopify_admin import ShopifyAdminClient, create_admin_client


async def require_staff(
    authorization: str | None = Header(default=None, convert_underscores=False),
) -> None:
    if not settings.app_access_token:
        return
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing auth token"
        )
    token = authorization.split(" ", 1)[1]
    if not secrets.compare_digest(token, settings.app_access_token):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid auth token"
        )


async def get_admin_client() -> ShopifyAdminClient:
    return create_admin_client(settings)
