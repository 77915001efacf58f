import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import (
    draft_orders_router,
    info_router,
    orders_router,
    scanning_router,
    split_router,
)
from config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("order-tools")

app = FastAPI(title="Order Tools API")

if settings.allowed_origins == ["*"]:
    allow_origins = ["*"]
else:
    allow_origins = settings.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(info_router)
app.include_router(orders_router)
app.include_router(split_router)
app.include_router(scanning_router)
app.include_router(draft_orders_router)


@app.on_event("startup")
async def _on_startup() -> None:
    logger.info(
        "Order tools ready for %s (Admin API %s)",
        settings.shopify_shop_domain,
        settings.shopify_api_version,
    )
    if allow_origins == ["*"]:
        logger.warning(
            "CORS is set to allow all origins with credentials; set ALLOWED_ORIGINS to explicit values outside local dev."
        )


@app.middleware("http")
async def log_mutations(request, call_next):
    response = await call_next(request)
    if request.method not in ("GET", "HEAD", "OPTIONS"):
        logger.info(
            "%s %s -> %s", request.method, request.url.path, response.status_code
        )
    return response


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", 8000)))
