from .draft_orders import router as draft_orders_router
from .info import router as info_router
from .orders import router as orders_router
from .scanning import router as scanning_router
from .split import router as split_router

__all__ = [
    "draft_orders_router",
    "info_router",
    "orders_router",
    "scanning_router",
    "split_router",
]
