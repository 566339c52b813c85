from stockroom.routers.health import router as health_router
from stockroom.routers.inventory import router as inventory_router
from stockroom.routers.notifications import router as notifications_router
from stockroom.routers.products import router as products_router

__all__ = [
    "health_router",
    "inventory_router",
    "notifications_router",
    "products_router",
]
