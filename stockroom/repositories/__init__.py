from stockroom.repositories.inventory import InventoryRepository
from stockroom.repositories.namespacer import Namespacer
from stockroom.repositories.notifications import NotificationRepository
from stockroom.repositories.products import ProductRepository

__all__ = [
    "InventoryRepository",
    "Namespacer",
    "NotificationRepository",
    "ProductRepository",
]
