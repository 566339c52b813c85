"""Tenant-scoped inventory repository.

Single entry point the HTTP layer talks to. Every call takes the caller's
already-resolved tenant id; keys that do not resolve under that tenant are
reported as missing, never as forbidden.
"""
from __future__ import annotations

from typing import Any, Optional

from stockroom.config import Settings
from stockroom.core.deadlines import Deadline
from stockroom.core.stock_rules import summarize_inventory
from stockroom.database.kv_store import KeyValueStore
from stockroom.repositories.base import DEFAULT_MAX_ATTEMPTS
from stockroom.repositories.namespacer import Namespacer
from stockroom.repositories.notifications import NotificationRepository
from stockroom.repositories.products import ProductRepository
from stockroom.schemas.notification import Notification
from stockroom.schemas.product import Product
from stockroom.services.stock_alerts import notify_threshold_crossing


class InventoryRepository:
    def __init__(
        self,
        store: KeyValueStore,
        namespacer: Optional[Namespacer] = None,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        low_stock_notifications: bool = False,
    ):
        self.store = store
        self.namespacer = namespacer or Namespacer()
        self.products = ProductRepository(store, self.namespacer, max_attempts=max_attempts)
        self.notifications = NotificationRepository(store, self.namespacer, max_attempts=max_attempts)
        self.low_stock_notifications = low_stock_notifications

    @classmethod
    def from_settings(cls, store: KeyValueStore, settings: Settings) -> "InventoryRepository":
        return cls(
            store,
            max_attempts=settings.STOCK_UPDATE_MAX_ATTEMPTS,
            low_stock_notifications=settings.LOW_STOCK_NOTIFICATIONS,
        )

    # Products

    def list_products(self, tenant_id: str, *, deadline: Optional[Deadline] = None) -> list[Product]:
        return self.products.list(tenant_id, deadline=deadline)

    def get_product(self, tenant_id: str, product_id: str, *, deadline: Optional[Deadline] = None) -> Product:
        return self.products.get(tenant_id, product_id, deadline=deadline)

    def create_product(
        self, tenant_id: str, fields: dict[str, Any], *, deadline: Optional[Deadline] = None
    ) -> Product:
        return self.products.create(tenant_id, fields, deadline=deadline)

    def update_product(
        self,
        tenant_id: str,
        product_id: str,
        partial: dict[str, Any],
        *,
        deadline: Optional[Deadline] = None,
    ) -> Product:
        return self.products.update(tenant_id, product_id, partial, deadline=deadline)

    def adjust_stock(
        self, tenant_id: str, product_id: str, delta: int, *, deadline: Optional[Deadline] = None
    ) -> Product:
        previous, updated = self.products.apply_stock_delta(
            tenant_id, product_id, delta, deadline=deadline
        )
        self._after_stock_change(tenant_id, previous, updated, deadline)
        return updated

    def restock(
        self, tenant_id: str, product_id: str, *, deadline: Optional[Deadline] = None
    ) -> tuple[Product, int]:
        previous, updated = self.products.apply_restock(tenant_id, product_id, deadline=deadline)
        self._after_stock_change(tenant_id, previous, updated, deadline)
        return updated, updated.quantity - previous.quantity

    def delete_product(self, tenant_id: str, product_id: str, *, deadline: Optional[Deadline] = None) -> None:
        self.products.delete(tenant_id, product_id, deadline=deadline)

    def summarize(self, tenant_id: str, *, deadline: Optional[Deadline] = None) -> dict[str, Any]:
        return summarize_inventory(self.list_products(tenant_id, deadline=deadline))

    def _after_stock_change(self, tenant_id, previous, updated, deadline):
        if self.low_stock_notifications:
            notify_threshold_crossing(self.notifications, tenant_id, previous, updated, deadline=deadline)

    # Notifications

    def list_notifications(
        self, tenant_id: str, *, deadline: Optional[Deadline] = None
    ) -> list[Notification]:
        return self.notifications.list(tenant_id, deadline=deadline)

    def create_notification(
        self, tenant_id: str, fields: dict[str, Any], *, deadline: Optional[Deadline] = None
    ) -> Notification:
        return self.notifications.create(tenant_id, fields, deadline=deadline)

    def mark_read(
        self, tenant_id: str, notification_id: str, *, deadline: Optional[Deadline] = None
    ) -> Notification:
        return self.notifications.mark_read(tenant_id, notification_id, deadline=deadline)


__all__ = ["InventoryRepository"]
