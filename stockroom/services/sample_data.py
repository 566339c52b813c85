"""Demonstration catalog for a tenant's first dashboard view."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from stockroom.core.constants import (
    ENTITY_META,
    NOTIFICATION_LOW_STOCK,
    NOTIFICATION_OUT_OF_STOCK,
    NOTIFICATION_REORDER,
    SAMPLE_DATA_LOCK_ID,
)
from stockroom.core.dates import isoformat, parse_timestamp, utc_now
from stockroom.core.deadlines import Deadline
from stockroom.core.errors import ConflictError, StoreUnavailableError
from stockroom.database.kv_store import MUST_NOT_EXIST

logger = logging.getLogger(__name__)

DEFAULT_LOCK_STALE_SECONDS = 60

MESSAGE_SEEDED = "Sample data and notifications initialized for user"
MESSAGE_EXISTS = "Sample data already exists for this user"
MESSAGE_IN_PROGRESS = "Sample data is already being initialized for this user"

SAMPLE_PRODUCTS = (
    {"name": "Wireless Bluetooth Headphones", "sku": "WBH-001", "quantity": 45, "price": 89.99, "reorderLevel": 20},
    {"name": "USB-C Charging Cable", "sku": "USB-002", "quantity": 8, "price": 19.99, "reorderLevel": 15},
    {"name": "Portable Power Bank", "sku": "PPB-003", "quantity": 32, "price": 49.99, "reorderLevel": 10},
    {"name": "Wireless Mouse", "sku": "WM-004", "quantity": 67, "price": 34.99, "reorderLevel": 25},
    {"name": "Mechanical Keyboard", "sku": "MK-005", "quantity": 5, "price": 129.99, "reorderLevel": 12},
    {"name": "Monitor Stand", "sku": "MS-006", "quantity": 18, "price": 39.99, "reorderLevel": 8},
    {"name": "Desk Lamp LED", "sku": "DL-007", "quantity": 23, "price": 59.99, "reorderLevel": 15},
    {"name": "Ergonomic Chair Cushion", "sku": "ECC-008", "quantity": 2, "price": 79.99, "reorderLevel": 10},
)

# (sku, type, title, message, read, hours ago)
SAMPLE_NOTIFICATIONS = (
    (
        "USB-002",
        NOTIFICATION_LOW_STOCK,
        "Low Stock Alert",
        "USB-C Charging Cable is running low on stock (8 units remaining)",
        False,
        1,
    ),
    (
        "ECC-008",
        NOTIFICATION_OUT_OF_STOCK,
        "Out of Stock Alert",
        "Ergonomic Chair Cushion is out of stock and needs immediate restocking",
        False,
        2,
    ),
    (
        "MK-005",
        NOTIFICATION_REORDER,
        "Reorder Recommendation",
        "Mechanical Keyboard has reached reorder level (5 units remaining)",
        True,
        24,
    ),
)


@dataclass(frozen=True)
class SeedResult:
    created: bool
    message: str


def _is_stale(claimed_at: Optional[datetime], now: datetime, stale_seconds: int) -> bool:
    if claimed_at is None:
        return True
    return now - claimed_at > timedelta(seconds=stale_seconds)


def _claim_seed_lock(store, lock_key, stale_seconds, deadline) -> bool:
    now = utc_now()
    claim = {"claimedAt": isoformat(now)}
    try:
        store.set(lock_key, claim, expected_version=MUST_NOT_EXIST, deadline=deadline)
        return True
    except ConflictError:
        existing = store.get(lock_key, deadline=deadline)

    if existing is None:
        # Released between our insert and read: the other seeder has finished.
        return False
    if not _is_stale(parse_timestamp(existing.value.get("claimedAt")), now, stale_seconds):
        return False

    try:
        store.set(lock_key, claim, expected_version=existing.version, deadline=deadline)
    except ConflictError:
        return False
    logger.warning("Took over stale sample-data claim %s", lock_key)
    return True


def _release_seed_lock(store, lock_key) -> None:
    try:
        store.delete(lock_key)
    except StoreUnavailableError:
        logger.warning("Could not release %s; it expires once stale", lock_key)


def _seed(repository, tenant_id, deadline) -> None:
    products = [
        repository.create_product(tenant_id, dict(fields), deadline=deadline) for fields in SAMPLE_PRODUCTS
    ]
    by_sku = {product.sku: product for product in products}
    now = utc_now()
    for sku, notification_type, title, message, read, hours_ago in SAMPLE_NOTIFICATIONS:
        repository.create_notification(
            tenant_id,
            {
                "type": notification_type,
                "title": title,
                "message": message,
                "read": read,
                "productId": by_sku[sku].id,
                "createdAt": now - timedelta(hours=hours_ago),
            },
            deadline=deadline,
        )


def ensure_sample_data(
    repository,
    tenant_id: str,
    *,
    stale_seconds: int = DEFAULT_LOCK_STALE_SECONDS,
    deadline: Optional[Deadline] = None,
) -> SeedResult:
    """Seed the demonstration catalog once per tenant.

    A tenant that already has products is left alone. Concurrent callers
    race for a per-tenant claim key; losers return without seeding. A crash
    mid-seed can leave a partial catalog, which the product check then
    treats as initialized.
    """
    if repository.list_products(tenant_id, deadline=deadline):
        return SeedResult(created=False, message=MESSAGE_EXISTS)

    lock_key = repository.namespacer.derive_key(tenant_id, ENTITY_META, SAMPLE_DATA_LOCK_ID)
    if not _claim_seed_lock(repository.store, lock_key, stale_seconds, deadline):
        logger.info("Sample data for tenant is already being seeded", extra={"tenant_id": tenant_id})
        return SeedResult(created=False, message=MESSAGE_IN_PROGRESS)

    try:
        if repository.list_products(tenant_id, deadline=deadline):
            return SeedResult(created=False, message=MESSAGE_EXISTS)
        _seed(repository, tenant_id, deadline)
    finally:
        _release_seed_lock(repository.store, lock_key)

    logger.info(
        "Seeded %s sample products and %s notifications",
        len(SAMPLE_PRODUCTS),
        len(SAMPLE_NOTIFICATIONS),
        extra={"tenant_id": tenant_id},
    )
    return SeedResult(created=True, message=MESSAGE_SEEDED)


__all__ = ["SAMPLE_NOTIFICATIONS", "SAMPLE_PRODUCTS", "SeedResult", "ensure_sample_data"]
