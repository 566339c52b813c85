from __future__ import annotations

import logging
from typing import Any, Optional

from stockroom.core.constants import ENTITY_PRODUCT
from stockroom.core.dates import utc_now
from stockroom.core.deadlines import Deadline
from stockroom.core.errors import NotFoundError, ValidationError
from stockroom.core.stock_rules import clamp_quantity, restock_amount
from stockroom.repositories.base import TenantRepository
from stockroom.schemas.product import Product, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)


def _require_delta(delta) -> int:
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise ValidationError("quantityChange must be an integer")
    return delta


class ProductRepository(TenantRepository):
    entity_kind = ENTITY_PRODUCT
    label = "Product"
    record_cls = Product

    def list(self, tenant_id: str, *, deadline: Optional[Deadline] = None) -> list[Product]:
        return self._scan(tenant_id, deadline)

    def get(self, tenant_id: str, product_id: str, *, deadline: Optional[Deadline] = None) -> Product:
        product, _version = self._load(tenant_id, product_id, deadline)
        return product

    def create(
        self,
        tenant_id: str,
        fields: dict[str, Any],
        *,
        deadline: Optional[Deadline] = None,
    ) -> Product:
        payload = ProductCreate.build(fields)
        key = self.namespacer.new_key(tenant_id, self.entity_kind)
        product = Product.build(
            {
                **payload.supplied(),
                "id": key,
                "ownerId": tenant_id,
                "createdAt": utc_now(),
            }
        )
        self._insert(product, deadline)
        logger.info("Created product %s (sku %s)", key, product.sku, extra={"tenant_id": tenant_id})
        return product

    def update(
        self,
        tenant_id: str,
        product_id: str,
        partial: dict[str, Any],
        *,
        deadline: Optional[Deadline] = None,
    ) -> Product:
        changes = ProductUpdate.build(partial).supplied()

        def merge(current: Product) -> Product:
            return Product.build({**current.to_store(), **changes, "updatedAt": utc_now()})

        _previous, updated = self._mutate(
            tenant_id, product_id, merge, deadline=deadline, operation="update"
        )
        return updated

    def _change_stock(self, tenant_id, product_id, compute_delta, *, deadline, operation):
        def adjust(current: Product) -> Product:
            delta = compute_delta(current)
            if current.quantity + delta < 0:
                logger.info(
                    "Clamped stock of %s at zero: requested %s with %s on hand",
                    product_id,
                    delta,
                    current.quantity,
                    extra={"tenant_id": tenant_id, "entity_key": product_id},
                )
            return current.model_copy(
                update={
                    "quantity": clamp_quantity(current.quantity, delta),
                    "updated_at": utc_now(),
                }
            )

        return self._mutate(tenant_id, product_id, adjust, deadline=deadline, operation=operation)

    def apply_stock_delta(
        self,
        tenant_id: str,
        product_id: str,
        delta: int,
        *,
        deadline: Optional[Deadline] = None,
    ) -> tuple[Product, Product]:
        """Adjust stock and return the product before and after the change."""
        delta = _require_delta(delta)
        return self._change_stock(
            tenant_id,
            product_id,
            lambda _current: delta,
            deadline=deadline,
            operation="adjust_stock",
        )

    def adjust_stock(
        self,
        tenant_id: str,
        product_id: str,
        delta: int,
        *,
        deadline: Optional[Deadline] = None,
    ) -> Product:
        _previous, updated = self.apply_stock_delta(tenant_id, product_id, delta, deadline=deadline)
        return updated

    def apply_restock(
        self,
        tenant_id: str,
        product_id: str,
        *,
        deadline: Optional[Deadline] = None,
    ) -> tuple[Product, Product]:
        """Top up by ``max(10, 2 * reorderLevel)`` units."""
        return self._change_stock(
            tenant_id,
            product_id,
            lambda current: restock_amount(current.reorder_level),
            deadline=deadline,
            operation="restock",
        )

    def delete(self, tenant_id: str, product_id: str, *, deadline: Optional[Deadline] = None) -> None:
        self.namespacer.require_owned(product_id, tenant_id, self.entity_kind, self.label)
        if not self.store.delete(product_id, deadline=deadline):
            raise NotFoundError("Product not found")
        logger.info("Deleted product %s", product_id, extra={"tenant_id": tenant_id})


__all__ = ["ProductRepository"]
