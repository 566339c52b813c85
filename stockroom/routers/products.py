from typing import Any

from fastapi import APIRouter, Body, Depends

from stockroom.core.deadlines import Deadline
from stockroom.dependencies import get_repository, request_deadline, require_tenant
from stockroom.repositories.inventory import InventoryRepository
from stockroom.schemas.product import StockAdjustment

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("")
def list_products(
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    products = repository.list_products(tenant_id, deadline=deadline)
    return {"products": [product.to_public() for product in products]}


@router.post("")
def create_product(
    payload: dict[str, Any] = Body(...),
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    product = repository.create_product(tenant_id, payload, deadline=deadline)
    return {"success": True, "product": product.to_public()}


@router.get("/{product_id}")
def get_product(
    product_id: str,
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    product = repository.get_product(tenant_id, product_id, deadline=deadline)
    return {"product": product.to_public()}


@router.put("/{product_id}")
def update_product(
    product_id: str,
    payload: dict[str, Any] = Body(...),
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    product = repository.update_product(tenant_id, product_id, payload, deadline=deadline)
    return {"success": True, "product": product.to_public()}


@router.put("/{product_id}/stock")
def adjust_stock(
    product_id: str,
    payload: dict[str, Any] = Body(...),
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    adjustment = StockAdjustment.build(payload)
    product = repository.adjust_stock(
        tenant_id, product_id, adjustment.quantity_change, deadline=deadline
    )
    return {"success": True, "product": product.to_public()}


@router.post("/{product_id}/restock")
def restock_product(
    product_id: str,
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    product, restocked = repository.restock(tenant_id, product_id, deadline=deadline)
    return {"success": True, "product": product.to_public(), "restocked": restocked}


@router.delete("/{product_id}")
def delete_product(
    product_id: str,
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    repository.delete_product(tenant_id, product_id, deadline=deadline)
    return {"success": True}


__all__ = ["router"]
