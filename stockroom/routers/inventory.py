from fastapi import APIRouter, Depends

from stockroom.config import get_settings
from stockroom.core.deadlines import Deadline
from stockroom.dependencies import get_repository, request_deadline, require_tenant
from stockroom.repositories.inventory import InventoryRepository
from stockroom.services.sample_data import ensure_sample_data

router = APIRouter(tags=["Inventory"])


@router.get("/inventory/summary")
def inventory_summary(
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    return {"summary": repository.summarize(tenant_id, deadline=deadline)}


@router.post("/init-sample-data")
def init_sample_data(
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    result = ensure_sample_data(
        repository,
        tenant_id,
        stale_seconds=get_settings().SEED_LOCK_STALE_SECONDS,
        deadline=deadline,
    )
    return {"success": True, "message": result.message, "created": result.created}


__all__ = ["router"]
