from fastapi import APIRouter, Depends

from stockroom.core.deadlines import Deadline
from stockroom.dependencies import get_repository, request_deadline, require_tenant
from stockroom.repositories.inventory import InventoryRepository

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("")
def list_notifications(
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    notifications = repository.list_notifications(tenant_id, deadline=deadline)
    return {"notifications": [item.to_public() for item in notifications]}


@router.put("/{notification_id}/read")
def mark_notification_read(
    notification_id: str,
    tenant_id: str = Depends(require_tenant),
    repository: InventoryRepository = Depends(get_repository),
    deadline: Deadline = Depends(request_deadline),
):
    notification = repository.mark_read(tenant_id, notification_id, deadline=deadline)
    return {"success": True, "notification": notification.to_public()}


__all__ = ["router"]
