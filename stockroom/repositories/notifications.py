from __future__ import annotations

import logging
from typing import Any, Optional

from stockroom.core.constants import ENTITY_NOTIFICATION
from stockroom.core.dates import utc_now
from stockroom.core.deadlines import Deadline
from stockroom.repositories.base import TenantRepository
from stockroom.schemas.notification import Notification, NotificationCreate

logger = logging.getLogger(__name__)


class NotificationRepository(TenantRepository):
    entity_kind = ENTITY_NOTIFICATION
    label = "Notification"
    record_cls = Notification

    def list(self, tenant_id: str, *, deadline: Optional[Deadline] = None) -> list[Notification]:
        notifications = self._scan(tenant_id, deadline)
        notifications.sort(key=lambda item: item.created_at, reverse=True)
        return notifications

    def create(
        self,
        tenant_id: str,
        fields: dict[str, Any],
        *,
        deadline: Optional[Deadline] = None,
    ) -> Notification:
        payload = NotificationCreate.build(fields).supplied()
        key = self.namespacer.new_key(tenant_id, self.entity_kind)
        notification = Notification.build(
            {
                **payload,
                "id": key,
                "ownerId": tenant_id,
                "createdAt": payload.get("createdAt") or utc_now(),
            }
        )
        self._insert(notification, deadline)
        logger.info(
            "Created %s notification %s",
            notification.type,
            key,
            extra={"tenant_id": tenant_id},
        )
        return notification

    def mark_read(
        self,
        tenant_id: str,
        notification_id: str,
        *,
        deadline: Optional[Deadline] = None,
    ) -> Notification:
        def mark(current: Notification) -> Notification:
            return current.model_copy(update={"read": True, "read_at": utc_now()})

        _previous, updated = self._mutate(
            tenant_id, notification_id, mark, deadline=deadline, operation="mark_read"
        )
        return updated


__all__ = ["NotificationRepository"]
