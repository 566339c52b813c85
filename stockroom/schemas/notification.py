from datetime import datetime
from typing import ClassVar, Literal, Optional

from pydantic import StrictBool

from stockroom.core.constants import (
    NOTIFICATION_LOW_STOCK,
    NOTIFICATION_OUT_OF_STOCK,
    NOTIFICATION_REORDER,
    NOTIFICATION_SYSTEM,
)
from stockroom.schemas.base import NonEmptyStr, PayloadModel, RecordModel

NotificationType = Literal[
    NOTIFICATION_LOW_STOCK,
    NOTIFICATION_OUT_OF_STOCK,
    NOTIFICATION_REORDER,
    NOTIFICATION_SYSTEM,
]


class Notification(RecordModel):
    id: str
    owner_id: str
    type: NotificationType
    title: NonEmptyStr
    message: NonEmptyStr
    read: StrictBool = False
    created_at: datetime
    read_at: Optional[datetime] = None
    # Weak reference; never checked against stored products.
    product_id: Optional[str] = None


class NotificationCreate(PayloadModel):
    type: NotificationType
    title: NonEmptyStr
    message: NonEmptyStr
    read: StrictBool = False
    product_id: Optional[str] = None
    # Only internal triggers (seeding) backdate notifications.
    created_at: Optional[datetime] = None

    immutable_fields: ClassVar[frozenset] = frozenset({"id", "ownerId", "owner_id", "readAt", "read_at"})


__all__ = ["Notification", "NotificationCreate", "NotificationType"]
