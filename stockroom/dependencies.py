from typing import Optional

from fastapi import Header, Request

from stockroom.config import get_settings
from stockroom.core.deadlines import Deadline
from stockroom.core.security import resolve_tenant_id
from stockroom.repositories.inventory import InventoryRepository


def get_repository(request: Request) -> InventoryRepository:
    return request.app.state.repository


def require_tenant(authorization: Optional[str] = Header(None)) -> str:
    return resolve_tenant_id(authorization)


def request_deadline() -> Deadline:
    return Deadline.after(get_settings().STORE_TIMEOUT_SECONDS)


__all__ = ["get_repository", "request_deadline", "require_tenant"]
