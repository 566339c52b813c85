from __future__ import annotations

import logging
from typing import Callable, Optional

from stockroom.core.deadlines import Deadline
from stockroom.core.errors import ConflictError, InventoryError, NotFoundError, ValidationError
from stockroom.database.kv_store import MUST_NOT_EXIST, KeyValueStore, StoredValue
from stockroom.repositories.namespacer import Namespacer
from stockroom.schemas.base import RecordModel

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 5


class TenantRepository:
    """Tenant-scoped access to one entity kind in the key-value store."""

    entity_kind: str = ""
    label: str = "Record"
    record_cls: type[RecordModel] = RecordModel

    def __init__(
        self,
        store: KeyValueStore,
        namespacer: Namespacer,
        *,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.store = store
        self.namespacer = namespacer
        self.max_attempts = max(1, int(max_attempts))

    def _decode(self, stored: StoredValue):
        try:
            return self.record_cls.build(stored.value)
        except ValidationError as exc:
            logger.error("Stored %s %s is malformed: %s", self.label.lower(), stored.key, exc.message)
            raise InventoryError("Stored {} is malformed".format(self.label.lower())) from exc

    def _scan(self, tenant_id: str, deadline: Optional[Deadline]) -> list:
        prefix = self.namespacer.prefix(tenant_id, self.entity_kind)
        return [self._decode(stored) for stored in self.store.scan_prefix(prefix, deadline=deadline)]

    def _load(self, tenant_id: str, key: str, deadline: Optional[Deadline]) -> tuple:
        self.namespacer.require_owned(key, tenant_id, self.entity_kind, self.label)
        stored = self.store.get(key, deadline=deadline)
        if stored is None:
            raise NotFoundError("{} not found".format(self.label))
        return self._decode(stored), stored.version

    def _insert(self, record: RecordModel, deadline: Optional[Deadline]):
        self.store.set(record.id, record.to_store(), expected_version=MUST_NOT_EXIST, deadline=deadline)
        return record

    def _mutate(
        self,
        tenant_id: str,
        key: str,
        mutate: Callable,
        *,
        deadline: Optional[Deadline],
        operation: str,
    ) -> tuple:
        """Read-modify-write with a version check, re-reading on conflict.

        Returns the record as it was read and the record as written.
        """
        for attempt in range(1, self.max_attempts + 1):
            current, version = self._load(tenant_id, key, deadline)
            updated = mutate(current)
            try:
                self.store.set(key, updated.to_store(), expected_version=version, deadline=deadline)
            except ConflictError:
                logger.debug(
                    "Version conflict on %s for %s (attempt %s/%s)",
                    operation,
                    key,
                    attempt,
                    self.max_attempts,
                )
                continue
            return current, updated

        logger.warning(
            "Giving up %s for %s after %s conflicting attempts",
            operation,
            key,
            self.max_attempts,
            extra={"tenant_id": tenant_id, "entity_key": key, "operation": operation},
        )
        raise ConflictError("{} was modified concurrently; try again".format(self.label))


__all__ = ["DEFAULT_MAX_ATTEMPTS", "TenantRepository"]
