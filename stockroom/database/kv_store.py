"""Ordered string-keyed store layered over a single relational table.

Every call opens its own session and commits (or rolls back) before
returning, so a single-key write is atomic and nothing is cached between
calls. Values are JSON objects; each key carries a version counter that
conditional writes compare against.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from stockroom.core.dates import utc_now
from stockroom.core.deadlines import Deadline, check_deadline
from stockroom.core.errors import ConflictError, StoreUnavailableError
from stockroom.database.base import Base
from stockroom.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)

# expected_version value meaning "the key must not exist yet".
MUST_NOT_EXIST = 0


@dataclass(frozen=True)
class StoredValue:
    key: str
    value: dict[str, Any]
    version: int


def ensure_schema(bind: Engine) -> None:
    Base.metadata.create_all(bind=bind, tables=[KeyValueEntry.__table__])


def _to_stored(entry: KeyValueEntry) -> StoredValue:
    return StoredValue(key=entry.key, value=dict(entry.value), version=entry.version)


class KeyValueStore:
    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _fail(self, operation: str, key: str, exc: SQLAlchemyError) -> StoreUnavailableError:
        logger.error("Store %s failed for %s: %s", operation, key, exc.__class__.__name__)
        return StoreUnavailableError("Storage failure during {}".format(operation))

    def get(self, key: str, *, deadline: Optional[Deadline] = None) -> Optional[StoredValue]:
        check_deadline(deadline, "get")
        db = self._session_factory()
        try:
            entry = db.execute(
                select(KeyValueEntry).where(KeyValueEntry.key == key)
            ).scalar_one_or_none()
            return _to_stored(entry) if entry is not None else None
        except SQLAlchemyError as exc:
            raise self._fail("get", key, exc) from exc
        finally:
            db.close()

    def scan_prefix(self, prefix: str, *, deadline: Optional[Deadline] = None) -> list[StoredValue]:
        check_deadline(deadline, "scan")
        db = self._session_factory()
        try:
            entries = db.execute(
                select(KeyValueEntry)
                .where(KeyValueEntry.key.startswith(prefix, autoescape=True))
                .order_by(KeyValueEntry.id)
            ).scalars()
            # SQLite LIKE ignores ASCII case; keep only exact prefix matches.
            return [_to_stored(entry) for entry in entries if entry.key.startswith(prefix)]
        except SQLAlchemyError as exc:
            raise self._fail("scan", prefix, exc) from exc
        finally:
            db.close()

    def set(
        self,
        key: str,
        value: dict[str, Any],
        *,
        expected_version: Optional[int] = None,
        deadline: Optional[Deadline] = None,
    ) -> StoredValue:
        """Write ``value`` under ``key`` and return the stored entry.

        ``expected_version=None`` writes unconditionally, ``MUST_NOT_EXIST``
        only inserts, and any positive number only overwrites that exact
        version. A failed condition raises ``ConflictError``.
        """
        check_deadline(deadline, "set")
        db = self._session_factory()
        try:
            if expected_version == MUST_NOT_EXIST:
                stored = self._insert(db, key, value)
            elif expected_version is not None:
                stored = self._replace(db, key, value, expected_version)
            else:
                stored = self._upsert(db, key, value)
            check_deadline(deadline, "set")
            db.commit()
            return stored
        except IntegrityError as exc:
            db.rollback()
            raise ConflictError("Key already exists") from exc
        except (ConflictError, StoreUnavailableError):
            db.rollback()
            raise
        except SQLAlchemyError as exc:
            db.rollback()
            raise self._fail("set", key, exc) from exc
        finally:
            db.close()

    def delete(
        self,
        key: str,
        *,
        expected_version: Optional[int] = None,
        deadline: Optional[Deadline] = None,
    ) -> bool:
        check_deadline(deadline, "delete")
        db = self._session_factory()
        try:
            stmt = delete(KeyValueEntry).where(KeyValueEntry.key == key)
            if expected_version is not None:
                stmt = stmt.where(KeyValueEntry.version == expected_version)
            result = db.execute(stmt)
            check_deadline(deadline, "delete")
            db.commit()
            return result.rowcount == 1
        except StoreUnavailableError:
            db.rollback()
            raise
        except SQLAlchemyError as exc:
            db.rollback()
            raise self._fail("delete", key, exc) from exc
        finally:
            db.close()

    def _insert(self, db, key, value) -> StoredValue:
        now = utc_now()
        entry = KeyValueEntry(key=key, value=value, version=1, created_at=now, updated_at=now)
        db.add(entry)
        db.flush()
        return _to_stored(entry)

    def _replace(self, db, key, value, expected_version) -> StoredValue:
        result = db.execute(
            update(KeyValueEntry)
            .where(
                KeyValueEntry.key == key,
                KeyValueEntry.version == expected_version,
            )
            .values(value=value, version=expected_version + 1, updated_at=utc_now())
        )
        if result.rowcount != 1:
            raise ConflictError("Version {} of {} is no longer current".format(expected_version, key))
        return StoredValue(key=key, value=dict(value), version=expected_version + 1)

    def _upsert(self, db, key, value) -> StoredValue:
        result = db.execute(
            update(KeyValueEntry)
            .where(KeyValueEntry.key == key)
            .values(value=value, version=KeyValueEntry.version + 1, updated_at=utc_now())
        )
        if result.rowcount == 0:
            return self._insert(db, key, value)
        version = db.execute(
            select(KeyValueEntry.version).where(KeyValueEntry.key == key)
        ).scalar_one()
        return StoredValue(key=key, value=dict(value), version=version)


__all__ = ["KeyValueStore", "MUST_NOT_EXIST", "StoredValue", "ensure_schema"]
