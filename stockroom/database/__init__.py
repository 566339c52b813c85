from stockroom.database.base import Base
from stockroom.database.engine import create_db_engine, engine
from stockroom.database.kv_store import MUST_NOT_EXIST, KeyValueStore, StoredValue, ensure_schema
from stockroom.database.session import SessionLocal, create_session_factory

__all__ = [
    "Base",
    "KeyValueStore",
    "MUST_NOT_EXIST",
    "SessionLocal",
    "StoredValue",
    "create_db_engine",
    "create_session_factory",
    "engine",
    "ensure_schema",
]
