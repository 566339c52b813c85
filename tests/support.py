from stockroom.database import KeyValueStore, create_db_engine, create_session_factory, ensure_schema
from stockroom.repositories.inventory import InventoryRepository

WIDGET = {"name": "Widget", "sku": "W-1", "quantity": 10, "price": 5.0, "reorderLevel": 3}


def make_engine():
    engine = create_db_engine("sqlite:///:memory:")
    ensure_schema(engine)
    return engine


def make_store(engine=None):
    return KeyValueStore(create_session_factory(engine or make_engine()))


def make_repository(store=None, **kwargs):
    return InventoryRepository(store or make_store(), **kwargs)
