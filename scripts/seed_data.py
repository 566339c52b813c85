import argparse

from stockroom.config import get_settings
from stockroom.core.logging import setup_logging
from stockroom.database import KeyValueStore, SessionLocal, engine, ensure_schema
from stockroom.repositories.inventory import InventoryRepository
from stockroom.services.sample_data import ensure_sample_data


def parse_args():
    parser = argparse.ArgumentParser(description="Seed the sample catalog for one tenant.")
    parser.add_argument("tenant_id", help="User id issued by the identity provider.")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Delete the tenant's products and notifications before seeding.",
    )
    return parser.parse_args()


def _reset_tenant(repository, tenant_id):
    for product in repository.list_products(tenant_id):
        repository.delete_product(tenant_id, product.id)
    for notification in repository.list_notifications(tenant_id):
        repository.store.delete(notification.id)


def main():
    setup_logging()
    args = parse_args()
    settings = get_settings()

    ensure_schema(engine)
    repository = InventoryRepository.from_settings(KeyValueStore(SessionLocal), settings)

    if args.reset:
        _reset_tenant(repository, args.tenant_id)

    result = ensure_sample_data(
        repository,
        args.tenant_id,
        stale_seconds=settings.SEED_LOCK_STALE_SECONDS,
    )
    print("Seed data created." if result.created else "Seed skipped: {}".format(result.message))


if __name__ == "__main__":
    main()
