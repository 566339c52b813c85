import unittest
from datetime import timedelta

from stockroom.core.dates import isoformat, utc_now
from stockroom.services.sample_data import (
    MESSAGE_EXISTS,
    MESSAGE_IN_PROGRESS,
    MESSAGE_SEEDED,
    SAMPLE_NOTIFICATIONS,
    SAMPLE_PRODUCTS,
    ensure_sample_data,
)

from support import WIDGET, make_repository

LOCK_KEY = "user:tenant-a:meta:sample-data"


class SampleDataTest(unittest.TestCase):
    def setUp(self):
        self.repo = make_repository()

    def test_seeds_catalog_and_notifications(self):
        result = ensure_sample_data(self.repo, "tenant-a")

        self.assertTrue(result.created)
        self.assertEqual(result.message, MESSAGE_SEEDED)
        products = self.repo.list_products("tenant-a")
        self.assertEqual([p.sku for p in products], [fields["sku"] for fields in SAMPLE_PRODUCTS])
        self.assertTrue(all(p.owner_id == "tenant-a" for p in products))

        notifications = self.repo.list_notifications("tenant-a")
        self.assertEqual(len(notifications), len(SAMPLE_NOTIFICATIONS))
        self.assertEqual(
            [n.type for n in notifications],
            ["low_stock", "out_of_stock", "reorder"],
        )
        self.assertEqual([n.read for n in notifications], [False, False, True])

    def test_notifications_reference_seeded_products(self):
        ensure_sample_data(self.repo, "tenant-a")
        by_id = {p.id: p for p in self.repo.list_products("tenant-a")}

        skus = [by_id[n.product_id].sku for n in self.repo.list_notifications("tenant-a")]
        self.assertEqual(skus, ["USB-002", "ECC-008", "MK-005"])

    def test_second_call_is_a_no_op(self):
        ensure_sample_data(self.repo, "tenant-a")
        result = ensure_sample_data(self.repo, "tenant-a")

        self.assertFalse(result.created)
        self.assertEqual(result.message, MESSAGE_EXISTS)
        self.assertEqual(len(self.repo.list_products("tenant-a")), len(SAMPLE_PRODUCTS))
        self.assertEqual(len(self.repo.list_notifications("tenant-a")), len(SAMPLE_NOTIFICATIONS))

    def test_claim_is_released_after_seeding(self):
        ensure_sample_data(self.repo, "tenant-a")
        self.assertIsNone(self.repo.store.get(LOCK_KEY))

    def test_existing_products_skip_seeding(self):
        self.repo.create_product("tenant-a", dict(WIDGET))

        result = ensure_sample_data(self.repo, "tenant-a")

        self.assertFalse(result.created)
        self.assertEqual(len(self.repo.list_products("tenant-a")), 1)
        self.assertEqual(self.repo.list_notifications("tenant-a"), [])

    def test_held_claim_defers_to_other_seeder(self):
        self.repo.store.set(LOCK_KEY, {"claimedAt": isoformat(utc_now())})

        result = ensure_sample_data(self.repo, "tenant-a")

        self.assertFalse(result.created)
        self.assertEqual(result.message, MESSAGE_IN_PROGRESS)
        self.assertEqual(self.repo.list_products("tenant-a"), [])
        self.assertIsNotNone(self.repo.store.get(LOCK_KEY))

    def test_stale_claim_is_taken_over(self):
        stale = utc_now() - timedelta(seconds=300)
        self.repo.store.set(LOCK_KEY, {"claimedAt": isoformat(stale)})

        result = ensure_sample_data(self.repo, "tenant-a", stale_seconds=60)

        self.assertTrue(result.created)
        self.assertEqual(len(self.repo.list_products("tenant-a")), len(SAMPLE_PRODUCTS))
        self.assertIsNone(self.repo.store.get(LOCK_KEY))

    def test_tenants_are_seeded_independently(self):
        ensure_sample_data(self.repo, "tenant-a")
        result = ensure_sample_data(self.repo, "tenant-b")

        self.assertTrue(result.created)
        self.assertEqual(len(self.repo.list_products("tenant-b")), len(SAMPLE_PRODUCTS))
        self.assertEqual(len(self.repo.list_products("tenant-a")), len(SAMPLE_PRODUCTS))


if __name__ == "__main__":
    unittest.main()
