import unittest
from unittest.mock import patch

import jwt
from fastapi.testclient import TestClient

from stockroom.config import Settings
from stockroom.main import create_app

from support import WIDGET, make_engine

SECRET = "api-test-secret-that-is-long-enough-for-hs256"


def _auth(tenant_id):
    token = jwt.encode({"sub": tenant_id}, SECRET, algorithm="HS256")
    return {"Authorization": "Bearer {}".format(token)}


class ApiTest(unittest.TestCase):
    def setUp(self):
        settings = Settings(JWT_SECRET=SECRET)
        patcher = patch("stockroom.core.security.get_settings", return_value=settings)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.client = TestClient(create_app(settings, make_engine()))
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)
        self.alice = _auth("alice")
        self.bob = _auth("bob")

    def _create(self, headers=None, **overrides):
        response = self.client.post("/products", json={**WIDGET, **overrides}, headers=headers or self.alice)
        self.assertEqual(response.status_code, 200, response.text)
        return response.json()["product"]

    def test_health_needs_no_token(self):
        response = self.client.get("/health")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["status"], "ok")
        self.assertIn("version", body)

    def test_requests_without_token_are_rejected(self):
        for method, path in (("get", "/products"), ("get", "/notifications"), ("post", "/init-sample-data")):
            with self.subTest(path=path):
                response = getattr(self.client, method)(path)
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), {"error": "Authentication required"})

        response = self.client.get("/products", headers={"Authorization": "Bearer garbage"})
        self.assertEqual(response.status_code, 401)

    def test_create_and_list_hide_owner(self):
        product = self._create()

        self.assertTrue(product["id"].startswith("user:alice:product:"))
        self.assertNotIn("ownerId", product)
        self.assertEqual(product["reorderLevel"], 3)
        self.assertIn("createdAt", product)

        listed = self.client.get("/products", headers=self.alice).json()["products"]
        self.assertEqual([item["id"] for item in listed], [product["id"]])
        self.assertNotIn("ownerId", listed[0])
        self.assertEqual(self.client.get("/products", headers=self.bob).json(), {"products": []})

    def test_invalid_bodies_return_400(self):
        bodies = ({**WIDGET, "quantity": -1}, {**WIDGET, "name": ""}, [1, 2, 3])
        for body in bodies:
            with self.subTest(body=body):
                response = self.client.post("/products", json=body, headers=self.alice)
                self.assertEqual(response.status_code, 400)
                self.assertIn("error", response.json())

    def test_product_lifecycle(self):
        product = self._create()
        path = "/products/{}".format(product["id"])

        response = self.client.get(path, headers=self.alice)
        self.assertEqual(response.json()["product"]["name"], "Widget")

        response = self.client.put(path, json={"price": 9.99, "ownerId": "bob"}, headers=self.alice)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["product"]["price"], 9.99)
        self.assertIn("updatedAt", response.json()["product"])

        response = self.client.put(path + "/stock", json={"quantityChange": -25}, headers=self.alice)
        self.assertEqual(response.json()["product"]["quantity"], 0)

        response = self.client.post(path + "/restock", headers=self.alice)
        self.assertEqual(response.json()["restocked"], 10)
        self.assertEqual(response.json()["product"]["quantity"], 10)

        response = self.client.delete(path, headers=self.alice)
        self.assertEqual(response.json(), {"success": True})
        response = self.client.get(path, headers=self.alice)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Product not found"})

    def test_stock_change_must_be_an_integer(self):
        product = self._create()
        path = "/products/{}/stock".format(product["id"])
        for body in ({"quantityChange": "5"}, {"quantityChange": 1.5}, {}):
            with self.subTest(body=body):
                response = self.client.put(path, json=body, headers=self.alice)
                self.assertEqual(response.status_code, 400)

    def test_foreign_product_is_not_found(self):
        product = self._create()
        path = "/products/{}".format(product["id"])

        self.assertEqual(self.client.get(path, headers=self.bob).status_code, 404)
        self.assertEqual(self.client.put(path, json={"price": 1.0}, headers=self.bob).status_code, 404)
        self.assertEqual(
            self.client.put(path + "/stock", json={"quantityChange": -1}, headers=self.bob).status_code, 404
        )
        self.assertEqual(self.client.delete(path, headers=self.bob).status_code, 404)
        self.assertEqual(self.client.get(path, headers=self.alice).json()["product"]["quantity"], 10)

    def test_sample_data_summary_and_notifications(self):
        response = self.client.post("/init-sample-data", headers=self.alice)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        self.assertTrue(response.json()["created"])

        again = self.client.post("/init-sample-data", headers=self.alice).json()
        self.assertTrue(again["success"])
        self.assertFalse(again["created"])

        summary = self.client.get("/inventory/summary", headers=self.alice).json()["summary"]
        self.assertEqual(summary["totalProducts"], 8)
        self.assertEqual(summary["lowStockCount"], 3)
        self.assertEqual(summary["totalUnits"], 200)

        notifications = self.client.get("/notifications", headers=self.alice).json()["notifications"]
        self.assertEqual(len(notifications), 3)
        self.assertNotIn("ownerId", notifications[0])
        unread = notifications[0]
        self.assertFalse(unread["read"])

        path = "/notifications/{}/read".format(unread["id"])
        self.assertEqual(self.client.put(path, headers=self.bob).status_code, 404)
        response = self.client.put(path, headers=self.alice)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["notification"]["read"])
        self.assertIsNotNone(response.json()["notification"]["readAt"])


if __name__ == "__main__":
    unittest.main()
