import time
import unittest
from unittest.mock import patch

import jwt

from stockroom.config import Settings
from stockroom.core.errors import AuthenticationError
from stockroom.core.security import resolve_tenant_id

SECRET = "test-secret-that-is-long-enough-for-hs256"


def _bearer(claims, secret=SECRET):
    return "Bearer {}".format(jwt.encode(claims, secret, algorithm="HS256"))


class ResolveTenantTest(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(JWT_SECRET=SECRET)
        patcher = patch("stockroom.core.security.get_settings", side_effect=lambda: self.settings)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_subject_becomes_tenant_id(self):
        self.assertEqual(resolve_tenant_id(_bearer({"sub": "alice"})), "alice")
        self.assertEqual(resolve_tenant_id(_bearer({"sub": "alice"}).replace("Bearer", "bearer")), "alice")

    def test_missing_or_malformed_header(self):
        for header in (None, "", "Token abc", "Bearer", "Bearer a b"):
            with self.subTest(header=header):
                with self.assertRaises(AuthenticationError):
                    resolve_tenant_id(header)

    def test_rejects_bad_tokens(self):
        headers = (
            _bearer({"sub": "alice"}, secret="another-secret-that-is-long-enough-too"),
            _bearer({"sub": "alice", "exp": int(time.time()) - 60}),
            _bearer({"name": "alice"}),
            _bearer({"sub": "   "}),
            "Bearer not-a-jwt",
        )
        for header in headers:
            with self.subTest(header=header):
                with self.assertRaises(AuthenticationError):
                    resolve_tenant_id(header)

    def test_audience_is_checked_when_configured(self):
        self.settings = Settings(JWT_SECRET=SECRET, JWT_AUDIENCE="stockroom")
        self.assertEqual(resolve_tenant_id(_bearer({"sub": "alice", "aud": "stockroom"})), "alice")
        with self.assertRaises(AuthenticationError):
            resolve_tenant_id(_bearer({"sub": "alice", "aud": "elsewhere"}))

    def test_unconfigured_secret_rejects_everything(self):
        self.settings = Settings(JWT_SECRET=None)
        with self.assertRaises(AuthenticationError):
            resolve_tenant_id(_bearer({"sub": "alice"}))


if __name__ == "__main__":
    unittest.main()
