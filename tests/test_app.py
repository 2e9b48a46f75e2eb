"""Tests for application wiring: settings validation, health, catalog endpoints."""

import unittest

from pydantic import ValidationError

from tests.support import API, ApiTestCase, make_settings


class TestSettings(unittest.TestCase):
    """Settings validators reject unusable configuration."""

    def test_defaults_accept_sqlite(self) -> None:
        settings = make_settings()
        self.assertEqual(settings.DATABASE_URL, "sqlite://")
        self.assertEqual(settings.SESSION_MAX_AGE_SECONDS, 7 * 24 * 60 * 60)

    def test_rejects_unknown_database_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="mysql://root@localhost/db")

    def test_rejects_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(SESSION_SECRET="   ")

    def test_rejects_non_http_llm_url(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(LLM_BASE_URL="ftp://llm")

    def test_strips_trailing_slash_from_llm_url(self) -> None:
        self.assertEqual(make_settings(LLM_BASE_URL="http://llm.test/v1/").LLM_BASE_URL, "http://llm.test/v1")

    def test_session_max_age_bounds(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(SESSION_MAX_AGE_SECONDS=10)


class TestWiring(ApiTestCase):
    """Root, health and reference-data routes."""

    def test_root(self) -> None:
        self.assertEqual(self.client.get("/").json(), {"message": "Brainfeed API"})

    def test_health(self) -> None:
        body = self.client.get(f"{API}/health/").json()
        self.assertEqual(body, {"status": "ok", "version": "0.1.0", "environment": "dev", "database": "connected"})

    def test_categories(self) -> None:
        body = self.client.get(f"{API}/categories").json()
        self.assertEqual([c["slug"] for c in body], ["tech-ai", "science-stem"])

    def test_authors(self) -> None:
        body = self.client.get(f"{API}/authors").json()
        self.assertEqual([a["name"] for a in body], ["Dr. Sarah Chen", "Marcus Johnson"])
        self.assertEqual(body[0]["role"], "Science Editor")


if __name__ == "__main__":
    unittest.main()
