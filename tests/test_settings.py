# tests/test_settings.py

"""Tests for the Settings configuration class."""

import os
import unittest
from pathlib import Path
from unittest.mock import patch

from src.config.settings import Settings, _env_flag


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_request_timeout_is_positive_int(self) -> None:
        self.assertIsInstance(Settings.REQUEST_TIMEOUT, int)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)

    def test_token_margin_is_five_minutes(self) -> None:
        self.assertEqual(Settings.TOKEN_EXPIRY_MARGIN, 300.0)

    def test_accepted_statuses_order(self) -> None:
        """COMPLETE sales are merged ahead of APPROVED ones."""
        self.assertEqual(
            Settings.ACCEPTED_SALE_STATUSES, ("COMPLETE", "APPROVED")
        )

    def test_required_product_has_default(self) -> None:
        self.assertTrue(Settings.REQUIRED_PRODUCT_NAME)

    def test_max_debug_products(self) -> None:
        self.assertEqual(Settings.MAX_DEBUG_PRODUCTS, 20)

    def test_urls_are_https(self) -> None:
        for url in (
            Settings.CATALOG_CSV_URL,
            Settings.HOTMART_TOKEN_URL,
            Settings.HOTMART_SALES_URL,
        ):
            with self.subTest(url=url):
                self.assertTrue(url.startswith("https://"))

    def test_path_constants_are_paths(self) -> None:
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_impersonate_browser_is_string(self) -> None:
        self.assertIsInstance(Settings.IMPERSONATE_BROWSER, str)
        self.assertTrue(len(Settings.IMPERSONATE_BROWSER) > 0)


class TestEnvFlag(unittest.TestCase):
    """Boolean toggles read from the environment."""

    def test_truthy_values(self) -> None:
        for raw in ("1", "true", "TRUE", " yes ", "on"):
            with self.subTest(raw=raw):
                with patch.dict(os.environ, {"X_FLAG": raw}):
                    self.assertTrue(_env_flag("X_FLAG"))

    def test_falsy_values(self) -> None:
        for raw in ("0", "false", "no", ""):
            with self.subTest(raw=raw):
                with patch.dict(os.environ, {"X_FLAG": raw}):
                    self.assertFalse(_env_flag("X_FLAG", default=True))

    def test_unset_uses_default(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            self.assertTrue(_env_flag("X_FLAG", default=True))
            self.assertFalse(_env_flag("X_FLAG"))


if __name__ == "__main__":
    unittest.main()
