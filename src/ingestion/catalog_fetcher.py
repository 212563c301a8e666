# src/ingestion/catalog_fetcher.py

"""Fetches the published catalog spreadsheet and parses it into products."""

import logging

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.ingestion.csv_parser import parse_csv
from src.models.product import Product


class CatalogFetcher:
    """Loads the product catalog from a published CSV export.

    Fetch failures never reach the caller: they are logged and an empty
    list is returned, so "no data" and "fetch failed" look the same.
    ``last_error`` keeps the most recent failure message for diagnostics.
    """

    def __init__(self, csv_url: str | None = None) -> None:
        self.logger = logging.getLogger("storefront.catalog")
        self.settings = Settings()
        self.csv_url = csv_url or self.settings.CATALOG_CSV_URL
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self.last_error: str | None = None

    def fetch_csv(self) -> str:
        """GET the raw CSV text.  Raises on transport or HTTP errors."""
        resp = self.session.get(
            self.csv_url,
            headers=self.settings.DEFAULT_HEADERS,
            timeout=self.settings.REQUEST_TIMEOUT,
        )
        if resp.status_code != 200:
            raise ConnectionError(
                f"Catalog returned HTTP {resp.status_code}"
            )
        return resp.text

    def fetch_products(self) -> list[Product]:
        """Fetch and parse the catalog; returns ``[]`` on any failure."""
        self.last_error = None
        try:
            csv_text = self.fetch_csv()
            products = parse_csv(csv_text)
        except Exception as exc:
            self.last_error = str(exc)
            self.logger.error(
                "Error fetching products from %s: %s",
                self.csv_url,
                exc,
                exc_info=True,
            )
            return []

        self.logger.info(
            "Loaded %d products from catalog", len(products)
        )
        return products
