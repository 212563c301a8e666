# src/services/sales_client.py

"""Client for the sales platform's OAuth token and sales-history APIs."""

import asyncio
import base64
import logging
from collections.abc import Callable
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.services.exceptions import ConfigurationError, UpstreamError
from src.storage.token_cache import BearerToken, TokenCache

logger = logging.getLogger("storefront.sales")

Sale = dict[str, Any]


def _path(*keys: str) -> Callable[[Sale], Any]:
    """Build an accessor that walks nested dict *keys*, or yields None."""
    def get(sale: Sale) -> Any:
        node: Any = sale
        for key in keys:
            if not isinstance(node, dict):
                return None
            node = node.get(key)
        return node
    return get


# Where a sale may carry its product name, most specific first
PRODUCT_NAME_ACCESSORS: list[Callable[[Sale], Any]] = [
    _path("product", "name"),
    _path("product_name"),
    _path("productName"),
    _path("offer", "name"),
    _path("offer_name"),
    _path("subscription", "plan", "name"),
    _path("subscription", "name"),
]


def resolve_product_name(sale: Sale) -> str:
    """Return the first non-empty product name found on *sale*, or ``""``."""
    for accessor in PRODUCT_NAME_ACCESSORS:
        value = accessor(sale)
        if isinstance(value, str) and value.strip():
            return value
    return ""


def buyer_name(sale: Sale) -> str:
    name = _path("buyer", "name")(sale)
    return name if isinstance(name, str) else ""


class SalesClient:
    """Talks to the sales platform on behalf of the authorizer.

    Credentials, the token cache and the HTTP session are all injectable
    so tests can run without touching process state.
    """

    def __init__(
        self,
        client_id: str | None = None,
        client_secret: str | None = None,
        token_cache: TokenCache | None = None,
        session: curl_requests.Session | None = None,
    ) -> None:
        self.settings = Settings()
        self.client_id = (
            self.settings.HOTMART_CLIENT_ID
            if client_id is None
            else client_id
        )
        self.client_secret = (
            self.settings.HOTMART_CLIENT_SECRET
            if client_secret is None
            else client_secret
        )
        self.token_cache = token_cache or TokenCache()
        self.session = session or curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    # ── Token handling ───────────────────────────────────

    def request_token(self) -> BearerToken:
        """Run the client-credentials exchange and cache the new token."""
        if not self.client_id or not self.client_secret:
            raise ConfigurationError(
                "HOTMART_CLIENT_ID and HOTMART_CLIENT_SECRET are required"
            )

        credentials = base64.b64encode(
            f"{self.client_id}:{self.client_secret}".encode()
        ).decode()
        resp = self.session.post(
            self.settings.HOTMART_TOKEN_URL,
            params={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
            },
            headers={
                "Authorization": f"Basic {credentials}",
                "Content-Type": "application/x-www-form-urlencoded",
            },
            data={"grant_type": "client_credentials"},
            timeout=self.settings.REQUEST_TIMEOUT,
        )

        data = _json_or_none(resp)
        access_token = (
            data.get("access_token") if isinstance(data, dict) else None
        )
        if resp.status_code != 200 or not access_token:
            logger.error(
                "Token request failed with HTTP %d", resp.status_code
            )
            raise UpstreamError(
                f"Error obtaining token: {resp.text}", body=resp.text
            )

        try:
            expires_in = float(data.get("expires_in") or 0)
        except (TypeError, ValueError):
            expires_in = 0.0
        return self.token_cache.store(access_token, expires_in)

    def get_valid_token(self) -> BearerToken:
        """Return the cached token, refreshing it first if needed."""
        if not self.token_cache.is_valid():
            logger.info(
                "Bearer token %s, refreshing", self.token_cache.state
            )
            return self.request_token()
        return self.token_cache.token or self.request_token()

    # ── Sales history ────────────────────────────────────

    def fetch_sales_page(
        self,
        email: str,
        status: str,
        token: BearerToken,
    ) -> list[Sale]:
        """GET the sales of *email* with one transaction *status*."""
        resp = self.session.get(
            self.settings.HOTMART_SALES_URL,
            params={
                "transaction_status": status,
                "buyer_email": email,
            },
            headers={
                "Authorization": f"Bearer {token.access_token}",
                "Content-Type": "application/json",
            },
            timeout=self.settings.REQUEST_TIMEOUT,
        )
        if resp.status_code != 200:
            raise UpstreamError(
                f"Sales history ({status}) returned HTTP "
                f"{resp.status_code}",
                body=resp.text,
            )

        data = _json_or_none(resp)
        if not isinstance(data, dict):
            raise UpstreamError(
                f"Sales history ({status}) returned a malformed body",
                body=resp.text,
            )
        items = data.get("items")
        if items is None:
            return []
        if not isinstance(items, list):
            raise UpstreamError(
                f"Sales history ({status}) items is not a list",
                body=resp.text,
            )
        return items

    async def fetch_sales_history(self, email: str) -> list[Sale]:
        """Fetch every accepted status concurrently and concatenate.

        Results keep the order of ``ACCEPTED_SALE_STATUSES`` and are not
        de-duplicated.  Any failing request propagates.
        """
        token = await asyncio.to_thread(self.get_valid_token)
        statuses = self.settings.ACCEPTED_SALE_STATUSES
        batches = await asyncio.gather(
            *(
                asyncio.to_thread(
                    self.fetch_sales_page, email, status, token
                )
                for status in statuses
            )
        )

        sales: list[Sale] = []
        for status, batch in zip(statuses, batches):
            logger.debug(
                "Found %d %s sales for %s", len(batch), status, email
            )
            sales.extend(batch)
        return sales


def _json_or_none(resp: curl_requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return None
