# src/config/settings.py

"""Central configuration for the storefront backend."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean toggle such as ``AUTH_DEBUG=true`` from the environment."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Central configuration for the storefront backend."""

    # --- Catalog ---
    CATALOG_CSV_URL: str = os.environ.get(
        "CATALOG_CSV_URL",
        "https://docs.google.com/spreadsheets/d/e/"
        "2PACX-1vSZXf5UJrfmtwIh_nsSSpngxX8RlxhIWyZzYnjKkz-SiXGiiWPIPoCuTzS3C37QOKlO04bFu0joxT8Q"
        "/pub?output=csv",
    )
    PLACEHOLDER_IMAGE_URL: str = "https://via.placeholder.com/150"
    DEFAULT_CATEGORY: str = "Uncategorized"

    # --- HTTP ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "text/csv,text/plain;q=0.9,*/*;q=0.8",
        "Accept-Language": "pt-BR,pt;q=0.9,en-US;q=0.8,en;q=0.7",
    }

    # --- Sales platform (Hotmart) ---
    HOTMART_CLIENT_ID: str = (os.environ.get("HOTMART_CLIENT_ID", "") or "").strip()
    HOTMART_CLIENT_SECRET: str = (
        os.environ.get("HOTMART_CLIENT_SECRET", "") or ""
    ).strip()
    HOTMART_TOKEN_URL: str = os.environ.get(
        "HOTMART_TOKEN_URL",
        "https://api-sec-vlc.hotmart.com/security/oauth/token",
    )
    HOTMART_SALES_URL: str = os.environ.get(
        "HOTMART_SALES_URL",
        "https://developers.hotmart.com/payments/api/v1/sales/history",
    )
    ACCEPTED_SALE_STATUSES: tuple[str, ...] = ("COMPLETE", "APPROVED")

    # --- Authorization ---
    REQUIRED_PRODUCT_NAME: str = (
        os.environ.get("REQUIRED_PRODUCT_NAME", "") or "Depois do Enxoval"
    ).strip()
    AUTH_DEBUG: bool = _env_flag("AUTH_DEBUG")
    TOKEN_EXPIRY_MARGIN: float = 300.0  # Refresh this many secs before expiry
    MAX_DEBUG_PRODUCTS: int = 20
    DEFAULT_BUYER_NAME: str = "Usuário"

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = Path(
        os.environ.get("STOREFRONT_LOGS_DIR", "") or BASE_DIR / "logs"
    )
