# src/services/email_authorizer.py

"""Decides whether an email has bought the storefront's access product."""

import logging
import unicodedata
from dataclasses import dataclass, field
from typing import Any

from src.config.settings import Settings
from src.services.exceptions import InvalidEmailError
from src.services.sales_client import (
    SalesClient,
    buyer_name,
    resolve_product_name,
)

logger = logging.getLogger("storefront.auth")

MESSAGE_AUTHORIZED = "Email encontrado na base de clientes"
MESSAGE_NOT_AUTHORIZED = "Email não encontrado na base de clientes"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_email(email: Any) -> str:
    """Normalise *email* or raise :class:`InvalidEmailError`.

    Only the presence of ``@`` is checked; the sales platform is the
    real authority on whether the address exists.
    """
    if not isinstance(email, str) or not email.strip():
        raise InvalidEmailError("Email é obrigatório")
    normalized = normalize_email(email)
    if "@" not in normalized:
        raise InvalidEmailError("Email inválido")
    return normalized


def normalize_product_name(name: str) -> str:
    """Strip accents, lowercase and trim a product name for comparison."""
    decomposed = unicodedata.normalize("NFD", name)
    stripped = "".join(
        c for c in decomposed if not unicodedata.combining(c)
    )
    return stripped.lower().strip()


@dataclass
class AuthorizationResult:
    """Outcome of checking one email against its sales history."""

    email: str
    authorized: bool
    required_product: str
    name: str = ""
    total_purchases: int = 0
    last_purchase: Any = None
    detected_products: list[str] = field(
        default_factory=lambda: list[str]()
    )

    def to_response(self, debug: bool = False) -> dict[str, Any]:
        """Render the JSON body returned to the login form."""
        body: dict[str, Any]
        if self.authorized:
            body = {
                "success": True,
                "authorized": True,
                "message": MESSAGE_AUTHORIZED,
                "user": {
                    "email": self.email,
                    "name": self.name,
                    "totalPurchases": self.total_purchases,
                    "lastPurchase": self.last_purchase,
                },
            }
        else:
            body = {
                "success": False,
                "authorized": False,
                "message": MESSAGE_NOT_AUTHORIZED,
            }
        if debug:
            body["debug"] = {
                "requiredProduct": self.required_product,
                "detectedProducts": list(self.detected_products),
            }
        return body


class EmailAuthorizer:
    """Authorizes an email when one of its sales is for the required product."""

    def __init__(
        self,
        client: SalesClient | None = None,
        required_product: str | None = None,
        debug: bool | None = None,
    ) -> None:
        self.client = client or SalesClient()
        self.required_product = (
            Settings.REQUIRED_PRODUCT_NAME
            if required_product is None
            else required_product
        )
        self.debug = Settings.AUTH_DEBUG if debug is None else debug

    async def authorize(self, email: Any) -> AuthorizationResult:
        """Check *email* against the sales platform.

        Raises :class:`InvalidEmailError` before any network call when the
        email is malformed; upstream and configuration errors propagate.
        """
        normalized = validate_email(email)
        sales = await self.client.fetch_sales_history(normalized)
        target = normalize_product_name(self.required_product)

        detected: list[str] = []
        matching: list[dict[str, Any]] = []
        for sale in sales:
            product_name = resolve_product_name(sale)
            if (
                product_name
                and product_name not in detected
                and len(detected) < Settings.MAX_DEBUG_PRODUCTS
            ):
                detected.append(product_name)
            if product_name and target in normalize_product_name(
                product_name
            ):
                matching.append(sale)

        result = AuthorizationResult(
            email=normalized,
            authorized=bool(matching),
            required_product=self.required_product,
            total_purchases=len(matching),
            detected_products=detected,
        )
        if matching:
            first = matching[0]
            result.name = buyer_name(first) or Settings.DEFAULT_BUYER_NAME
            result.last_purchase = first.get("purchase_date")

        logger.info(
            "Email %s %s (%d sales, %d matching '%s')",
            normalized,
            "authorized" if result.authorized else "not authorized",
            len(sales),
            len(matching),
            self.required_product,
        )
        return result
