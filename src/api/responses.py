# src/api/responses.py

"""Response and request helpers for the serverless HTTP handlers."""

import base64
import json
import logging
from typing import Any

logger = logging.getLogger("storefront.api")

HEADERS = {
    "Content-Type": "application/json",
}


def ok(body: dict[str, Any], status: int = 200) -> dict[str, Any]:
    return {
        "statusCode": status,
        "headers": HEADERS,
        "body": json.dumps(body, ensure_ascii=False),
    }


def err(msg: str, status: int = 400, **extra: Any) -> dict[str, Any]:
    """Error response; ``success`` is always false."""
    if status >= 500:
        logger.error("Responding %d: %s", status, msg)
    else:
        logger.warning("Responding %d: %s", status, msg)
    body: dict[str, Any] = {"success": False, "error": msg, **extra}
    return {
        "statusCode": status,
        "headers": HEADERS,
        "body": json.dumps(body, ensure_ascii=False),
    }


def get_method(event: dict[str, Any]) -> str:
    """HTTP method from either the v1 or v2 event shape."""
    http_ctx = (event.get("requestContext") or {}).get("http") or {}
    return (http_ctx.get("method") or event.get("httpMethod") or "GET").upper()


def get_body(event: dict[str, Any]) -> dict[str, Any]:
    """Decode the JSON request body; anything unreadable becomes ``{}``."""
    raw = event.get("body") or "{}"
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        body = json.loads(raw)
    except (ValueError, TypeError):
        return {}
    return body if isinstance(body, dict) else {}
