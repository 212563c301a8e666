# src/api/handler.py

"""Serverless entry point for the login form's email check.

Handler entry point: ``src.api.handler.handler``.  Thin layer only: the
decision itself lives in :mod:`src.services.email_authorizer`.
"""

import asyncio
import logging
from typing import Any

from src.api.responses import err, get_body, get_method, ok
from src.config.logging_config import setup_logging
from src.services.email_authorizer import EmailAuthorizer
from src.services.exceptions import InvalidEmailError

setup_logging(to_file=False)
logger = logging.getLogger("storefront.api")

# Kept for the life of the warm instance so the bearer token is reused
_authorizer: EmailAuthorizer | None = None


def get_authorizer() -> EmailAuthorizer:
    """Return the instance-wide authorizer, building it on first use."""
    global _authorizer
    if _authorizer is None:
        _authorizer = EmailAuthorizer()
    return _authorizer


def set_authorizer(authorizer: EmailAuthorizer | None) -> None:
    """Replace (or with ``None``, reset) the instance-wide authorizer."""
    global _authorizer
    _authorizer = authorizer


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    if get_method(event) != "POST":
        return err("Method not allowed", 405, authorized=False)

    body = get_body(event)
    authorizer = get_authorizer()
    try:
        result = asyncio.run(authorizer.authorize(body.get("email")))
    except InvalidEmailError as exc:
        return err(str(exc), 400, authorized=False)
    except Exception as exc:
        logger.error(
            "Error checking email: %s", exc, exc_info=True
        )
        return err(str(exc), 500, authorized=False)

    return ok(result.to_response(debug=authorizer.debug))
