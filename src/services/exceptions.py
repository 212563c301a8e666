# src/services/exceptions.py

"""Error types raised by the authorization service."""


class StorefrontError(Exception):
    """Base class for storefront service errors."""


class ConfigurationError(StorefrontError):
    """Required configuration (e.g. API credentials) is missing."""


class UpstreamError(StorefrontError):
    """The sales platform answered with an error or an unexpected payload.

    ``body`` holds the raw response body for post-mortem logging.
    """

    def __init__(self, message: str, body: str = "") -> None:
        super().__init__(message)
        self.body = body


class InvalidEmailError(StorefrontError):
    """The submitted email is missing or not an address."""
