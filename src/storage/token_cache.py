# src/storage/token_cache.py

"""In-memory bearer token cache with an early-refresh safety margin."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.config.settings import Settings

logger = logging.getLogger("storefront.cache")

ABSENT = "absent"
VALID = "valid"
EXPIRING = "expiring"
EXPIRED = "expired"


@dataclass
class BearerToken:
    """An access token and the absolute epoch time it stops working."""

    access_token: str
    expires_at: float


class TokenCache:
    """Holds a single bearer token for the lifetime of the process.

    A token counts as valid only while the clock is strictly before
    ``expires_at - margin``; inside the margin it is *expiring* and the
    caller should refresh.  There is no lock: concurrent refreshes on one
    instance are last-write-wins.
    """

    def __init__(
        self,
        margin_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._token: BearerToken | None = None
        self._margin: float = (
            Settings.TOKEN_EXPIRY_MARGIN
            if margin_seconds is None
            else margin_seconds
        )
        self._clock = clock

    @property
    def token(self) -> BearerToken | None:
        """The cached token, whatever its state."""
        return self._token

    @property
    def state(self) -> str:
        """One of ``absent``, ``valid``, ``expiring`` or ``expired``."""
        if self._token is None or not self._token.access_token:
            return ABSENT
        now = self._clock()
        if now >= self._token.expires_at:
            return EXPIRED
        if now >= self._token.expires_at - self._margin:
            return EXPIRING
        return VALID

    def is_valid(self) -> bool:
        return self.state == VALID

    def store(self, access_token: str, expires_in: float) -> BearerToken:
        """Cache *access_token*, expiring *expires_in* seconds from now."""
        self._token = BearerToken(
            access_token=access_token,
            expires_at=self._clock() + expires_in,
        )
        logger.info(
            "Cached bearer token (expires in %.0fs)", expires_in
        )
        return self._token

    def clear(self) -> None:
        self._token = None
