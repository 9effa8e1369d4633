"""HTTP client for the India Post PIN code directory.

Used to hint city/state next to the PIN code field.  Lookups are
informational: every failure (bad PIN, network error, unexpected payload)
is logged and reported as "not found", never raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

import httpx

from udyam_intake.core.constants import PIN_CODE_PATTERN
from udyam_intake.core.logging import get_logger

logger = get_logger(__name__)

_PIN_RE = re.compile(PIN_CODE_PATTERN, re.ASCII)


@dataclass(frozen=True)
class PinInfo:
    city: str
    state: str


class PostalLookupClient:
    """Resolves a 6-digit PIN code to its district and state."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def lookup(self, pin: str) -> PinInfo | None:
        """Return city/state for ``pin``, or None when unknown or unreachable."""
        if not _PIN_RE.fullmatch(pin):
            return None

        url = f"{self.base_url}/pincode/{pin}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url)
                response.raise_for_status()
                payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("PIN lookup failed", pin=pin, error=str(exc), error_type=type(exc).__name__)
            return None

        info = _parse_post_office(payload)
        if info is None:
            logger.debug("PIN not found", pin=pin)
        return info


def _parse_post_office(payload: Any) -> PinInfo | None:
    """Pick District/State of the first post office in the API response."""
    first = payload[0] if isinstance(payload, list) and payload else None
    if not isinstance(first, dict):
        return None
    offices = first.get("PostOffice")
    post = offices[0] if isinstance(offices, list) and offices else None
    if not isinstance(post, dict):
        return None
    city, state = post.get("District"), post.get("State")
    if not isinstance(city, str) or not isinstance(state, str):
        return None
    return PinInfo(city=city, state=state)
