"""HMAC-SHA256 request signing for the Coinbase v2 API key scheme."""
from __future__ import annotations

import hashlib
import hmac
import time

from ..config import DEFAULT_API_VERSION, Credentials


def sign(secret: str, timestamp: int, method: str, path: str) -> str:
    """Return the hex signature of ``timestamp + method + path`` keyed by ``secret``.

    ``path`` is the URL path only (e.g. ``/v2/accounts``), without query string.
    """
    message = f"{timestamp}{method}{path}"
    return hmac.new(
        secret.encode(), message.encode(), hashlib.sha256
    ).hexdigest()


def build_headers(
    credentials: Credentials,
    method: str,
    path: str,
    timestamp: int | None = None,
    api_version: str = DEFAULT_API_VERSION,
) -> dict[str, str]:
    """Build the authentication headers for one request.

    The timestamp is taken once and used both for the signature and for the
    CB-ACCESS-TIMESTAMP header; the server rejects requests where they differ.
    """
    if timestamp is None:
        timestamp = int(time.time())
    return {
        "CB-ACCESS-KEY": credentials.key,
        "CB-ACCESS-SIGN": sign(credentials.secret, timestamp, method, path),
        "CB-ACCESS-TIMESTAMP": str(timestamp),
        "CB-VERSION": api_version,
        "Content-Type": "application/json",
    }
