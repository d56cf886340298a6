"""Coinbase v2 REST client — signed, read-only GET requests."""
from __future__ import annotations

import asyncio
import logging
import ssl
import time
from datetime import date
from urllib.parse import urlsplit

import aiohttp
import certifi

from ..config import ApiConfig, Credentials
from ..errors import APIError, TransportError
from ..models import (
    AccountPage,
    ExchangeRates,
    PriceKind,
    PriceQuote,
    TransactionPage,
    UserProfile,
)
from . import decoders
from .signer import build_headers

logger = logging.getLogger(__name__)


def currency_pair(base: str, quote: str) -> str:
    """Return the Coinbase pair notation, e.g. ``BTC-USD``."""
    return f"{base}-{quote}"


class CoinbaseClient:
    """Authenticated gateway to the Coinbase v2 API.

    Every call is a single GET round-trip: no retries, no caching. Failures
    surface as TransportError (network) or APIError (non-200 status).
    """

    method = "GET"

    def __init__(self, credentials: Credentials, config: ApiConfig | None = None) -> None:
        config = config or ApiConfig()
        self.credentials = credentials
        self.base_url = config.base_url
        self.api_version = config.api_version
        self.timeout = config.request_timeout

    async def fetch(self, resource_path: str) -> bytes:
        """GET ``base_url + resource_path`` and return the raw body of a 200 response."""
        url = self.base_url + resource_path
        path = urlsplit(url).path
        timestamp = int(time.time())
        headers = build_headers(
            self.credentials,
            self.method,
            path,
            timestamp=timestamp,
            api_version=self.api_version,
        )

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        logger.debug("%s %s", self.method, url)
        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                async with session.get(
                    url,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                ) as response:
                    body = await response.read()
                    status = response.status
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            logger.error("Request to %s failed: %s", url, e)
            raise TransportError(url, e) from e

        if status != 200:
            text = body.decode("utf-8", errors="replace")
            logger.error("Coinbase returned HTTP %s for %s", status, url)
            raise APIError(status, text, url=url)

        return body

    # ------------------------------------------------------------------
    # Typed resources
    # ------------------------------------------------------------------

    async def get_user_profile(self) -> UserProfile:
        return decoders.decode_user_profile(await self.fetch("user"))

    async def get_accounts(self) -> AccountPage:
        page = decoders.decode_accounts(await self.fetch("accounts"))
        if page.pagination.has_next:
            logger.debug(
                "Account list has more pages (%s); only the first is used",
                page.pagination.next_uri,
            )
        return page

    async def get_price(self, pair: str, kind: PriceKind) -> PriceQuote:
        """Current ``kind`` price for ``pair`` (e.g. ``BTC-USD``)."""
        body = await self.fetch(f"prices/{pair}/{kind.value}")
        return decoders.decode_price(body, kind)

    async def get_price_by_date(self, pair: str, on_date: date) -> PriceQuote:
        """Historical spot price for ``pair`` on ``on_date``."""
        body = await self.fetch(f"prices/{pair}/spot?date={on_date.isoformat()}")
        return decoders.decode_price(body, PriceKind.SPOT)

    async def get_transactions(self, account_id: str) -> TransactionPage:
        page = decoders.decode_transactions(
            await self.fetch(f"accounts/{account_id}/transactions")
        )
        if page.pagination.has_next:
            logger.debug(
                "Transactions of account %s have more pages; only the first is used",
                account_id,
            )
        return page

    async def get_exchange_rates(self, currency: str | None = None) -> ExchangeRates:
        path = "exchange-rates"
        if currency:
            path = f"{path}?currency={currency}"
        return decoders.decode_exchange_rates(await self.fetch(path))
