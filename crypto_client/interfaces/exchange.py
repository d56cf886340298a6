"""Exchange client protocol — read-only account and market data."""
from datetime import date
from typing import Protocol

from ..models import (
    AccountPage,
    ExchangeRates,
    PriceKind,
    PriceQuote,
    TransactionPage,
    UserProfile,
)


class ExchangeClient(Protocol):
    """Abstract interface for the data the portfolio service needs."""

    async def get_user_profile(self) -> UserProfile: ...

    async def get_accounts(self) -> AccountPage: ...

    async def get_price(self, pair: str, kind: PriceKind) -> PriceQuote: ...

    async def get_price_by_date(self, pair: str, on_date: date) -> PriceQuote: ...

    async def get_transactions(self, account_id: str) -> TransactionPage: ...

    async def get_exchange_rates(self, currency: str | None = None) -> ExchangeRates: ...
