"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from .errors import NumericParseError


class PriceKind(str, Enum):
    """The three price points Coinbase publishes for a currency pair."""

    SPOT = "spot"
    BUY = "buy"
    SELL = "sell"


class TransactionType(str, Enum):
    """Transaction types that take part in aggregation; anything else is 'other'."""

    BUY = "buy"
    SELL = "sell"
    INFLATION_REWARD = "inflation_reward"


def parse_amount(value: object, field_name: str = "amount") -> float:
    """Parse a monetary string into a float, raising NumericParseError on failure."""
    if isinstance(value, bool):
        raise NumericParseError(value, field_name)
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise NumericParseError(value, field_name) from e


@dataclass(frozen=True)
class Money:
    """Amount/currency pair exactly as delivered by the API."""

    amount: str
    currency: str

    def value(self, field_name: str = "amount") -> float:
        return parse_amount(self.amount, field_name)


@dataclass(frozen=True)
class Pagination:
    """Pagination envelope; parsed but never followed."""

    limit: int | None = None
    order: str | None = None
    next_uri: str | None = None
    previous_uri: str | None = None
    starting_after: str | None = None
    ending_before: str | None = None

    @property
    def has_next(self) -> bool:
        return bool(self.next_uri)


@dataclass(frozen=True)
class UserProfile:
    """Subset of the /user resource."""

    native_currency: str
    id: str | None = None
    name: str | None = None
    time_zone: str | None = None
    state: str | None = None
    country_code: str | None = None
    bitcoin_unit: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class Account:
    """One exchange-held wallet."""

    id: str
    name: str
    balance: Money
    type: str | None = None
    primary: bool = False


@dataclass(frozen=True)
class AccountPage:
    accounts: tuple[Account, ...] = ()
    pagination: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class PriceQuote:
    """Point-in-time price for one unit of ``base`` expressed in ``currency``."""

    base: str
    amount: str
    currency: str
    kind: PriceKind = PriceKind.SPOT

    def value(self) -> float:
        return parse_amount(self.amount, f"{self.kind.value} price")


@dataclass(frozen=True)
class Transaction:
    """Single entry of an account's transaction history."""

    type: str
    amount: Money
    native_amount: Money
    id: str | None = None
    status: str | None = None
    created_at: str | None = None
    payment_method_name: str | None = None
    summary_header: str | None = None


@dataclass(frozen=True)
class TransactionPage:
    transactions: tuple[Transaction, ...] = ()
    pagination: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class ExchangeRates:
    """Rates from ``currency`` to every other listed currency code."""

    currency: str
    rates: dict[str, float] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Derived records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AccountMetrics:
    """Per-account valuation and return, all monetary values in native currency."""

    account_name: str
    currency: str
    balance: float
    quote_currency: str
    spot_price: float
    buy_price: float
    sell_price: float
    sell_out_value: float
    invested_amount: float
    inflation_reward_amount: float
    net_return: float


@dataclass(frozen=True)
class PortfolioOverview:
    """Aggregated overview across every account with a positive balance."""

    profile: UserProfile
    accounts: tuple[AccountMetrics, ...] = ()
    total_sell_out_value: float = 0.0
    total_net_return: float = 0.0


@dataclass(frozen=True)
class AccountValuation:
    """Account balance converted to native currency at a spot price."""

    account_name: str
    balance_amount: str
    currency: str
    native_value: float
    native_currency: str


@dataclass(frozen=True)
class TransactionEntry:
    """One transaction prepared for listing."""

    type: str
    currency: str
    amount: float
    created_at: str = ""
    payment_method_name: str = ""
    summary_header: str = ""
