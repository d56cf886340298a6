"""Turn aggregated records into display rows."""
from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from ..models import (
    AccountValuation,
    ExchangeRates,
    PortfolioOverview,
    TransactionEntry,
    UserProfile,
)
from .table import Table


def _money(value: float, currency: str) -> str:
    return f"{value:.2f} {currency}"


def _plain(value: float) -> str:
    """Shortest round-trip decimal form of a float, never in exponent notation."""
    return format(Decimal(repr(value)), "f")


def _local_time(stamp: str) -> str:
    """RFC 3339 timestamp as MM-DD-YYYY HH:MM local time; unparseable text is kept."""
    try:
        moment = datetime.fromisoformat(stamp.replace("Z", "+00:00"))
    except ValueError:
        return stamp
    return moment.astimezone().strftime("%m-%d-%Y %H:%M")


def profile_block(profile: UserProfile) -> str:
    """Short human-readable summary of the user profile."""
    return (
        f"Name: {profile.name or ''}\n"
        f"Country: {profile.country_code or ''}\n"
        f"State: {profile.state or ''}\n"
        f"Timezone: {profile.time_zone or ''}\n"
        f"Native Currency: {profile.native_currency}\n"
        f"Bitcoin Unit: {profile.bitcoin_unit or ''}\n"
        f"Account Created: {_local_time(profile.created_at or '')}\n"
    )


def overview_table(overview: PortfolioOverview) -> Table:
    native = overview.profile.native_currency
    tbl = Table(
        "Wallet",
        "Balance",
        "Currency",
        "Spot Price Per Unit",
        "Buy Price Per Unit",
        "Sell Price Per Unit",
        "Total Sell Out Price",
        "Invested",
        "Inflation Rewards",
        "Total Return",
    )
    for m in overview.accounts:
        tbl.add_row(
            m.account_name,
            f"{m.balance:f}",
            m.currency,
            _money(m.spot_price, m.quote_currency),
            _money(m.buy_price, m.quote_currency),
            _money(m.sell_price, m.quote_currency),
            _money(m.sell_out_value, m.quote_currency),
            _money(m.invested_amount, native),
            f"{m.inflation_reward_amount:f} {m.currency}",
            _money(m.net_return, native),
        )
    return tbl


def overview_summary(overview: PortfolioOverview) -> list[str]:
    native = overview.profile.native_currency
    return [
        f"Total Sell Out Amount: {_money(overview.total_sell_out_value, native)}",
        f"Total Return Amount: {_money(overview.total_net_return, native)}",
    ]


def transactions_table(entries: Iterable[TransactionEntry]) -> Table:
    tbl = Table("Transaction Type", "Crypto", "Amount", "Date", "Payment Method", "Summary")
    for e in entries:
        tbl.add_row(
            e.type,
            e.currency,
            _plain(e.amount),
            e.created_at,
            e.payment_method_name,
            e.summary_header,
        )
    return tbl


def accounts_table(valuations: Iterable[AccountValuation]) -> Table:
    tbl = Table("Wallet", "Balance", "Native")
    for v in valuations:
        tbl.add_row(
            v.account_name,
            f"{v.balance_amount} {v.currency}",
            _money(v.native_value, v.native_currency),
        )
    return tbl


def exchange_rates_table(rates: ExchangeRates) -> Table:
    tbl = Table("Currency", "Crypto", "Rate")
    for code in sorted(rates.rates):
        tbl.add_row(rates.currency, code, _plain(rates.rates[code]))
    return tbl
