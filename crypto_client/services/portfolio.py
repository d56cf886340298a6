"""Portfolio aggregation — per-account data retrieval and financial roll-up."""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from datetime import date

from ..coinbase.client import currency_pair
from ..interfaces.exchange import ExchangeClient
from ..models import (
    Account,
    AccountMetrics,
    AccountValuation,
    ExchangeRates,
    PortfolioOverview,
    PriceKind,
    PriceQuote,
    Transaction,
    TransactionEntry,
    TransactionType,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure folding helpers
# ---------------------------------------------------------------------------


def is_positive_balance(account: Account) -> bool:
    """Zero and negative balances take no part in any aggregation."""
    return account.balance.value("balance") > 0


def fold_transactions(transactions: Iterable[Transaction]) -> tuple[float, float]:
    """Return ``(invested_amount, inflation_reward_amount)`` for one account.

    invested_amount sums native amounts of ``buy`` transactions,
    inflation_reward_amount sums asset amounts of ``inflation_reward``
    transactions. Both amounts of every transaction are parsed, so a
    malformed value aborts the fold regardless of type.
    """
    invested = 0.0
    rewards = 0.0
    for tr in transactions:
        native_value = tr.native_amount.value("native_amount")
        asset_value = tr.amount.value("amount")
        if tr.type == TransactionType.BUY.value:
            invested += native_value
        elif tr.type == TransactionType.INFLATION_REWARD.value:
            rewards += asset_value
    return invested, rewards


def compute_account_metrics(
    account: Account,
    spot: PriceQuote,
    buy: PriceQuote,
    sell: PriceQuote,
    transactions: Iterable[Transaction],
) -> AccountMetrics:
    """Combine balance, quotes and history into one AccountMetrics record."""
    balance = account.balance.value("balance")
    sell_price = sell.value()
    invested, rewards = fold_transactions(transactions)
    sell_out_value = balance * sell_price
    return AccountMetrics(
        account_name=account.name,
        currency=account.balance.currency,
        balance=balance,
        quote_currency=sell.currency,
        spot_price=spot.value(),
        buy_price=buy.value(),
        sell_price=sell_price,
        sell_out_value=sell_out_value,
        invested_amount=invested,
        inflation_reward_amount=rewards,
        net_return=sell_out_value - invested,
    )


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class PortfolioService:
    """Orchestrates retrieval and aggregation for the three CLI modes.

    Any error raised by the client or while parsing amounts propagates
    unchanged: a run either produces complete results or none.
    """

    def __init__(self, client: ExchangeClient) -> None:
        self._client = client

    async def _account_metrics(
        self, account: Account, native_currency: str
    ) -> AccountMetrics:
        pair = currency_pair(account.balance.currency, native_currency)
        spot, buy, sell, history = await asyncio.gather(
            self._client.get_price(pair, PriceKind.SPOT),
            self._client.get_price(pair, PriceKind.BUY),
            self._client.get_price(pair, PriceKind.SELL),
            self._client.get_transactions(account.id),
        )
        return compute_account_metrics(account, spot, buy, sell, history.transactions)

    async def overview(self) -> PortfolioOverview:
        """Value every funded account and total the portfolio.

        Accounts are processed one after another so rows follow the order of
        the account list.
        """
        profile = await self._client.get_user_profile()
        page = await self._client.get_accounts()

        metrics: list[AccountMetrics] = []
        total_sell_out = 0.0
        total_return = 0.0
        for account in page.accounts:
            if not is_positive_balance(account):
                continue
            m = await self._account_metrics(account, profile.native_currency)
            logger.info(
                "Account — %s · balance %f %s · sell-out %.2f · invested %.2f · return %.2f %s",
                m.account_name,
                m.balance,
                m.currency,
                m.sell_out_value,
                m.invested_amount,
                m.net_return,
                profile.native_currency,
            )
            metrics.append(m)
            total_sell_out += m.sell_out_value
            total_return += m.net_return

        return PortfolioOverview(
            profile=profile,
            accounts=tuple(metrics),
            total_sell_out_value=total_sell_out,
            total_net_return=total_return,
        )

    async def list_transactions(self) -> list[TransactionEntry]:
        """List the transactions of every account.

        One task per account; entries are collected in completion order, so
        the order across accounts is not stable between runs.
        """
        page = await self._client.get_accounts()
        entries: list[TransactionEntry] = []

        async def _collect(account_id: str) -> None:
            history = await self._client.get_transactions(account_id)
            rows = [
                TransactionEntry(
                    type=tr.type,
                    currency=tr.amount.currency,
                    amount=tr.amount.value("amount"),
                    created_at=tr.created_at or "",
                    payment_method_name=tr.payment_method_name or "",
                    summary_header=tr.summary_header or "",
                )
                for tr in history.transactions
            ]
            entries.extend(rows)
            logger.debug("Account %s: %d transactions", account_id, len(rows))

        await asyncio.gather(*(_collect(a.id) for a in page.accounts))
        logger.info(
            "Collected %d transactions from %d accounts",
            len(entries),
            len(page.accounts),
        )
        return entries

    async def list_accounts(self, on_date: date | None = None) -> list[AccountValuation]:
        """Convert every funded account to native currency at spot price.

        With ``on_date`` the historical spot price of that day is used.
        Valuations are collected in completion order.
        """
        profile = await self._client.get_user_profile()
        page = await self._client.get_accounts()
        native = profile.native_currency
        funded = [a for a in page.accounts if is_positive_balance(a)]
        valuations: list[AccountValuation] = []

        async def _value(account: Account) -> None:
            pair = currency_pair(account.balance.currency, native)
            if on_date is None:
                quote = await self._client.get_price(pair, PriceKind.SPOT)
            else:
                quote = await self._client.get_price_by_date(pair, on_date)
            valuations.append(
                AccountValuation(
                    account_name=account.name,
                    balance_amount=account.balance.amount,
                    currency=account.balance.currency,
                    native_value=account.balance.value("balance") * quote.value(),
                    native_currency=native,
                )
            )

        await asyncio.gather(*(_value(a) for a in funded))
        return valuations

    async def exchange_rates(self) -> ExchangeRates:
        """Exchange rates from the user's native currency."""
        profile = await self._client.get_user_profile()
        return await self._client.get_exchange_rates(profile.native_currency)
