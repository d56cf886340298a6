"""Shared test fixtures and sample data."""
from __future__ import annotations

import json
import textwrap
from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import pytest

from crypto_client.config import ApiConfig, AppConfig, Credentials
from crypto_client.models import (
    Account,
    AccountPage,
    Money,
    PriceKind,
    PriceQuote,
    Transaction,
    TransactionPage,
    UserProfile,
)


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_credentials() -> Credentials:
    return Credentials(key="test-key", secret="test-secret")


@pytest.fixture()
def sample_api_config() -> ApiConfig:
    return ApiConfig(
        base_url="https://api.example.com/v2/",
        api_version="2017-08-31",
        request_timeout=10.0,
    )


@pytest.fixture()
def sample_app_config(
    sample_api_config: ApiConfig, sample_credentials: Credentials
) -> AppConfig:
    return AppConfig(api=sample_api_config, credentials=sample_credentials)


SAMPLE_YAML = textwrap.dedent("""\
    api:
      base_url: "https://api.example.com/v2/"
      api_version: "2021-01-01"
      request_timeout: 15
    credentials:
      key: "yaml-key"
      secret: "yaml-secret"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Raw API bodies
# ---------------------------------------------------------------------------


def _body(doc: Any) -> bytes:
    return json.dumps(doc).encode()


@pytest.fixture()
def to_body() -> Callable[[Any], bytes]:
    """Serialise a document the way the API returns it."""
    return _body


@pytest.fixture()
def user_body() -> bytes:
    return _body(
        {
            "data": {
                "id": "user-1",
                "name": "Satoshi",
                "username": None,
                "profile_location": None,
                "time_zone": "Central Time (US & Canada)",
                "native_currency": "USD",
                "bitcoin_unit": "BTC",
                "state": "Texas",
                "country": {"code": "US", "name": "United States", "is_in_europe": False},
                "created_at": "2017-12-01T10:00:00Z",
            }
        }
    )


@pytest.fixture()
def accounts_body() -> bytes:
    return _body(
        {
            "pagination": {
                "ending_before": None,
                "starting_after": None,
                "limit": 25,
                "order": "desc",
                "previous_uri": None,
                "next_uri": None,
            },
            "data": [
                {
                    "id": "acc-btc",
                    "name": "BTC Wallet",
                    "primary": True,
                    "type": "wallet",
                    "currency": {"code": "BTC"},
                    "balance": {"amount": "1.00000000", "currency": "BTC"},
                },
                {
                    "id": "acc-eth",
                    "name": "ETH Wallet",
                    "primary": False,
                    "type": "wallet",
                    "balance": {"amount": "0.00000000", "currency": "ETH"},
                },
            ],
        }
    )


@pytest.fixture()
def transactions_body() -> bytes:
    return _body(
        {
            "pagination": {"limit": 25, "order": "desc", "next_uri": None},
            "data": [
                {
                    "id": "tx-1",
                    "type": "buy",
                    "status": "completed",
                    "amount": {"amount": "1.00000000", "currency": "BTC"},
                    "native_amount": {"amount": "25000.00", "currency": "USD"},
                    "created_at": "2021-01-02T03:04:05Z",
                    "details": {
                        "title": "Bought Bitcoin",
                        "header": "Bought 1.0000 BTC ($25,000.00)",
                        "payment_method_name": "Bank ****1234",
                    },
                },
            ],
        }
    )


def _price_body(amount: str, base: str = "BTC", currency: str = "USD") -> bytes:
    return _body({"data": {"base": base, "amount": amount, "currency": currency}})


@pytest.fixture()
def price_body() -> Callable[..., bytes]:
    return _price_body


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


def _account(
    account_id: str, amount: str, currency: str = "BTC", name: str | None = None
) -> Account:
    return Account(
        id=account_id,
        name=name or f"{currency} Wallet",
        balance=Money(amount=amount, currency=currency),
    )


def _transaction(
    tx_type: str,
    amount: str,
    native_amount: str,
    currency: str = "BTC",
    native_currency: str = "USD",
    tx_id: str = "tx",
) -> Transaction:
    return Transaction(
        id=tx_id,
        type=tx_type,
        amount=Money(amount=amount, currency=currency),
        native_amount=Money(amount=native_amount, currency=native_currency),
    )


def _quote(amount: str, kind: PriceKind, base: str = "BTC") -> PriceQuote:
    return PriceQuote(base=base, amount=amount, currency="USD", kind=kind)


@pytest.fixture()
def make_account() -> Callable[..., Account]:
    return _account


@pytest.fixture()
def make_transaction() -> Callable[..., Transaction]:
    return _transaction


@pytest.fixture()
def make_quote() -> Callable[..., PriceQuote]:
    return _quote


@pytest.fixture()
def sample_profile() -> UserProfile:
    return UserProfile(native_currency="USD", name="Satoshi", country_code="US")


@pytest.fixture()
def mock_client(sample_profile: UserProfile) -> AsyncMock:
    """Exchange client serving one BTC account (balance 1.0) with one buy.

    Quotes: spot 30000.00, buy 30100.00, sell 29900.00.
    """
    quotes = {
        PriceKind.SPOT: "30000.00",
        PriceKind.BUY: "30100.00",
        PriceKind.SELL: "29900.00",
    }

    async def _get_price(pair: str, kind: PriceKind) -> PriceQuote:
        base = pair.split("-")[0]
        return _quote(quotes[kind], kind, base=base)

    client = AsyncMock()
    client.get_user_profile.return_value = sample_profile
    client.get_accounts.return_value = AccountPage(
        accounts=(_account("acc-btc", "1.0"),)
    )
    client.get_price.side_effect = _get_price
    client.get_transactions.return_value = TransactionPage(
        transactions=(_transaction("buy", "0.9", "25000.00"),)
    )
    return client
