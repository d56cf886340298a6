"""Pure decoding functions for Coinbase v2 response bodies — no I/O.

Every resource is wrapped in a ``data`` envelope; list resources also carry
a ``pagination`` block. Unknown fields are ignored, required fields that are
missing or of the wrong type raise DecodeError.
"""
from __future__ import annotations

import json
from typing import Any

from ..errors import DecodeError
from ..models import (
    Account,
    AccountPage,
    ExchangeRates,
    Money,
    Pagination,
    PriceKind,
    PriceQuote,
    Transaction,
    TransactionPage,
    UserProfile,
)


def _load(raw: bytes | str, resource: str) -> Any:
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeError(resource, f"invalid JSON ({e})") from e


def _envelope(raw: bytes | str, resource: str, expected: type) -> Any:
    """Return the ``data`` member of a response, checking its JSON type."""
    doc = _load(raw, resource)
    if not isinstance(doc, dict) or "data" not in doc:
        raise DecodeError(resource, "missing 'data' envelope")
    data = doc["data"]
    if not isinstance(data, expected):
        raise DecodeError(
            resource, f"'data' must be {expected.__name__}, got {type(data).__name__}"
        )
    return doc


def _require_str(obj: dict[str, Any], key: str, resource: str) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise DecodeError(resource, f"field '{key}' must be a string, got {value!r}")
    return value


def _optional_str(obj: dict[str, Any], key: str, resource: str) -> str | None:
    value = obj.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError(resource, f"field '{key}' must be a string or null")
    return value


def _require_obj(obj: dict[str, Any], key: str, resource: str) -> dict[str, Any]:
    value = obj.get(key)
    if not isinstance(value, dict):
        raise DecodeError(resource, f"field '{key}' must be an object, got {value!r}")
    return value


def _money(obj: dict[str, Any], key: str, resource: str) -> Money:
    node = _require_obj(obj, key, resource)
    return Money(
        amount=_require_str(node, "amount", f"{resource}.{key}"),
        currency=_require_str(node, "currency", f"{resource}.{key}"),
    )


def _pagination(doc: dict[str, Any], resource: str) -> Pagination:
    node = doc.get("pagination")
    if node is None:
        return Pagination()
    if not isinstance(node, dict):
        raise DecodeError(resource, "'pagination' must be an object")
    limit = node.get("limit")
    if limit is not None and (isinstance(limit, bool) or not isinstance(limit, int)):
        raise DecodeError(resource, "pagination 'limit' must be an integer")
    return Pagination(
        limit=limit,
        order=_optional_str(node, "order", resource),
        next_uri=_optional_str(node, "next_uri", resource),
        previous_uri=_optional_str(node, "previous_uri", resource),
        starting_after=_optional_str(node, "starting_after", resource),
        ending_before=_optional_str(node, "ending_before", resource),
    )


def decode_user_profile(raw: bytes | str) -> UserProfile:
    """Decode the ``user`` resource."""
    data = _envelope(raw, "user", dict)["data"]
    country = data.get("country")
    country_code = None
    if isinstance(country, dict):
        country_code = _optional_str(country, "code", "user.country")
    return UserProfile(
        native_currency=_require_str(data, "native_currency", "user"),
        id=_optional_str(data, "id", "user"),
        name=_optional_str(data, "name", "user"),
        time_zone=_optional_str(data, "time_zone", "user"),
        state=_optional_str(data, "state", "user"),
        country_code=country_code,
        bitcoin_unit=_optional_str(data, "bitcoin_unit", "user"),
        created_at=_optional_str(data, "created_at", "user"),
    )


def decode_accounts(raw: bytes | str) -> AccountPage:
    """Decode the ``accounts`` list resource."""
    doc = _envelope(raw, "accounts", list)
    accounts: list[Account] = []
    for item in doc["data"]:
        if not isinstance(item, dict):
            raise DecodeError("accounts", "account entry must be an object")
        accounts.append(
            Account(
                id=_require_str(item, "id", "account"),
                name=_require_str(item, "name", "account"),
                balance=_money(item, "balance", "account"),
                type=_optional_str(item, "type", "account"),
                primary=bool(item.get("primary", False)),
            )
        )
    return AccountPage(accounts=tuple(accounts), pagination=_pagination(doc, "accounts"))


def decode_price(raw: bytes | str, kind: PriceKind = PriceKind.SPOT) -> PriceQuote:
    """Decode a ``prices/{pair}/{kind}`` resource."""
    resource = f"{kind.value} price"
    data = _envelope(raw, resource, dict)["data"]
    return PriceQuote(
        base=_require_str(data, "base", resource),
        amount=_require_str(data, "amount", resource),
        currency=_require_str(data, "currency", resource),
        kind=kind,
    )


def decode_transactions(raw: bytes | str) -> TransactionPage:
    """Decode an ``accounts/{id}/transactions`` list resource."""
    doc = _envelope(raw, "transactions", list)
    transactions: list[Transaction] = []
    for item in doc["data"]:
        if not isinstance(item, dict):
            raise DecodeError("transactions", "transaction entry must be an object")
        details = item.get("details")
        if details is not None and not isinstance(details, dict):
            raise DecodeError("transaction", "'details' must be an object")
        details = details or {}
        transactions.append(
            Transaction(
                id=_optional_str(item, "id", "transaction"),
                type=_require_str(item, "type", "transaction"),
                amount=_money(item, "amount", "transaction"),
                native_amount=_money(item, "native_amount", "transaction"),
                status=_optional_str(item, "status", "transaction"),
                created_at=_optional_str(item, "created_at", "transaction"),
                payment_method_name=_optional_str(
                    details, "payment_method_name", "transaction.details"
                ),
                summary_header=_optional_str(details, "header", "transaction.details"),
            )
        )
    return TransactionPage(
        transactions=tuple(transactions), pagination=_pagination(doc, "transactions")
    )


def decode_exchange_rates(raw: bytes | str) -> ExchangeRates:
    """Decode the ``exchange-rates`` resource into a typed currency → rate map."""
    data = _envelope(raw, "exchange-rates", dict)["data"]
    currency = _require_str(data, "currency", "exchange-rates")
    raw_rates = _require_obj(data, "rates", "exchange-rates")

    rates: dict[str, float] = {}
    for code, value in raw_rates.items():
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise DecodeError("exchange-rates", f"rate for {code} must be numeric")
        try:
            rates[code] = float(value)
        except ValueError as e:
            raise DecodeError(
                "exchange-rates", f"rate for {code} is not a number: {value!r}"
            ) from e
    return ExchangeRates(currency=currency, rates=rates)
