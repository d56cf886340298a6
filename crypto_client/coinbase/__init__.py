"""Coinbase v2 API access: signing, gateway and decoders."""
from .client import CoinbaseClient, currency_pair
from .signer import build_headers, sign

__all__ = ["CoinbaseClient", "build_headers", "currency_pair", "sign"]
