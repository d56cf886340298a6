"""Protocol interfaces for crypto-client."""
from .exchange import ExchangeClient

__all__ = ["ExchangeClient"]
