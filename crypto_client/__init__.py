"""Command-line client for the Coinbase v2 API with portfolio summaries."""

__version__ = "0.1.0"
