"""Terminal presentation: plain-text tables and record renderers."""
from .render import (
    accounts_table,
    exchange_rates_table,
    overview_summary,
    overview_table,
    profile_block,
    transactions_table,
)
from .table import Table

__all__ = [
    "Table",
    "accounts_table",
    "exchange_rates_table",
    "overview_summary",
    "overview_table",
    "profile_block",
    "transactions_table",
]
