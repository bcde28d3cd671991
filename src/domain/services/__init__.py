"""Domain services package."""

from .aggregation import aggregate_line_items, merge_line_item
from .normalization import normalize_network, normalize_symbol
from .portfolio import (
    build_portfolio_snapshot,
    compute_change_24h,
    compute_type_totals,
    filter_zero_balances,
    summarize_portfolio,
)
from .ranking import normalize_page_params, paginate, sort_balances
from .serialization import serialize_portfolio_snapshot
from .validation import validate_display_metadata
from .valuation import build_asset_key, value_balance_record

__all__ = [
    "aggregate_line_items",
    "merge_line_item",
    "normalize_network",
    "normalize_symbol",
    "build_portfolio_snapshot",
    "compute_change_24h",
    "compute_type_totals",
    "filter_zero_balances",
    "summarize_portfolio",
    "normalize_page_params",
    "paginate",
    "sort_balances",
    "serialize_portfolio_snapshot",
    "validate_display_metadata",
    "build_asset_key",
    "value_balance_record",
]
