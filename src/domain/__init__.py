"""Domain package for portfolio valuation rules and core models."""

from .constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT, REFERENCE_CURRENCY
from .errors import ConfigurationError, DataIntegrityError, PortfolioError
from .models import (
    AggregatedBalance,
    BalanceType,
    LogicalAssetKey,
    NetworkContribution,
    PageInfo,
    PortfolioSnapshot,
    PortfolioTotals,
    RawBalanceRecord,
    TokenMetadata,
    TokenPrice,
    ValuedLineItem,
)
from .services import (
    aggregate_line_items,
    build_portfolio_snapshot,
    paginate,
    serialize_portfolio_snapshot,
    sort_balances,
    value_balance_record,
)

__all__ = [
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_LIMIT",
    "REFERENCE_CURRENCY",
    "ConfigurationError",
    "DataIntegrityError",
    "PortfolioError",
    "AggregatedBalance",
    "BalanceType",
    "LogicalAssetKey",
    "NetworkContribution",
    "PageInfo",
    "PortfolioSnapshot",
    "PortfolioTotals",
    "RawBalanceRecord",
    "TokenMetadata",
    "TokenPrice",
    "ValuedLineItem",
    "aggregate_line_items",
    "build_portfolio_snapshot",
    "paginate",
    "serialize_portfolio_snapshot",
    "sort_balances",
    "value_balance_record",
]
