"""Domain models package."""

from .balances import (
    AggregatedBalance,
    BalanceType,
    LogicalAssetKey,
    NetworkContribution,
    RawBalanceRecord,
    TokenMetadata,
    TokenPrice,
    ValuedLineItem,
)
from .portfolio import PageInfo, PortfolioSnapshot, PortfolioTotals

__all__ = [
    "AggregatedBalance",
    "BalanceType",
    "LogicalAssetKey",
    "NetworkContribution",
    "RawBalanceRecord",
    "TokenMetadata",
    "TokenPrice",
    "ValuedLineItem",
    "PageInfo",
    "PortfolioSnapshot",
    "PortfolioTotals",
]
