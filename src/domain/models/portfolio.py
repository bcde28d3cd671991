"""Domain models for portfolio snapshots."""

from dataclasses import dataclass
from decimal import Decimal

from .balances import AggregatedBalance


@dataclass(frozen=True)
class PortfolioTotals:
    """Totals computed over the filtered, unpaginated balances.

    Attributes:
        spot_total: Value held in spot balances.
        funding_total: Value held in funding balances.
        change_24h: Absolute value change over the last 24 hours.
        change_percent_24h: Value-weighted change percentage.
    """

    spot_total: Decimal
    funding_total: Decimal
    change_24h: Decimal
    change_percent_24h: Decimal

    @property
    def total(self) -> Decimal:
        """Return spot_total plus funding_total."""
        return self.spot_total + self.funding_total


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata for a balances page."""

    total: int
    page: int
    limit: int
    total_pages: int
    has_more: bool


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Merged, valued and sorted balances of one user at one instant."""

    balances: tuple[AggregatedBalance, ...]
    page_balances: tuple[AggregatedBalance, ...]
    totals: PortfolioTotals
    pagination: PageInfo


__all__ = ["PortfolioTotals", "PageInfo", "PortfolioSnapshot"]
