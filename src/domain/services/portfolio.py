"""Domain services for portfolio valuation summaries."""

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal
from logging import Logger

from src.domain.models.balances import (
    AggregatedBalance,
    BalanceType,
    RawBalanceRecord,
    TokenPrice,
)
from src.domain.models.portfolio import PortfolioSnapshot, PortfolioTotals
from src.domain.services.aggregation import aggregate_line_items
from src.domain.services.decimal_arithmetic import (
    HUNDRED,
    ZERO,
    is_zero,
    sum_decimals,
)
from src.domain.services.normalization import normalize_symbol
from src.domain.services.ranking import paginate, sort_balances
from src.domain.services.valuation import value_balance_record


def filter_zero_balances(
    balances: Iterable[AggregatedBalance],
) -> tuple[AggregatedBalance, ...]:
    """Drop balances whose value is exactly zero."""
    return tuple(
        balance for balance in balances if not is_zero(balance.total_usd_value)
    )


def compute_type_totals(
    balances: Iterable[AggregatedBalance],
) -> tuple[Decimal, Decimal]:
    """Sum balance values per balance type.

    Args:
        balances: Filtered aggregated balances.

    Returns:
        tuple[Decimal, Decimal]: Spot total and funding total.
    """
    spot_total = ZERO
    funding_total = ZERO
    for balance in balances:
        if balance.balance_type is BalanceType.SPOT:
            spot_total += balance.total_usd_value
        elif balance.balance_type is BalanceType.FUNDING:
            funding_total += balance.total_usd_value
    return spot_total, funding_total


def compute_change_24h(
    balances: Iterable[AggregatedBalance],
) -> tuple[Decimal, Decimal]:
    """Compute the value-weighted 24 hour change of a portfolio.

    Only balances with a positive amount take part. Every network
    contribution with a known change adds ``value * change_percent / 100``.
    An empty or valueless portfolio has a 0% change.

    Args:
        balances: Filtered aggregated balances.

    Returns:
        tuple[Decimal, Decimal]: Absolute change and change percentage.
    """
    held = [balance for balance in balances if balance.total_amount > ZERO]
    total_value = sum_decimals(balance.total_usd_value for balance in held)
    change = sum_decimals(balance.change_24h for balance in held)
    if total_value > ZERO:
        return change, change / total_value * HUNDRED
    return change, ZERO


def summarize_portfolio(
    balances: Sequence[AggregatedBalance],
) -> PortfolioTotals:
    """Compute type totals and 24h change over a set of balances."""
    spot_total, funding_total = compute_type_totals(balances)
    change_24h, change_percent_24h = compute_change_24h(balances)
    return PortfolioTotals(
        spot_total=spot_total,
        funding_total=funding_total,
        change_24h=change_24h,
        change_percent_24h=change_percent_24h,
    )


def resolve_record_price(
    record: RawBalanceRecord,
    prices: Mapping[str, TokenPrice | None],
) -> TokenPrice | None:
    """Return the price of a record's token.

    Prices from the lookup win; the market data joined to the token row is
    used when the lookup has nothing for the symbol.

    Args:
        record: Raw balance record.
        prices: Prices keyed by normalized token symbol.

    Returns:
        TokenPrice | None: Known price, or None when unknown.
    """
    price = prices.get(normalize_symbol(record.token.symbol) or "")
    if price is not None:
        return price
    if record.token.current_price is None:
        return None
    return TokenPrice(
        current_price=record.token.current_price,
        change_percent_24h=record.token.change_percent_24h,
    )


def build_portfolio_snapshot(
    records: Iterable[RawBalanceRecord],
    prices: Mapping[str, TokenPrice | None],
    *,
    page=1,
    limit=20,
    show_zero_balances: bool = True,
    balance_type: BalanceType | None = None,
    logger: Logger | None = None,
) -> PortfolioSnapshot:
    """Build the valued, merged and paginated view of a user's balances.

    Totals are computed over the full filtered set; pagination only selects
    which balances are visible.

    Args:
        records: Raw balance records of the user's active wallets.
        prices: Prices keyed by normalized token symbol.
        page: Requested page, coerced to at least 1.
        limit: Requested page size, coerced to at least 1.
        show_zero_balances: Keep balances whose value is exactly zero.
        balance_type: Optional balance type to restrict to.
        logger: Logger used for data-quality warnings.

    Returns:
        PortfolioSnapshot: Snapshot for the request.

    Raises:
        DataIntegrityError: If a record carries a malformed amount.
    """
    items = [
        value_balance_record(record, resolve_record_price(record, prices))
        for record in records
        if balance_type is None or record.balance_type is balance_type
    ]
    merged = aggregate_line_items(items, logger=logger).values()
    if not show_zero_balances:
        merged = filter_zero_balances(merged)
    ordered = sort_balances(merged)
    page_balances, page_info = paginate(ordered, page, limit)
    return PortfolioSnapshot(
        balances=ordered,
        page_balances=page_balances,
        totals=summarize_portfolio(ordered),
        pagination=page_info,
    )


__all__ = [
    "filter_zero_balances",
    "compute_type_totals",
    "compute_change_24h",
    "summarize_portfolio",
    "resolve_record_price",
    "build_portfolio_snapshot",
]
