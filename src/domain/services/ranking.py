"""Ranking and pagination of aggregated balances."""

import math
from collections.abc import Iterable, Sequence
from decimal import Decimal, InvalidOperation

from src.domain.models.balances import AggregatedBalance
from src.domain.models.portfolio import PageInfo
from src.domain.services.decimal_arithmetic import ZERO, is_zero


def _sort_key(balance: AggregatedBalance) -> tuple[int, Decimal, str]:
    if is_zero(balance.total_usd_value):
        return (1, ZERO, balance.symbol)
    return (0, -balance.total_usd_value, "")


def sort_balances(
    balances: Iterable[AggregatedBalance],
) -> tuple[AggregatedBalance, ...]:
    """Sort balances into display order.

    Valued balances come first, highest value first; zero-value balances
    follow in ascending symbol order. Equal values keep their input order.

    Args:
        balances: Full filtered set of aggregated balances.

    Returns:
        tuple[AggregatedBalance, ...]: Sorted balances.
    """
    return tuple(sorted(balances, key=_sort_key))


def coerce_positive_int(value) -> int:
    """Coerce a pagination parameter to an integer of at least 1.

    Zero, negative, non-integral and unparsable values become 1.

    Args:
        value: Raw page or limit value.

    Returns:
        int: Positive integer.
    """
    if isinstance(value, bool) or value is None:
        return 1
    if isinstance(value, int):
        return max(1, value)
    try:
        number = Decimal(str(value).strip())
    except InvalidOperation:
        return 1
    if not number.is_finite() or number != number.to_integral_value():
        return 1
    return max(1, int(number))


def normalize_page_params(page, limit) -> tuple[int, int]:
    """Return page and limit coerced to positive integers."""
    return coerce_positive_int(page), coerce_positive_int(limit)


def paginate(
    balances: Sequence[AggregatedBalance],
    page,
    limit,
) -> tuple[tuple[AggregatedBalance, ...], PageInfo]:
    """Slice one page out of sorted balances.

    Args:
        balances: Sorted balances.
        page: 1-based page number.
        limit: Page size.

    Returns:
        tuple: Page items and pagination metadata.
    """
    page, limit = normalize_page_params(page, limit)
    total = len(balances)
    start = (page - 1) * limit
    items = tuple(balances[start:start + limit])
    info = PageInfo(
        total=total,
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
        has_more=page * limit < total,
    )
    return items, info


__all__ = [
    "sort_balances",
    "coerce_positive_int",
    "normalize_page_params",
    "paginate",
]
