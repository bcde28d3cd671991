"""Serialization of portfolio snapshots at the output boundary."""

from typing import Any

from src.domain.models.balances import AggregatedBalance, NetworkContribution
from src.domain.models.portfolio import PageInfo, PortfolioSnapshot
from src.domain.services.decimal_arithmetic import to_decimal_string


def _serialize_contribution(contribution: NetworkContribution) -> dict[str, Any]:
    return {
        "blockchain": contribution.blockchain,
        "networkVersion": contribution.network_version,
        "balance": to_decimal_string(contribution.amount),
        "type": contribution.balance_type.value,
        "usdValue": to_decimal_string(contribution.usd_value),
    }


def serialize_balance(balance: AggregatedBalance) -> dict[str, Any]:
    """Serialize one aggregated balance with decimal strings."""
    change = balance.change_percent_24h
    return {
        "symbol": balance.symbol,
        "baseSymbol": balance.base_symbol,
        "name": balance.name,
        "decimals": balance.decimals,
        "type": balance.balance_type.value,
        "balance": to_decimal_string(balance.total_amount),
        "usdValue": to_decimal_string(balance.total_usd_value),
        "changePercent24h": (
            to_decimal_string(change) if change is not None else None
        ),
        "networks": [
            _serialize_contribution(contribution)
            for contribution in balance.network_contributions
        ],
    }


def serialize_page_info(info: PageInfo) -> dict[str, Any]:
    """Serialize pagination metadata."""
    return {
        "total": info.total,
        "page": info.page,
        "limit": info.limit,
        "totalPages": info.total_pages,
        "hasMore": info.has_more,
    }


def serialize_portfolio_snapshot(snapshot: PortfolioSnapshot) -> dict[str, Any]:
    """Serialize a snapshot into the balances response payload.

    Monetary fields are emitted as decimal strings; only the visible page
    of balances is included.

    Args:
        snapshot: Snapshot to serialize.

    Returns:
        dict[str, Any]: JSON-compatible payload.
    """
    totals = snapshot.totals
    return {
        "balances": [
            serialize_balance(balance) for balance in snapshot.page_balances
        ],
        "total": to_decimal_string(totals.total),
        "spotTotal": to_decimal_string(totals.spot_total),
        "fundingTotal": to_decimal_string(totals.funding_total),
        "change24h": to_decimal_string(totals.change_24h),
        "changePercent24h": to_decimal_string(totals.change_percent_24h),
        "pagination": serialize_page_info(snapshot.pagination),
    }


__all__ = [
    "serialize_balance",
    "serialize_page_info",
    "serialize_portfolio_snapshot",
]
