"""Aggregation of valued line items into logical asset balances."""

from collections.abc import Iterable, Mapping
from dataclasses import replace
from functools import reduce
from logging import Logger
from types import MappingProxyType

from src.domain.models.balances import (
    AggregatedBalance,
    LogicalAssetKey,
    ValuedLineItem,
)
from src.domain.services.decimal_arithmetic import add
from src.domain.services.validation import validate_display_metadata


def merge_line_item(
    existing: AggregatedBalance | None,
    item: ValuedLineItem,
    logger: Logger | None = None,
) -> AggregatedBalance:
    """Merge one line item into the aggregate of its logical asset.

    Args:
        existing: Current aggregate for the item's key, if any.
        item: Valued line item to merge.
        logger: Logger used for data-quality warnings.

    Returns:
        AggregatedBalance: New aggregate including the item.
    """
    if existing is None:
        return AggregatedBalance(
            symbol=item.token.symbol,
            base_symbol=item.asset_key.base_symbol,
            name=item.token.name,
            decimals=item.token.decimals,
            balance_type=item.asset_key.balance_type,
            total_amount=item.contribution.amount,
            total_usd_value=item.usd_value,
            network_contributions=(item.contribution,),
        )
    validate_display_metadata(existing, item.token, logger)
    return replace(
        existing,
        total_amount=add(existing.total_amount, item.contribution.amount),
        total_usd_value=add(existing.total_usd_value, item.usd_value),
        network_contributions=existing.network_contributions
        + (item.contribution,),
    )


def aggregate_line_items(
    items: Iterable[ValuedLineItem],
    logger: Logger | None = None,
) -> Mapping[LogicalAssetKey, AggregatedBalance]:
    """Fold line items into one aggregate per logical asset.

    Keys keep first-seen order. Contributions are appended, never
    deduplicated: two wallets holding the same token on the same network
    stay visible as two contributions.

    Args:
        items: Valued line items in any order.
        logger: Logger used for data-quality warnings.

    Returns:
        Mapping[LogicalAssetKey, AggregatedBalance]: Read-only mapping of
        aggregates.
    """

    def _step(
        acc: dict[LogicalAssetKey, AggregatedBalance],
        item: ValuedLineItem,
    ) -> dict[LogicalAssetKey, AggregatedBalance]:
        key = item.asset_key
        acc[key] = merge_line_item(acc.get(key), item, logger)
        return acc

    # The accumulator is private to this call and only escapes read-only.
    return MappingProxyType(reduce(_step, items, {}))


__all__ = ["merge_line_item", "aggregate_line_items"]
