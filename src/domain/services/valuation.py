"""Valuation of raw balance records."""

from src.domain.errors import DataIntegrityError
from src.domain.models.balances import (
    LogicalAssetKey,
    NetworkContribution,
    RawBalanceRecord,
    TokenPrice,
    ValuedLineItem,
)
from src.domain.services.decimal_arithmetic import ZERO, multiply, parse_decimal
from src.domain.services.normalization import normalize_symbol


def build_asset_key(record: RawBalanceRecord) -> LogicalAssetKey:
    """Return the logical asset key of a raw balance record.

    Args:
        record: Raw balance record.

    Returns:
        LogicalAssetKey: Normalized base symbol and balance type.

    Raises:
        DataIntegrityError: If the token has neither base symbol nor symbol.
    """
    base_symbol = normalize_symbol(record.token.base_symbol) or normalize_symbol(
        record.token.symbol
    )
    if base_symbol is None:
        raise DataIntegrityError(
            "Token has no symbol",
            field="base_symbol",
            value=record.token.base_symbol,
            context=record.identity,
        )
    return LogicalAssetKey(base_symbol, record.balance_type)


def value_balance_record(
    record: RawBalanceRecord,
    price: TokenPrice | None,
) -> ValuedLineItem:
    """Convert a raw balance record into a valued line item.

    A missing or zero price values the holding at zero.

    Args:
        record: Raw balance record.
        price: Current token price, or None when unknown.

    Returns:
        ValuedLineItem: Canonical line item with its USD value.

    Raises:
        DataIntegrityError: If the amount is malformed or negative.
    """
    amount = parse_decimal(
        record.amount,
        field="amount",
        context=record.identity,
        allow_none=True,
    )
    if amount < ZERO:
        raise DataIntegrityError(
            f"Negative balance amount: {record.amount}",
            field="amount",
            value=record.amount,
            context=record.identity,
        )
    current_price = price.current_price if price is not None else ZERO
    usd_value = multiply(amount, current_price) if current_price else ZERO
    contribution = NetworkContribution(
        blockchain=record.token.blockchain,
        network_version=record.token.network_version,
        amount=amount,
        balance_type=record.balance_type,
        usd_value=usd_value,
        wallet_id=record.wallet_id,
        change_percent_24h=(
            price.change_percent_24h if price is not None else None
        ),
    )
    return ValuedLineItem(
        asset_key=build_asset_key(record),
        token=record.token,
        contribution=contribution,
        usd_value=usd_value,
    )


__all__ = ["build_asset_key", "value_balance_record"]
