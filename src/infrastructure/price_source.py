"""Price and exchange rate adapters."""

from collections.abc import Mapping
from decimal import Decimal

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.price_source import (
    ExchangeRatePort,
    PriceSourcePort,
)
from src.domain.constants import REFERENCE_CURRENCY
from src.domain.errors import DataIntegrityError
from src.domain.models.balances import TokenPrice
from src.domain.services.decimal_arithmetic import parse_decimal
from src.domain.services.normalization import normalize_symbol
from src.utils.decimal_utils import coerce_decimal


SELECT_TOKEN_PRICE_SQL = text(
    """
    SELECT current_price, change_percent_24h
    FROM tokens
    WHERE UPPER(symbol) = :symbol AND current_price IS NOT NULL
    ORDER BY updated_at DESC
    LIMIT 1
    """
)

SELECT_EXCHANGE_RATE_SQL = text(
    """
    SELECT rate
    FROM exchange_rates
    WHERE currency = :currency
    ORDER BY updated_at DESC
    LIMIT 1
    """
)


def parse_market_decimal(value, field: str, context: str) -> Decimal | None:
    """Parse an optional market data column.

    NULL stays unknown. Text columns are parsed strictly; numeric columns
    are trusted but must still be finite.

    Args:
        value: Raw column value.
        field: Column name used in error messages.
        context: Identity of the row used in error messages.

    Returns:
        Decimal | None: Parsed value, or None when the column is NULL.

    Raises:
        DataIntegrityError: If the value is malformed or not finite.
    """
    if isinstance(value, str):
        return parse_decimal(value, field=field, context=context)
    parsed = coerce_decimal(value, default=None)
    if parsed is not None and not parsed.is_finite():
        raise DataIntegrityError(
            f"Non-finite {field}: {value}",
            field=field,
            value=value,
            context=context,
        )
    return parsed


class TokenTablePriceSource(PriceSourcePort):
    """Price source reading the market data stored on token rows."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def price_of(self, symbol: str) -> TokenPrice | None:
        normalized = normalize_symbol(symbol)
        if normalized is None:
            return None
        engine = self._db_port.get_exchange_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_TOKEN_PRICE_SQL,
                {"symbol": normalized},
            ).first()
        if row is None:
            return None
        context = f"symbol={normalized}"
        return TokenPrice(
            current_price=parse_market_decimal(
                row.current_price,
                "current_price",
                context,
            ),
            change_percent_24h=parse_market_decimal(
                row.change_percent_24h,
                "change_percent_24h",
                context,
            ),
        )


class StaticPriceSource(PriceSourcePort):
    """In-memory price source keyed by symbol.

    Values may be ``TokenPrice`` instances or ``(price, change)`` pairs of
    decimal strings.
    """

    def __init__(self, prices: Mapping[str, object]) -> None:
        self._prices: dict[str, TokenPrice] = {}
        for symbol, value in prices.items():
            normalized = normalize_symbol(symbol)
            if normalized is None:
                continue
            self._prices[normalized] = self._to_price(normalized, value)

    def price_of(self, symbol: str) -> TokenPrice | None:
        return self._prices.get(normalize_symbol(symbol) or "")

    @staticmethod
    def _to_price(symbol: str, value) -> TokenPrice:
        if isinstance(value, TokenPrice):
            return value
        price, change = value
        return TokenPrice(
            current_price=parse_decimal(
                price,
                field="current_price",
                context=f"symbol={symbol}",
            ),
            change_percent_24h=(
                None
                if change is None
                else parse_decimal(
                    change,
                    field="change_percent_24h",
                    context=f"symbol={symbol}",
                )
            ),
        )


class SqlAlchemyExchangeRateRepository(ExchangeRatePort):
    """Exchange rates stored as units of currency per USD."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        self._db_port = db_port

    def rate_for_currency(self, currency: str) -> Decimal:
        code = currency.strip().upper()
        if code == REFERENCE_CURRENCY:
            return Decimal("1")
        engine = self._db_port.get_exchange_engine()
        with engine.connect() as conn:
            row = conn.execute(
                SELECT_EXCHANGE_RATE_SQL,
                {"currency": code},
            ).first()
        rate = None
        if row is not None:
            rate = parse_market_decimal(row.rate, "rate", f"currency={code}")
        if rate is None:
            raise RuntimeError(f"Missing exchange rate for currency: {code}")
        return rate


__all__ = [
    "parse_market_decimal",
    "TokenTablePriceSource",
    "StaticPriceSource",
    "SqlAlchemyExchangeRateRepository",
]
