"""Concurrent price lookups for the tokens of a portfolio."""

from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from logging import Logger

from src.application.ports.price_source import PriceSourcePort
from src.domain.errors import DataIntegrityError
from src.domain.models.balances import TokenPrice
from src.domain.services.normalization import normalize_symbol


def resolve_prices(
    price_source: PriceSourcePort,
    symbols: Iterable[str],
    *,
    max_workers: int,
    logger: Logger,
) -> dict[str, TokenPrice | None]:
    """Look up prices for distinct symbols concurrently.

    A lookup that fails is treated as an unknown price and logged; the
    other lookups still complete. Malformed price data is not a lookup
    failure and aborts the resolution.

    Args:
        price_source: Port resolving a symbol's price.
        symbols: Token symbols, duplicates allowed.
        max_workers: Upper bound on concurrent lookups.
        logger: Logger used for warnings.

    Returns:
        dict[str, TokenPrice | None]: Price per normalized symbol.

    Raises:
        DataIntegrityError: If the price source returns a malformed price.
    """
    unique = sorted(
        {
            normalized
            for normalized in (normalize_symbol(symbol) for symbol in symbols)
            if normalized
        }
    )
    prices: dict[str, TokenPrice | None] = {}
    if not unique:
        return prices

    workers = max(1, min(max_workers, len(unique)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(price_source.price_of, symbol): symbol
            for symbol in unique
        }
        for future in as_completed(futures):
            symbol = futures[future]
            try:
                prices[symbol] = future.result()
            except DataIntegrityError:
                raise
            except Exception as exc:
                logger.warning(f"Failed to get price for {symbol}: {exc}")
                prices[symbol] = None

    missing = [symbol for symbol in unique if prices.get(symbol) is None]
    if missing:
        logger.warning(f"Price source has no price for {', '.join(missing)}")
    return prices


__all__ = ["resolve_prices"]
