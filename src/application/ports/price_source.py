"""Ports for market prices and currency rates."""

from decimal import Decimal
from typing import Protocol

from src.domain.models.balances import TokenPrice


class PriceSourcePort(Protocol):
    """Port resolving the current price of a token symbol."""

    def price_of(self, symbol: str) -> TokenPrice | None:
        """Return the token price, or None when it is unknown."""


class ExchangeRatePort(Protocol):
    """Port resolving reference-currency conversion rates."""

    def rate_for_currency(self, currency: str) -> Decimal:
        """Return how many units of ``currency`` one USD buys."""


__all__ = ["PriceSourcePort", "ExchangeRatePort"]
