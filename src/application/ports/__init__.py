"""Application ports package."""

from .balances_repository import BalancesRepositoryPort
from .database import DatabaseEnginePort
from .price_source import ExchangeRatePort, PriceSourcePort

__all__ = [
    "BalancesRepositoryPort",
    "DatabaseEnginePort",
    "ExchangeRatePort",
    "PriceSourcePort",
]
