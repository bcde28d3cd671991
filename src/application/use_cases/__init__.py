"""Application use cases package."""

from .get_portfolio_balances import (
    GetPortfolioBalancesUseCase,
    PortfolioSnapshot,
)
from .get_total_balance import GetTotalBalanceUseCase
from .price_resolution import resolve_prices

__all__ = [
    "GetPortfolioBalancesUseCase",
    "PortfolioSnapshot",
    "GetTotalBalanceUseCase",
    "resolve_prices",
]
