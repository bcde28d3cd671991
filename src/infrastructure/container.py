"""Composition root for wiring infrastructure adapters."""

import json
from pathlib import Path

from src.application.ports.balances_repository import BalancesRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.application.ports.price_source import (
    ExchangeRatePort,
    PriceSourcePort,
)
from src.application.use_cases.get_portfolio_balances import (
    GetPortfolioBalancesUseCase,
)
from src.application.use_cases.get_total_balance import GetTotalBalanceUseCase
from src.domain.errors import ConfigurationError
from src.infrastructure.balances_repository import SqlAlchemyBalancesRepository
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.price_source import (
    SqlAlchemyExchangeRateRepository,
    StaticPriceSource,
    TokenTablePriceSource,
)
from src.infrastructure.settings import PortfolioSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_balances_repository(
    db_port: DatabaseEnginePort | None = None,
) -> BalancesRepositoryPort:
    """Return the wallet balances repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyBalancesRepository(resolved_db)


def load_static_prices(path: Path) -> StaticPriceSource:
    """Load a static price source from a JSON file.

    The file maps symbols to ``[price, change_percent_24h]`` pairs of
    decimal strings.
    """
    with open(path, encoding="utf-8") as handle:
        raw = json.load(handle)
    return StaticPriceSource(
        {symbol: tuple(values) for symbol, values in raw.items()}
    )


def build_price_source(
    db_port: DatabaseEnginePort | None = None,
    settings: PortfolioSettings | None = None,
) -> PriceSourcePort:
    """Return the configured price source.

    Raises:
        ConfigurationError: If the static source has no prices file.
    """
    resolved_settings = settings or PortfolioSettings.from_env()
    if resolved_settings.price_source == "static":
        if resolved_settings.prices_file is None:
            raise ConfigurationError(
                "Static price source requires a PORTFOLIO_PRICES_FILE value."
            )
        return load_static_prices(resolved_settings.prices_file)
    resolved_db = db_port or build_database_adapter()
    return TokenTablePriceSource(resolved_db)


def build_exchange_rates(
    db_port: DatabaseEnginePort | None = None,
) -> ExchangeRatePort:
    """Return the exchange rate repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyExchangeRateRepository(resolved_db)


def build_portfolio_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: PortfolioSettings | None = None,
) -> GetPortfolioBalancesUseCase:
    """Return the portfolio balances use case wired to infrastructure."""
    resolved_db = db_port or build_database_adapter()
    resolved_settings = settings or PortfolioSettings.from_env()
    return GetPortfolioBalancesUseCase(
        balances_repository=build_balances_repository(resolved_db),
        price_source=build_price_source(resolved_db, resolved_settings),
        logger=get_app_logger(),
        max_price_workers=resolved_settings.price_workers,
        max_limit=resolved_settings.max_limit,
    )


def build_total_balance_use_case(
    db_port: DatabaseEnginePort | None = None,
    settings: PortfolioSettings | None = None,
) -> GetTotalBalanceUseCase:
    """Return the total balance use case wired to infrastructure."""
    resolved_db = db_port or build_database_adapter()
    return GetTotalBalanceUseCase(
        portfolio_use_case=build_portfolio_use_case(resolved_db, settings),
        exchange_rates=build_exchange_rates(resolved_db),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_balances_repository",
    "load_static_prices",
    "build_price_source",
    "build_exchange_rates",
    "build_portfolio_use_case",
    "build_total_balance_use_case",
]
