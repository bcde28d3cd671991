"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Optional

from src.domain.constants import DEFAULT_PAGE_LIMIT
from src.domain.errors import ConfigurationError
from src.infrastructure.logging.logger import get_app_logger

PRICE_SOURCES = ("tokens", "static")


@dataclass(frozen=True)
class PortfolioSettings:
    """Settings for the portfolio engine.

    Attributes:
        default_limit: Page size used when a request gives none.
        max_limit: Upper bound applied to requested page sizes.
        price_workers: Maximum concurrent price lookups.
        price_source: Price source identifier (tokens or static).
        prices_file: JSON file of static prices, for the static source.
    """

    default_limit: int = DEFAULT_PAGE_LIMIT
    max_limit: int = 100
    price_workers: int = 8
    price_source: str = "tokens"
    prices_file: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "PortfolioSettings":
        """Build settings from environment variables.

        Returns:
            PortfolioSettings: Settings sourced from environment variables.

        Raises:
            ConfigurationError: If the static price source has no file.
        """
        logger = get_app_logger()
        price_source = (
            os.getenv("PORTFOLIO_PRICE_SOURCE", "tokens").strip().lower()
        )
        if price_source not in PRICE_SOURCES:
            logger.warning(
                f"Unknown PORTFOLIO_PRICE_SOURCE '{price_source}', "
                "falling back to tokens."
            )
            price_source = "tokens"
        raw_file = os.getenv("PORTFOLIO_PRICES_FILE")
        prices_file = None
        if raw_file:
            prices_file = Path(raw_file).expanduser().resolve()
            if not prices_file.exists():
                logger.warning(f"Prices file does not exist at {prices_file}")
        if price_source == "static" and prices_file is None:
            raise ConfigurationError(
                "Static price source requires a PORTFOLIO_PRICES_FILE value."
            )
        return cls(
            default_limit=cls._read_positive_int(
                "PORTFOLIO_DEFAULT_LIMIT",
                DEFAULT_PAGE_LIMIT,
                logger,
            ),
            max_limit=cls._read_positive_int("PORTFOLIO_MAX_LIMIT", 100, logger),
            price_workers=cls._read_positive_int(
                "PORTFOLIO_PRICE_WORKERS",
                8,
                logger,
            ),
            price_source=price_source,
            prices_file=prices_file,
        )

    @staticmethod
    def _read_positive_int(name: str, default: int, logger) -> int:
        """Read a positive integer environment variable.

        Args:
            name: Environment variable name.
            default: Value used when missing or invalid.
            logger: Logger used for warnings.

        Returns:
            int: Parsed value or the default.
        """
        raw = os.getenv(name)
        if raw is None or not raw.strip():
            return default
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Invalid {name} '{raw}', using {default}.")
            return default
        if value < 1:
            logger.warning(f"Invalid {name} '{raw}', using {default}.")
            return default
        return value


__all__ = ["PortfolioSettings", "PRICE_SOURCES"]
