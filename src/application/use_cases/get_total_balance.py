"""Use case to compute a user's total balance in a target currency."""

from decimal import Decimal

from src.application.ports.price_source import ExchangeRatePort
from src.application.use_cases.get_portfolio_balances import (
    GetPortfolioBalancesUseCase,
)
from src.domain.constants import REFERENCE_CURRENCY
from src.domain.services.decimal_arithmetic import multiply
from src.infrastructure.logging.logger import get_app_logger


class GetTotalBalanceUseCase:
    """Convert the portfolio total into a target currency."""

    def __init__(
        self,
        portfolio_use_case: GetPortfolioBalancesUseCase,
        exchange_rates: ExchangeRatePort,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            portfolio_use_case: Use case computing the portfolio snapshot.
            exchange_rates: Port providing USD conversion rates.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._portfolio_use_case = portfolio_use_case
        self._exchange_rates = exchange_rates
        self._logger = logger or get_app_logger()

    def execute(
        self,
        user_id: str,
        currency: str = REFERENCE_CURRENCY,
        balance_type=None,
    ) -> Decimal:
        """Return the total balance of a user in ``currency``.

        Args:
            user_id: Owner of the wallets.
            currency: Target currency code.
            balance_type: Optional spot/funding filter.

        Returns:
            Decimal: Spot plus funding total converted to ``currency``.
        """
        snapshot = self._portfolio_use_case.execute(
            user_id,
            balance_type=balance_type,
        )
        total = snapshot.totals.total
        code = currency.strip().upper()
        if code == REFERENCE_CURRENCY:
            return total
        try:
            rate = self._exchange_rates.rate_for_currency(code)
        except RuntimeError as exc:
            self._logger.error(
                f"Failed to calculate total balance in {code}: {exc}"
            )
            raise
        converted = multiply(total, rate)
        self._logger.info(
            f"Total balance for user {user_id}: {converted} {code}"
        )
        return converted


__all__ = ["GetTotalBalanceUseCase"]
