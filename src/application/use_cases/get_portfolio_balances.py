"""Use case to build the merged, valued balances view of a user."""

from src.application.ports.balances_repository import BalancesRepositoryPort
from src.application.ports.price_source import PriceSourcePort
from src.application.use_cases.price_resolution import resolve_prices
from src.domain.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from src.domain.errors import DataIntegrityError
from src.domain.models.balances import BalanceType
from src.domain.models.portfolio import PortfolioSnapshot
from src.domain.services.portfolio import (
    build_portfolio_snapshot,
    resolve_record_price,
)
from src.domain.services.ranking import normalize_page_params
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


def parse_balance_type_filter(value) -> BalanceType | None:
    """Return the balance type filter of a request.

    Anything other than spot or funding (including "all") means no filter.

    Args:
        value: Raw request value.

    Returns:
        BalanceType | None: Filter, or None for all balance types.
    """
    if value is None or isinstance(value, BalanceType):
        return value
    try:
        return BalanceType.parse(value)
    except DataIntegrityError:
        return None


class GetPortfolioBalancesUseCase:
    """Compute the portfolio snapshot of a user's active wallets."""

    def __init__(
        self,
        balances_repository: BalancesRepositoryPort,
        price_source: PriceSourcePort,
        logger=None,
        usage_logger=None,
        max_price_workers: int = 8,
        max_limit: int | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            balances_repository: Port providing wallets and balance rows.
            price_source: Port providing token prices.
            logger: Optional logger compatible with logging.Logger-like API.
            usage_logger: Optional logger recording requests.
            max_price_workers: Upper bound on concurrent price lookups.
            max_limit: Optional cap applied to the requested page size.
        """
        self._balances_repository = balances_repository
        self._price_source = price_source
        self._logger = logger or get_app_logger()
        self._usage_logger = usage_logger or get_usage_logger()
        self._max_price_workers = max_price_workers
        self._max_limit = max_limit

    def execute(
        self,
        user_id: str,
        balance_type=None,
        page=DEFAULT_PAGE,
        limit=DEFAULT_PAGE_LIMIT,
        show_zero_balances: bool = True,
    ) -> PortfolioSnapshot:
        """Return the user's portfolio snapshot.

        Args:
            user_id: Owner of the wallets.
            balance_type: Optional spot/funding filter; other values mean all.
            page: Requested page number.
            limit: Requested page size.
            show_zero_balances: Keep balances whose value is exactly zero.

        Returns:
            PortfolioSnapshot: Merged, valued and paginated balances.

        Raises:
            DataIntegrityError: If a balance row or a price carries malformed
                data.
        """
        type_filter = parse_balance_type_filter(balance_type)
        page, limit = normalize_page_params(page, limit)
        if self._max_limit is not None:
            limit = min(limit, self._max_limit)
        self._usage_logger.info(
            f"Balances requested: user={user_id}, "
            f"type={type_filter.value if type_filter else 'all'}, "
            f"page={page}, limit={limit}, show_zero={show_zero_balances}"
        )

        wallet_ids = self._balances_repository.fetch_active_wallet_ids(user_id)
        self._logger.info(
            f"Found {len(wallet_ids)} active wallets for user {user_id}"
        )
        try:
            snapshot = self._build_snapshot(
                wallet_ids,
                type_filter,
                page=page,
                limit=limit,
                show_zero_balances=show_zero_balances,
            )
        except DataIntegrityError as exc:
            self._logger.error(
                f"Failed to get balances for user {user_id}: {exc}"
            )
            raise

        self._logger.info(
            f"Built portfolio for user {user_id}: "
            f"{snapshot.pagination.total} balances, "
            f"total={snapshot.totals.total}"
        )
        return snapshot

    def _build_snapshot(
        self,
        wallet_ids: list[str],
        type_filter: BalanceType | None,
        *,
        page: int,
        limit: int,
        show_zero_balances: bool,
    ) -> PortfolioSnapshot:
        records = []
        if wallet_ids:
            records = self._balances_repository.fetch_balance_records(
                wallet_ids,
                type_filter,
            )

        prices = resolve_prices(
            self._price_source,
            (record.token.symbol for record in records),
            max_workers=self._max_price_workers,
            logger=self._logger,
        )
        unpriced = sorted(
            {
                record.token.symbol
                for record in records
                if resolve_record_price(record, prices) is None
            }
        )
        if unpriced:
            self._logger.warning(
                f"Valuing {', '.join(unpriced)} at 0: price unknown"
            )

        return build_portfolio_snapshot(
            records,
            prices,
            page=page,
            limit=limit,
            show_zero_balances=show_zero_balances,
            balance_type=type_filter,
            logger=self._logger,
        )


__all__ = ["GetPortfolioBalancesUseCase", "parse_balance_type_filter"]
