"""CLI adapter printing a user's portfolio balances as JSON."""

import json
import os

from src.domain.errors import DataIntegrityError
from src.domain.services.serialization import serialize_portfolio_snapshot
from src.infrastructure.container import build_portfolio_use_case
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import PortfolioSettings

_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_flag(value: str | None, default: bool) -> bool:
    """Parse a boolean environment flag.

    Args:
        value: Raw flag value.
        default: Value used when the flag is unset.

    Returns:
        bool: Parsed flag.
    """
    if value is None or not value.strip():
        return default
    return value.strip().lower() not in _FALSE_VALUES


def main() -> None:
    """Print the portfolio snapshot of PORTFOLIO_USER_ID."""
    logger = get_app_logger()
    user_id = os.getenv("PORTFOLIO_USER_ID")
    if not user_id:
        logger.warning("PORTFOLIO_USER_ID is required to list balances.")
        return

    settings = PortfolioSettings.from_env()
    use_case = build_portfolio_use_case(settings=settings)
    try:
        snapshot = use_case.execute(
            user_id,
            balance_type=os.getenv("PORTFOLIO_BALANCE_TYPE"),
            page=os.getenv("PORTFOLIO_PAGE", "1"),
            limit=os.getenv("PORTFOLIO_LIMIT", str(settings.default_limit)),
            show_zero_balances=_parse_flag(
                os.getenv("PORTFOLIO_SHOW_ZERO"),
                default=True,
            ),
        )
    except DataIntegrityError as exc:
        logger.error(f"Balances unavailable: {exc}")
        return

    print(json.dumps(serialize_portfolio_snapshot(snapshot), indent=2))


if __name__ == "__main__":  # pragma: no cover
    main()
