"""CLI adapter printing a user's total balance in a currency."""

import os

from src.domain.constants import REFERENCE_CURRENCY
from src.domain.errors import DataIntegrityError
from src.domain.services.decimal_arithmetic import to_decimal_string
from src.infrastructure.container import build_total_balance_use_case
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Print the total balance of PORTFOLIO_USER_ID."""
    logger = get_app_logger()
    user_id = os.getenv("PORTFOLIO_USER_ID")
    if not user_id:
        logger.warning("PORTFOLIO_USER_ID is required to compute a total.")
        return
    currency = os.getenv("PORTFOLIO_CURRENCY", REFERENCE_CURRENCY)

    use_case = build_total_balance_use_case()
    try:
        total = use_case.execute(
            user_id,
            currency=currency,
            balance_type=os.getenv("PORTFOLIO_BALANCE_TYPE"),
        )
    except (DataIntegrityError, RuntimeError) as exc:
        logger.error(str(exc))
        return

    print(
        f"Total balance for {user_id}: "
        f"{to_decimal_string(total)} {currency.strip().upper()}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
