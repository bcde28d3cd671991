"""Port for reading wallet balance snapshots."""

from typing import Protocol

from src.domain.models.balances import BalanceType, RawBalanceRecord


class BalancesRepositoryPort(Protocol):
    """Port exposing read access to wallets and their balances."""

    def fetch_active_wallet_ids(self, user_id: str) -> list[str]:
        """Return the ids of the user's active wallets."""

    def fetch_balance_records(
        self,
        wallet_ids: list[str],
        balance_type: BalanceType | None = None,
    ) -> list[RawBalanceRecord]:
        """Return balance rows of the wallets joined to their tokens."""


__all__ = ["BalancesRepositoryPort"]
