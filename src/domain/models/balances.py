"""Domain models for wallet balances and their aggregates."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from src.domain.errors import DataIntegrityError

_HUNDRED = Decimal("100")


class BalanceType(str, Enum):
    """Independent sub-ledgers held by every wallet."""

    SPOT = "spot"
    FUNDING = "funding"

    @classmethod
    def parse(cls, value, context: str | None = None) -> "BalanceType":
        """Parse a balance type from its raw representation.

        Args:
            value: Raw balance type (enum member or case-insensitive string).
            context: Record identity reported on failure.

        Returns:
            BalanceType: Matching member.

        Raises:
            DataIntegrityError: If the value is not a known balance type.
        """
        if isinstance(value, cls):
            return value
        cleaned = str(value or "").strip().lower()
        for member in cls:
            if member.value == cleaned:
                return member
        raise DataIntegrityError(
            f"Unknown balance type: {value!r}",
            field="balance_type",
            value=value,
            context=context,
        )


@dataclass(frozen=True)
class TokenMetadata:
    """Token display metadata and market data joined to a balance row."""

    symbol: str
    base_symbol: str
    name: str
    decimals: int
    blockchain: str
    network_version: str
    current_price: Decimal | None = None
    change_percent_24h: Decimal | None = None


@dataclass(frozen=True)
class RawBalanceRecord:
    """One balance row per (wallet, token, balance type).

    ``amount`` stays the exact decimal string read from storage; it is only
    parsed when the record is valued.
    """

    wallet_id: str
    token_id: str
    balance_type: BalanceType
    amount: str
    token: TokenMetadata

    @property
    def identity(self) -> str:
        """Return a readable identity used in error messages."""
        return (
            f"wallet={self.wallet_id} token={self.token_id} "
            f"symbol={self.token.symbol} type={self.balance_type.value}"
        )


@dataclass(frozen=True)
class TokenPrice:
    """Current price of a token in the reference currency."""

    current_price: Decimal
    change_percent_24h: Decimal | None = None


class LogicalAssetKey(NamedTuple):
    """User-facing asset identity, independent of the backing network."""

    base_symbol: str
    balance_type: BalanceType


@dataclass(frozen=True)
class NetworkContribution:
    """Portion of a logical asset held on one blockchain network."""

    blockchain: str
    network_version: str
    amount: Decimal
    balance_type: BalanceType
    usd_value: Decimal
    wallet_id: str | None = None
    change_percent_24h: Decimal | None = None


@dataclass(frozen=True)
class ValuedLineItem:
    """A single raw balance normalized and valued."""

    asset_key: LogicalAssetKey
    token: TokenMetadata
    contribution: NetworkContribution
    usd_value: Decimal


@dataclass(frozen=True)
class AggregatedBalance:
    """All holdings of one logical asset merged across networks.

    Attributes:
        total_amount: Exact sum of the contribution amounts.
        total_usd_value: Exact sum of the contribution values.
        network_contributions: Contributions in encounter order.

    The 24h change is derived from the contributions, so it does not
    depend on the order in which they were merged.
    """

    symbol: str
    base_symbol: str
    name: str
    decimals: int
    balance_type: BalanceType
    total_amount: Decimal
    total_usd_value: Decimal
    network_contributions: tuple[NetworkContribution, ...]

    @property
    def asset_key(self) -> LogicalAssetKey:
        """Return the key this balance is merged under."""
        return LogicalAssetKey(self.base_symbol, self.balance_type)

    @property
    def change_24h(self) -> Decimal:
        """Return the USD change over contributions with a known change."""
        return sum(
            (
                contribution.usd_value
                * contribution.change_percent_24h
                / _HUNDRED
                for contribution in self._known_changes()
            ),
            Decimal("0"),
        )

    @property
    def change_percent_24h(self) -> Decimal | None:
        """Return the value-weighted 24h change percentage.

        Contributions without a known change are left out. When the known
        contributions carry no value, their common change is returned, or
        None if they disagree.
        """
        known = self._known_changes()
        if not known:
            return None
        weight = sum((c.usd_value for c in known), Decimal("0"))
        if weight > 0:
            return self.change_24h / weight * _HUNDRED
        changes = {c.change_percent_24h for c in known}
        return changes.pop() if len(changes) == 1 else None

    def _known_changes(self) -> list[NetworkContribution]:
        return [
            contribution
            for contribution in self.network_contributions
            if contribution.change_percent_24h is not None
        ]


__all__ = [
    "BalanceType",
    "TokenMetadata",
    "RawBalanceRecord",
    "TokenPrice",
    "LogicalAssetKey",
    "NetworkContribution",
    "ValuedLineItem",
    "AggregatedBalance",
]
