"""SQLAlchemy repository reading wallets and their balances."""

from sqlalchemy import bindparam, text

from src.application.ports.balances_repository import BalancesRepositoryPort
from src.application.ports.database import DatabaseEnginePort
from src.domain.models.balances import (
    BalanceType,
    RawBalanceRecord,
    TokenMetadata,
)
from src.infrastructure.price_source import parse_market_decimal


SELECT_ACTIVE_WALLETS_SQL = text(
    """
    SELECT id
    FROM wallets
    WHERE user_id = :user_id AND status = 'active'
    ORDER BY created_at, id
    """
)

SELECT_BALANCES_SQL = """
SELECT b.wallet_id AS wallet_id,
       b.token_id AS token_id,
       b.type AS balance_type,
       b.balance AS balance,
       t.symbol AS symbol,
       t.base_symbol AS base_symbol,
       t.name AS name,
       t.decimals AS decimals,
       t.blockchain AS blockchain,
       t.network_version AS network_version,
       t.current_price AS current_price,
       t.change_percent_24h AS change_percent_24h
FROM wallet_balances b
JOIN tokens t ON t.id = b.token_id
WHERE b.wallet_id IN :wallet_ids
"""


class SqlAlchemyBalancesRepository(BalancesRepositoryPort):
    """Repository backed by the exchange database."""

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the exchange engine.
        """
        self._db_port = db_port

    def fetch_active_wallet_ids(self, user_id: str) -> list[str]:
        engine = self._db_port.get_exchange_engine()
        with engine.connect() as conn:
            rows = conn.execute(
                SELECT_ACTIVE_WALLETS_SQL,
                {"user_id": user_id},
            ).all()
        return [str(row.id) for row in rows]

    def fetch_balance_records(
        self,
        wallet_ids: list[str],
        balance_type: BalanceType | None = None,
    ) -> list[RawBalanceRecord]:
        if not wallet_ids:
            return []
        query, params = self._build_balances_query(wallet_ids, balance_type)
        engine = self._db_port.get_exchange_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
        return [self._to_record(row) for row in rows]

    @staticmethod
    def _build_balances_query(
        wallet_ids: list[str],
        balance_type: BalanceType | None,
    ):
        sql = SELECT_BALANCES_SQL
        params: dict[str, object] = {"wallet_ids": list(wallet_ids)}
        if balance_type is not None:
            sql += " AND b.type = :balance_type"
            params["balance_type"] = balance_type.value
        sql += " ORDER BY b.wallet_id, t.symbol, b.token_id"
        query = text(sql).bindparams(
            bindparam("wallet_ids", expanding=True)
        )
        return query, params

    @staticmethod
    def _to_record(row) -> RawBalanceRecord:
        context = f"wallet={row.wallet_id} token={row.token_id}"
        balance_type = BalanceType.parse(row.balance_type, context=context)
        token = TokenMetadata(
            symbol=row.symbol,
            base_symbol=row.base_symbol or row.symbol,
            name=row.name or row.symbol,
            decimals=int(row.decimals or 0),
            blockchain=row.blockchain or "",
            network_version=row.network_version or "",
            current_price=parse_market_decimal(
                row.current_price,
                "current_price",
                context,
            ),
            change_percent_24h=parse_market_decimal(
                row.change_percent_24h,
                "change_percent_24h",
                context,
            ),
        )
        return RawBalanceRecord(
            wallet_id=str(row.wallet_id),
            token_id=str(row.token_id),
            balance_type=balance_type,
            amount="0" if row.balance is None else str(row.balance),
            token=token,
        )


__all__ = ["SqlAlchemyBalancesRepository"]
