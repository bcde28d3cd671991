"""Database ports for the portfolio engine.

This module defines the application-layer protocol for accessing the
exchange database engine. Infrastructure implementations are expected to
provide concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the exchange database engine.

    Repositories depend on this protocol instead of concrete database
    drivers or configuration details.
    """

    def get_exchange_engine(self) -> Engine:
        """Get the engine for the exchange database.

        Returns:
            Engine: SQLAlchemy engine connected to the exchange backend.
        """


__all__ = ["DatabaseEnginePort"]
