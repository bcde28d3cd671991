"""Database infrastructure for the portfolio engine.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the exchange database holding wallets, tokens and
wallet balances. It belongs to the infrastructure layer because it deals
with external systems (PostgreSQL).
"""

import os
from typing import Optional

import dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort


def _get_env_var(name: str) -> str:
    """Read an environment variable or raise a descriptive error.

    The ``.env`` file is loaded first so local runs pick up its values.

    Args:
        name: Name of the environment variable to read.

    Returns:
        str: The raw value of the environment variable.

    Raises:
        RuntimeError: If the environment variable is missing or empty.
    """
    dotenv.load_dotenv()
    value = os.getenv(name)
    if not value:
        raise RuntimeError(f"Missing environment variable: {name}")
    return value


def _create_engine(db_url: str) -> Engine:
    """Create a configured SQLAlchemy engine for the exchange database.

    Args:
        db_url: Fully qualified database URL (including driver and credentials)

    Returns:
        Engine: A SQLAlchemy engine instance with a small connection pool and
        health checks enabled.
    """
    return create_engine(
        db_url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=5,
        pool_pre_ping=True,
        future=True,
    )


_exchange_engine: Optional[Engine] = None


def get_exchange_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the exchange database.

    Returns:
        Engine: Lazily initialized engine connected to the exchange backend.
    """
    global _exchange_engine
    if _exchange_engine is None:
        db_url = _get_env_var("EXCHANGE_DB_URL")
        _exchange_engine = _create_engine(db_url)
    return _exchange_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine."""

    def get_exchange_engine(self) -> Engine:
        """Get the engine for the exchange database.

        Returns:
            Engine: SQLAlchemy engine connected to the exchange database.
        """
        return get_exchange_engine()


__all__ = [
    "get_exchange_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
