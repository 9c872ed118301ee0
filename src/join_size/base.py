"""
Core infrastructure shared by the accessors, the estimator and the CLI.

This module provides:
- Connection factory configured from DATABASE_URL
- Package-wide constants
- The exception hierarchy for fatal estimation failures
"""

import os

import psycopg2
from psycopg2.extensions import connection as PgConnection

# === CONFIGURATION ===
DEFAULT_DSN = "postgresql://postgres@localhost:5432/postgres"
DEFAULT_SCHEMA = "public"
UNKNOWN_SIZE = -1  # Sentinel estimate when no case matched


class JoinSizeError(Exception):
    """Base class for fatal join size estimation errors."""

    pass


class UnknownTable(JoinSizeError):
    """Raised when one or both table names are absent from the catalog."""

    def __init__(self, tables: tuple[str, ...]):
        self.tables = tables
        names = ", ".join(f'"{t}"' for t in tables)
        super().__init__(f"Table(s) not found in this database: {names}")


class CatalogUnavailable(JoinSizeError):
    """Raised when schema metadata cannot be read."""

    pass


class StatisticsUnavailable(JoinSizeError):
    """Raised when a count or distinct-count query fails."""

    pass


def get_connection(dsn: str | None = None) -> PgConnection:
    """
    Get a PostgreSQL connection.

    The DSN is taken from the argument, then the DATABASE_URL environment
    variable, then DEFAULT_DSN.

    Args:
        dsn: libpq connection string or URL

    Returns:
        PostgreSQL connection

    Raises:
        CatalogUnavailable: If the server cannot be reached
    """
    dsn = dsn or os.getenv("DATABASE_URL", DEFAULT_DSN)
    try:
        return psycopg2.connect(dsn)
    except psycopg2.Error as e:
        raise CatalogUnavailable(f"Could not connect to database: {e}") from e
