"""
Exact table statistics for join size estimation.

Statistics are emulated with aggregate queries rather than read from
pg_stats, so repeated estimates on an unchanged database are identical.
Nothing is cached between calls.

Table and column names are passed as stored by the catalog and quoted as
identifiers, so mixed-case names work. Tables are qualified with the
schema given at construction and never resolved through search_path.
"""

from collections.abc import Iterable

import psycopg2
from psycopg2 import sql
from psycopg2.extensions import connection as PgConnection

from ..base import DEFAULT_SCHEMA, StatisticsUnavailable


class Statistics:
    """
    Row counts and distinct-value counts for tables of one schema.

    Usage:
        stats = Statistics(conn, schema="university")
        n = stats.row_count("takes")
        v = stats.distinct_projection_count("takes", "course_id")
    """

    def __init__(self, conn: PgConnection, schema: str = DEFAULT_SCHEMA):
        """
        Initialize statistics accessor.

        Args:
            conn: Database connection
            schema: Schema containing the tables (default "public")
        """
        self.conn = conn
        self.schema = schema

    def row_count(self, table: str) -> int:
        """Total number of tuples in table."""
        return self._count(
            sql.SQL("SELECT COUNT(*) FROM {}").format(self._table(table))
        )

    def distinct_projection_count(self, table: str, column: str) -> int:
        """
        Number of distinct non-NULL values of one column, V(A, R).

        Args:
            table: Table name as stored
            column: Column name as stored

        Returns:
            Distinct value count
        """
        return self._count(
            sql.SQL("SELECT COUNT(DISTINCT {}) FROM {}").format(
                sql.Identifier(column), self._table(table)
            )
        )

    def is_key_for(
        self,
        table: str,
        expected_row_count: int,
        attributes: Iterable[str],
    ) -> bool:
        """
        Check whether a set of attributes is a key of a table.

        The attributes form a key when projecting the table onto them yields
        as many distinct rows as the table has in total.

        Args:
            table: Table name as stored
            expected_row_count: Total row count of the table
            attributes: Candidate key attributes

        Returns:
            True if the projection is injective; False for an empty set
        """
        attributes = sorted(attributes)
        if not attributes:
            return False

        projected = self._count(
            sql.SQL(
                "SELECT COUNT(*) FROM (SELECT DISTINCT {} FROM {}) AS key_check"
            ).format(
                sql.SQL(", ").join(sql.Identifier(a) for a in attributes),
                self._table(table),
            )
        )
        return projected == expected_row_count

    def actual_join_size(self, table1: str, table2: str) -> int:
        """Execute the natural join and count its tuples."""
        return self._count(
            sql.SQL("SELECT COUNT(*) FROM {} NATURAL JOIN {}").format(
                self._table(table1), self._table(table2)
            )
        )

    def _table(self, table: str) -> sql.Identifier:
        return sql.Identifier(self.schema, table)

    def _count(self, query: sql.Composable) -> int:
        try:
            with self.conn.cursor() as cur:
                cur.execute(query)
                row = cur.fetchone()
        except psycopg2.Error as e:
            raise StatisticsUnavailable(f"Statistics query failed: {e}") from e
        return row[0] if row else 0
