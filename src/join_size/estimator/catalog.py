"""
Catalog access via information_schema and pg_catalog.

Answers structural questions about the database: which tables exist,
what their columns are, and which foreign keys connect two tables.
"""

import psycopg2
from psycopg2.extensions import connection as PgConnection

from ..base import DEFAULT_SCHEMA, CatalogUnavailable
from .models import ForeignKeyEdge


class Catalog:
    """
    Read-only view of the schema metadata of one PostgreSQL schema.

    Table names are looked up case-insensitively via resolve_table(), which
    returns the name as stored. All other methods expect stored names, and
    column names are returned as stored.

    Usage:
        catalog = Catalog(conn)
        table = catalog.resolve_table("STUDENT")  # "student" or "Student"
        if table is not None:
            cols = catalog.columns_of(table)
    """

    def __init__(self, conn: PgConnection, schema: str = DEFAULT_SCHEMA):
        """
        Initialize catalog accessor.

        Args:
            conn: Database connection
            schema: Schema whose tables are considered (default "public")
        """
        self.conn = conn
        self.schema = schema

    def stored_tables(self) -> dict[str, str]:
        """Map of lower-cased name to stored name for all base tables."""
        rows = self._fetch(
            """
            SELECT table_name
            FROM information_schema.tables
            WHERE table_schema = %s
                AND table_type = 'BASE TABLE'
            ORDER BY table_name
            """,
            (self.schema,),
        )
        return {row[0].lower(): row[0] for row in rows}

    def tables(self) -> set[str]:
        """Lower-cased names of all base tables in the schema."""
        return set(self.stored_tables())

    def table_exists(self, name: str) -> bool:
        return self.resolve_table(name) is not None

    def resolve_table(self, name: str) -> str | None:
        """
        Find the stored name of a table, ignoring case.

        Args:
            name: Table name in any case

        Returns:
            Name as stored by the catalog, or None if absent
        """
        return self.stored_tables().get(name.lower())

    def columns_of(self, table: str) -> set[str]:
        """
        Get all column names of a table.

        Args:
            table: Table name as stored

        Returns:
            Set of column names; empty if the table has none or is unknown
        """
        rows = self._fetch(
            """
            SELECT column_name
            FROM information_schema.columns
            WHERE table_schema = %s
                AND table_name = %s
            """,
            (self.schema, table),
        )
        return {row[0] for row in rows}

    def foreign_keys_referencing(self, from_table: str, to_table: str) -> set[str]:
        """
        Get the columns of from_table that form a foreign key into to_table.

        Constraints are identified by the referencing and referenced
        relations themselves, so same-named constraints on other tables
        never contribute columns.

        Args:
            from_table: Referencing table (stored name)
            to_table: Referenced table (stored name)

        Returns:
            Set of referencing column names; empty if no such key exists
        """
        rows = self._fetch(
            """
            SELECT DISTINCT a.attname
            FROM pg_constraint c
            JOIN pg_class src ON src.oid = c.conrelid
            JOIN pg_namespace src_ns ON src_ns.oid = src.relnamespace
            JOIN pg_class dst ON dst.oid = c.confrelid
            JOIN pg_namespace dst_ns ON dst_ns.oid = dst.relnamespace
            JOIN pg_attribute a ON a.attrelid = c.conrelid AND a.attnum = ANY(c.conkey)
            WHERE c.contype = 'f'
                AND src_ns.nspname = %s
                AND src.relname = %s
                AND dst_ns.nspname = %s
                AND dst.relname = %s
            """,
            (self.schema, from_table, self.schema, to_table),
        )
        return {row[0] for row in rows}

    def foreign_key_edge(self, from_table: str, to_table: str) -> ForeignKeyEdge:
        """Foreign key columns from from_table into to_table as an edge."""
        return ForeignKeyEdge(
            from_table=from_table,
            to_table=to_table,
            columns=frozenset(self.foreign_keys_referencing(from_table, to_table)),
        )

    def _fetch(self, query: str, params: tuple) -> list[tuple]:
        try:
            with self.conn.cursor() as cur:
                cur.execute(query, params)
                return cur.fetchall()
        except psycopg2.Error as e:
            raise CatalogUnavailable(f"Catalog query failed: {e}") from e
