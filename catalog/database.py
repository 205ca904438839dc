"""
Read-only database access for the String Authority Catalog.

The catalog only reads, so pooled connections are opened with
``default_transaction_read_only`` and every query runs in its own
transaction that is closed before the connection returns to the pool.
"""

import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2.pool import SimpleConnectionPool
from contextlib import contextmanager
from typing import Dict, List, Optional, Any, Generator
import logging

from .config import get_database_config, get_pool_config

logger = logging.getLogger(__name__)

READ_ONLY_OPTIONS = '-c default_transaction_read_only=on'


class DatabaseManager:
    """Pooled read-only connections and query helpers."""

    def __init__(self, config: Optional[Dict[str, str]] = None,
                 pool_config: Optional[Dict[str, int]] = None):
        self._pool: Optional[SimpleConnectionPool] = None
        self._initialize_pool(config or get_database_config(), pool_config or get_pool_config())

    def _initialize_pool(self, config: Optional[Dict[str, str]], pool_config: Dict[str, int]):
        if not config:
            raise ValueError("Database configuration not found")

        try:
            self._pool = SimpleConnectionPool(
                minconn=pool_config['minconn'],
                maxconn=pool_config['maxconn'],
                **{'options': READ_ONLY_OPTIONS, **config}
            )
            logger.info(
                f"Catalog connection pool initialized "
                f"({pool_config['minconn']}-{pool_config['maxconn']} connections, read-only)"
            )
        except Exception as e:
            logger.error(f"Failed to initialize catalog connection pool: {e}")
            raise

    @contextmanager
    def get_connection(self) -> Generator[psycopg2.extensions.connection, None, None]:
        """
        Borrow a connection from the pool.

        The transaction is rolled back on the way out, so a connection never
        goes back to the pool idle in a transaction.
        """
        if not self._pool:
            raise RuntimeError("Database pool not initialized")

        conn = self._pool.getconn()
        try:
            yield conn
        except Exception as e:
            logger.error(f"Database error: {e}")
            raise
        finally:
            conn.rollback()
            self._pool.putconn(conn)

    def execute_query(self, query: str, params: Optional[tuple] = None) -> List[Dict[str, Any]]:
        """
        Execute a SELECT query and return results as a list of dictionaries.

        Args:
            query: SQL query string
            params: Query parameters

        Returns:
            List of rows as dictionaries keyed by column name
        """
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query, params)
                return [dict(row) for row in cursor.fetchall()]

    def execute_one(self, query: str, params: Optional[tuple] = None) -> Optional[Dict[str, Any]]:
        """First row of a SELECT query, or None when it matches nothing."""
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query, params)
                row = cursor.fetchone()
                return dict(row) if row is not None else None

    def close_pool(self):
        """Close the connection pool."""
        if self._pool:
            self._pool.closeall()
            self._pool = None
            logger.info("Catalog connection pool closed")


_db_manager: Optional[DatabaseManager] = None


def get_db_manager() -> DatabaseManager:
    """Shared database manager, created on first use."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager
