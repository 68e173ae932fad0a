"""
PostgreSQL client.

Wraps an asyncpg connection pool: pool lifecycle, arbitrary query execution,
and catalog lookups through information_schema.
"""
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple

import asyncpg

from metis_mcp_core.errors import NotInitializedError
from metis_mcp_core.models.common import ColumnInfo
from metis_mcp_core.utils.config import DatabaseConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

PoolFactory = Callable[..., Awaitable[Any]]

TABLE_SCHEMA_QUERY = """
    SELECT
        column_name,
        data_type,
        is_nullable,
        column_default
    FROM
        information_schema.columns
    WHERE
        table_schema = $1 AND table_name = $2
    ORDER BY
        ordinal_position
"""

LIST_TABLES_QUERY = """
    SELECT
        table_name
    FROM
        information_schema.tables
    WHERE
        table_schema = $1
    ORDER BY
        table_name
"""


class PostgresClient:
    """
    Async PostgreSQL client backed by an asyncpg pool.

    Example:
        >>> client = PostgresClient()
        >>> await client.connect(host="localhost", database="metis", user="metis", password="...")
        >>> rows, row_count = await client.execute_query("SELECT * FROM documents WHERE id = $1", [7])
        >>> await client.close()
    """

    def __init__(
        self,
        config: Optional[DatabaseConfig] = None,
        pool_factory: Optional[PoolFactory] = None
    ):
        """
        Initialize the client (no connection is made until connect()).

        Args:
            config: DatabaseConfig with pool settings (defaults if None)
            pool_factory: Coroutine function creating the pool (default: asyncpg.create_pool)
        """
        self.config = config or DatabaseConfig()
        self.pool_factory = pool_factory or asyncpg.create_pool
        self.pool = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    @property
    def is_connected(self) -> bool:
        return self.pool is not None

    async def connect(
        self,
        host: str,
        database: str,
        user: str,
        password: str,
        port: Optional[int] = None
    ) -> None:
        """
        Create the connection pool and check that a connection can be acquired.

        Raises:
            asyncpg.PostgresError / OSError: If the server rejects or cannot be reached
        """
        port = port or self.config.port

        pool = await self.pool_factory(
            host=host,
            port=port,
            database=database,
            user=user,
            password=password,
            min_size=self.config.min_pool_size,
            max_size=self.config.max_pool_size,
            command_timeout=self.config.command_timeout,
        )

        try:
            async with pool.acquire() as conn:
                await conn.execute("SELECT 1")
        except Exception:
            await pool.close()
            raise

        self.pool = pool
        logger.info(f"PostgreSQL pool connected: {user}@{host}:{port}/{database}")

    async def close(self) -> None:
        """Close the pool if open."""
        if self.pool is not None:
            await self.pool.close()
            self.pool = None
            logger.debug("PostgreSQL pool closed")

    def _require_pool(self):
        if self.pool is None:
            raise NotInitializedError("Database connection not initialized")
        return self.pool

    async def execute_query(
        self,
        query: str,
        params: Optional[Sequence[Any]] = None
    ) -> Tuple[List[Dict[str, Any]], int]:
        """
        Execute a SQL statement with positional ($1, $2, ...) parameters.

        Args:
            query: SQL text
            params: Parameter values

        Returns:
            Tuple of (rows as dicts, affected/returned row count)
        """
        pool = self._require_pool()

        async with pool.acquire() as conn:
            statement = await conn.prepare(query)
            records = await statement.fetch(*(params or []))
            status = statement.get_statusmsg()

        rows = [dict(record) for record in records]
        row_count = parse_row_count(status, default=len(rows))

        logger.debug(f"Query returned {len(rows)} rows (status: {status})")
        return rows, row_count

    async def get_table_schema(self, table: str, schema: Optional[str] = None) -> List[ColumnInfo]:
        """Describe the columns of a table in ordinal order."""
        pool = self._require_pool()
        schema = schema or self.config.default_schema

        async with pool.acquire() as conn:
            records = await conn.fetch(TABLE_SCHEMA_QUERY, schema, table)

        return [ColumnInfo(**dict(record)) for record in records]

    async def list_tables(self, schema: Optional[str] = None) -> List[str]:
        """List table names in a schema, alphabetically."""
        pool = self._require_pool()
        schema = schema or self.config.default_schema

        async with pool.acquire() as conn:
            records = await conn.fetch(LIST_TABLES_QUERY, schema)

        return [record["table_name"] for record in records]


def parse_row_count(status: Optional[str], default: int = 0) -> int:
    """
    Row count from a command status tag.

    Example:
        >>> parse_row_count("INSERT 0 3")
        3
        >>> parse_row_count("CREATE TABLE", default=0)
        0
    """
    if status:
        last = status.rsplit(" ", 1)[-1]
        if last.isdigit():
            return int(last)
    return default


__all__ = ["PostgresClient", "parse_row_count"]
