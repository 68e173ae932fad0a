"""
database-tool: PostgreSQL queries and catalog lookups.

Operations take a DatabaseContext holding the live PostgresClient;
create_database_server() registers them with FastMCP.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Annotated, Any, AsyncIterator, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from metis_mcp_core.errors import NotInitializedError
from metis_mcp_core.storage.postgres import PoolFactory, PostgresClient
from metis_mcp_core.tools.base import tool_handler
from metis_mcp_core.utils.config import DatabaseConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

SERVER_NAME = "database-tool"


@dataclass
class DatabaseContext:
    """Per-server database state: config, pool factory and the connected client."""
    config: DatabaseConfig = field(default_factory=DatabaseConfig)
    pool_factory: Optional[PoolFactory] = None
    client: Optional[PostgresClient] = None

    def require_client(self) -> PostgresClient:
        if self.client is None or not self.client.is_connected:
            raise NotInitializedError("Database connection not initialized")
        return self.client


async def init_database_connection(
    ctx: DatabaseContext,
    host: str,
    database: str,
    user: str,
    password: str,
    port: Optional[int] = None
) -> Dict[str, Any]:
    """Connect a new pool; the previous one is closed only once the new one works."""
    client = PostgresClient(ctx.config, pool_factory=ctx.pool_factory)
    await client.connect(host=host, database=database, user=user, password=password, port=port)

    previous, ctx.client = ctx.client, client
    if previous is not None:
        await previous.close()

    return {"message": f"Connected to database {database} at {host}:{port or ctx.config.port}"}


async def execute_query(
    ctx: DatabaseContext,
    query: str,
    params: Optional[List[Any]] = None
) -> Dict[str, Any]:
    rows, row_count = await ctx.require_client().execute_query(query, params or [])
    return {"data": rows, "rowCount": row_count}


async def get_table_schema(ctx: DatabaseContext, table: str, schema: Optional[str] = None) -> Dict[str, Any]:
    columns = await ctx.require_client().get_table_schema(table, schema)
    return {"schema": [column.model_dump() for column in columns]}


async def list_tables(ctx: DatabaseContext, schema: Optional[str] = None) -> Dict[str, Any]:
    tables = await ctx.require_client().list_tables(schema)
    return {"tables": tables}


async def close_database_connection(ctx: DatabaseContext) -> None:
    if ctx.client is not None:
        await ctx.client.close()
        ctx.client = None


def connection_lifespan(ctx: DatabaseContext):
    """FastMCP lifespan that closes the pool when the server shuts down."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await close_database_connection(ctx)

    return lifespan


def create_database_server(context: Optional[DatabaseContext] = None) -> FastMCP:
    """
    Create the database MCP server.

    Args:
        context: Shared DatabaseContext (a fresh one if None)

    Returns:
        Configured FastMCP server instance
    """
    ctx = context or DatabaseContext()
    mcp = FastMCP(name=SERVER_NAME, lifespan=connection_lifespan(ctx))

    @mcp.tool(name="init_database_connection", description="Initialize a connection to a PostgreSQL database")
    @tool_handler
    async def init_database_connection_tool(
        host: Annotated[str, Field(description="Database host")],
        database: Annotated[str, Field(description="Database name")],
        user: Annotated[str, Field(description="Database user")],
        password: Annotated[str, Field(description="Database password")],
        port: Annotated[Optional[int], Field(description="Database port (default: configured port)")] = None,
    ):
        return await init_database_connection(ctx, host, database, user, password, port)

    @mcp.tool(name="execute_query", description="Execute a SQL query with positional parameters ($1, $2, ...)")
    @tool_handler
    async def execute_query_tool(
        query: Annotated[str, Field(description="SQL query to execute")],
        params: Annotated[Optional[List[Any]], Field(description="Query parameters")] = None,
    ):
        return await execute_query(ctx, query, params)

    @mcp.tool(name="get_table_schema", description="Get the column schema of a table")
    @tool_handler
    async def get_table_schema_tool(
        table: Annotated[str, Field(description="Table name")],
        schema: Annotated[Optional[str], Field(description="Schema name (default: configured schema)")] = None,
    ):
        return await get_table_schema(ctx, table, schema)

    @mcp.tool(name="list_tables", description="List tables in a schema")
    @tool_handler
    async def list_tables_tool(
        schema: Annotated[Optional[str], Field(description="Schema name (default: configured schema)")] = None,
    ):
        return await list_tables(ctx, schema)

    return mcp


__all__ = [
    "DatabaseContext",
    "SERVER_NAME",
    "init_database_connection",
    "execute_query",
    "get_table_schema",
    "list_tables",
    "close_database_connection",
    "connection_lifespan",
    "create_database_server",
]
