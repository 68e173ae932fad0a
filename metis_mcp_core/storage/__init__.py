"""
Storage layer for relational and vector databases.

Provides clients for PostgreSQL (asyncpg) and ChromaDB (HTTP client).
"""

from metis_mcp_core.storage.postgres import PostgresClient, parse_row_count
from metis_mcp_core.storage.chromadb import ChromaVectorStore, build_embedding_function

__all__ = [
    # Relational
    "PostgresClient",
    "parse_row_count",
    # Vector
    "ChromaVectorStore",
    "build_embedding_function",
]
