"""
metis-mcp-core: MCP tool servers for document processing and RAG backends.

Each MCP server is a thin wrapper around business logic in this package.

Modules:
    extractors: Document loading (PDF, DOCX, TXT, MD), chunking, code and structure scans
    storage: PostgreSQL (asyncpg) and ChromaDB clients
    embeddings: Local embedding models (sentence-transformers)
    llm: LLM provider clients, prompt templates, embeddings
    security: Path and file validation
    tools: FastMCP tool servers
    utils: Configuration, logging
    models: Shared result types
"""

__version__ = "0.1.0"

# embeddings and tools are not imported here: they load torch / the MCP SDK
from metis_mcp_core import errors, extractors, models, utils

__all__ = [
    "errors",
    "extractors",
    "models",
    "utils",
    "__version__",
]
