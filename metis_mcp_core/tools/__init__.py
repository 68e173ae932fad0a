"""
MCP tool servers.

One FastMCP server per service, each backed by an explicit context object:
- document-processing-tool: DocumentContext
- database-tool: DatabaseContext
- vector-store-tool: VectorStoreContext
- llm-interaction-tool: LLMContext
"""

from metis_mcp_core.tools.base import tool_error, tool_handler, tool_success
from metis_mcp_core.tools.database import DatabaseContext, create_database_server
from metis_mcp_core.tools.document import DocumentContext, create_document_server
from metis_mcp_core.tools.llm import LLMContext, create_llm_server
from metis_mcp_core.tools.vector_store import VectorStoreContext, create_vector_store_server

# Service name -> builder taking MetisSettings
SERVER_FACTORIES = {
    "database": lambda settings: create_database_server(DatabaseContext(config=settings.database)),
    "vector-store": lambda settings: create_vector_store_server(VectorStoreContext(config=settings.vector_store)),
    "document": lambda settings: create_document_server(DocumentContext(config=settings.document)),
    "llm": lambda settings: create_llm_server(LLMContext(config=settings.llm)),
}

__all__ = [
    "tool_error",
    "tool_handler",
    "tool_success",
    "DatabaseContext",
    "DocumentContext",
    "LLMContext",
    "VectorStoreContext",
    "create_database_server",
    "create_document_server",
    "create_llm_server",
    "create_vector_store_server",
    "SERVER_FACTORIES",
]
