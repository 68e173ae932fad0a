"""
vector-store-tool: Chroma collections and similarity search.

The chromadb HTTP client is synchronous, so operations run it in a worker
thread via asyncio.to_thread.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, List, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from metis_mcp_core.errors import NotInitializedError
from metis_mcp_core.storage.chromadb import ChromaVectorStore, ClientFactory
from metis_mcp_core.tools.base import tool_handler
from metis_mcp_core.utils.config import VectorStoreConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

SERVER_NAME = "vector-store-tool"


@dataclass
class VectorStoreContext:
    """Per-server vector store state: config, client factory and the connected store."""
    config: VectorStoreConfig = field(default_factory=VectorStoreConfig)
    client_factory: Optional[ClientFactory] = None
    store: Optional[ChromaVectorStore] = None

    def require_store(self) -> ChromaVectorStore:
        if self.store is None:
            raise NotInitializedError("Vector store connection not initialized")
        return self.store


async def init_vector_store(ctx: VectorStoreContext, host: str, port: Optional[int] = None) -> Dict[str, Any]:
    store = ChromaVectorStore(ctx.config, client_factory=ctx.client_factory)
    await asyncio.to_thread(store.connect, host, port)
    ctx.store = store
    return {"message": f"Connected to vector store at {host}:{port or ctx.config.port}"}


async def get_or_create_collection(
    ctx: VectorStoreContext,
    name: str,
    metadata: Optional[Dict[str, Any]] = None,
    embedding_function: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    store = ctx.require_store()
    await asyncio.to_thread(store.get_or_create_collection, name, metadata, embedding_function)
    return {"message": f"Collection {name} ready", "collectionName": name}


async def add_documents(
    ctx: VectorStoreContext,
    documents: List[str],
    ids: List[str],
    metadatas: Optional[List[Dict[str, Any]]] = None
) -> Dict[str, Any]:
    count = await asyncio.to_thread(ctx.require_store().add_documents, documents, ids, metadatas)
    return {"message": f"Added {count} documents", "count": count}


async def query_collection(
    ctx: VectorStoreContext,
    query_texts: List[str],
    n_results: Optional[int] = None,
    where: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    results = await asyncio.to_thread(ctx.require_store().query, query_texts, n_results, where)
    return {"results": results}


async def delete_documents(ctx: VectorStoreContext, ids: List[str]) -> Dict[str, Any]:
    count = await asyncio.to_thread(ctx.require_store().delete_documents, ids)
    return {"message": f"Deleted {count} documents", "count": count}


async def list_collections(ctx: VectorStoreContext) -> Dict[str, Any]:
    names = await asyncio.to_thread(ctx.require_store().list_collections)
    return {"collections": names}


def create_vector_store_server(context: Optional[VectorStoreContext] = None) -> FastMCP:
    """
    Create the vector store MCP server.

    Args:
        context: Shared VectorStoreContext (a fresh one if None)

    Returns:
        Configured FastMCP server instance
    """
    ctx = context or VectorStoreContext()
    mcp = FastMCP(name=SERVER_NAME)

    @mcp.tool(name="init_vector_store", description="Initialize a connection to a Chroma vector store")
    @tool_handler
    async def init_vector_store_tool(
        host: Annotated[str, Field(description="Chroma server host")],
        port: Annotated[Optional[int], Field(description="Chroma server port (default: configured port)")] = None,
    ):
        return await init_vector_store(ctx, host, port)

    @mcp.tool(name="get_or_create_collection", description="Get or create a collection and make it active")
    @tool_handler
    async def get_or_create_collection_tool(
        name: Annotated[str, Field(description="Collection name")],
        metadata: Annotated[Optional[Dict[str, Any]], Field(description="Collection metadata")] = None,
        embeddingFunction: Annotated[
            Optional[Dict[str, Any]],
            Field(description="Embedding function {type: default|sentence-transformers|openai, apiKey, modelName}")
        ] = None,
    ):
        return await get_or_create_collection(ctx, name, metadata, embeddingFunction)

    @mcp.tool(name="add_documents", description="Add documents to the active collection")
    @tool_handler
    async def add_documents_tool(
        documents: Annotated[List[str], Field(description="Document texts")],
        ids: Annotated[List[str], Field(description="Document ids, one per document")],
        metadatas: Annotated[Optional[List[Dict[str, Any]]], Field(description="Metadata, one per document")] = None,
    ):
        return await add_documents(ctx, documents, ids, metadatas)

    @mcp.tool(name="query_collection", description="Similarity search in the active collection")
    @tool_handler
    async def query_collection_tool(
        queryTexts: Annotated[List[str], Field(description="Query texts")],
        nResults: Annotated[
            Optional[int],
            Field(description="Results per query text (default: configured n_results)")
        ] = None,
        filter: Annotated[Optional[Dict[str, Any]], Field(description="Metadata filter (Chroma where clause)")] = None,
    ):
        return await query_collection(ctx, queryTexts, nResults, filter)

    @mcp.tool(name="delete_documents", description="Delete documents from the active collection")
    @tool_handler
    async def delete_documents_tool(
        ids: Annotated[List[str], Field(description="Document ids to delete")],
    ):
        return await delete_documents(ctx, ids)

    @mcp.tool(name="list_collections", description="List collections on the vector store server")
    @tool_handler
    async def list_collections_tool():
        return await list_collections(ctx)

    return mcp


__all__ = [
    "VectorStoreContext",
    "SERVER_NAME",
    "init_vector_store",
    "get_or_create_collection",
    "add_documents",
    "query_collection",
    "delete_documents",
    "list_collections",
    "create_vector_store_server",
]
