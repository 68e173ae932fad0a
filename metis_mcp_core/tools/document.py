"""
document-processing-tool: load, chunk and analyze documents.

Operations take a DocumentContext and return the payload of a successful
tool result; create_document_server() registers them with FastMCP.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Annotated, Any, Dict, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from metis_mcp_core import extractors
from metis_mcp_core.errors import InvalidArgumentError
from metis_mcp_core.tools.base import tool_handler
from metis_mcp_core.utils.config import DocumentConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

SERVER_NAME = "document-processing-tool"


@dataclass
class DocumentContext:
    """Per-server state for document processing (configuration only)."""
    config: DocumentConfig = field(default_factory=DocumentConfig)


def _require_text(text: Optional[str]) -> str:
    if text is None:
        raise InvalidArgumentError("text is required")
    return text


async def load_document(ctx: DocumentContext, file_path: str) -> Dict[str, Any]:
    """Load a PDF, DOCX, TXT or MD file as plain text."""
    document = await asyncio.to_thread(extractors.load_document, file_path, ctx.config)
    return {"document": document.to_dict()}


def chunk_document(
    ctx: DocumentContext,
    text: str,
    chunk_size: Optional[int] = None,
    chunk_overlap: Optional[int] = None,
    metadata: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """Split text into overlapping chunks; sizes default to the configured ones."""
    chunks = extractors.chunk_text(
        _require_text(text),
        chunk_size=ctx.config.chunk_size if chunk_size is None else chunk_size,
        chunk_overlap=ctx.config.chunk_overlap if chunk_overlap is None else chunk_overlap,
        metadata=metadata
    )
    return {"chunks": [chunk.to_dict() for chunk in chunks], "count": len(chunks)}


def extract_code(ctx: DocumentContext, text: str, language: Optional[str] = None) -> Dict[str, Any]:
    """Extract fenced and indented code blocks, optionally filtered by language."""
    blocks = extractors.extract_code_blocks(
        _require_text(text),
        language=language,
        max_blocks=ctx.config.max_scan_matches
    )
    return {"codeBlocks": [block.to_dict() for block in blocks], "count": len(blocks)}


def analyze_document_structure(ctx: DocumentContext, text: str) -> Dict[str, Any]:
    """Count headings, paragraphs, list items and table rows."""
    report = extractors.analyze_structure(
        _require_text(text),
        max_headings=ctx.config.max_scan_matches
    )
    return {"structure": report.to_dict()}


def create_document_server(context: Optional[DocumentContext] = None) -> FastMCP:
    """
    Create the document-processing MCP server.

    Args:
        context: Shared DocumentContext (a fresh one if None)

    Returns:
        Configured FastMCP server instance
    """
    ctx = context or DocumentContext()
    mcp = FastMCP(name=SERVER_NAME)

    @mcp.tool(name="load_document", description="Load a document from a file path (PDF, DOCX, TXT, MD)")
    @tool_handler
    async def load_document_tool(
        filePath: Annotated[str, Field(description="Path to the document file")],
    ):
        return await load_document(ctx, filePath)

    @mcp.tool(name="chunk_document", description="Split document text into overlapping chunks")
    @tool_handler
    def chunk_document_tool(
        text: Annotated[str, Field(description="Document text to split")],
        chunkSize: Annotated[Optional[int], Field(description="Maximum chunk size in characters")] = None,
        chunkOverlap: Annotated[Optional[int], Field(description="Overlap between chunks in characters")] = None,
        metadata: Annotated[Optional[Dict[str, Any]], Field(description="Metadata copied onto every chunk")] = None,
    ):
        return chunk_document(ctx, text, chunkSize, chunkOverlap, metadata)

    @mcp.tool(name="extract_code", description="Extract code blocks from text")
    @tool_handler
    def extract_code_tool(
        text: Annotated[str, Field(description="Text containing code blocks")],
        language: Annotated[Optional[str], Field(description="Only return blocks with this language tag")] = None,
    ):
        return extract_code(ctx, text, language)

    @mcp.tool(name="analyze_document_structure", description="Analyze the structure of a document")
    @tool_handler
    def analyze_document_structure_tool(
        text: Annotated[str, Field(description="Document text to analyze")],
    ):
        return analyze_document_structure(ctx, text)

    return mcp


__all__ = [
    "DocumentContext",
    "SERVER_NAME",
    "load_document",
    "chunk_document",
    "extract_code",
    "analyze_document_structure",
    "create_document_server",
]
