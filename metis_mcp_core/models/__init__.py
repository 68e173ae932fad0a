"""
Shared data models module.

Provides the data models used across the tool services:
- Text-analysis results (chunks, code blocks, structure reports)
- Loaded documents
- Database column descriptions
"""

from metis_mcp_core.models.common import (
    TextChunk,
    CodeBlock,
    Heading,
    StructureReport,
    LoadedDocument,
    ColumnInfo,
)

__all__ = [
    "TextChunk",
    "CodeBlock",
    "Heading",
    "StructureReport",
    "LoadedDocument",
    "ColumnInfo",
]
