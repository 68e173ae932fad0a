"""
Document processing module.

Provides loaders and pure text analysis:
- Loading (PDF via PyMuPDF, DOCX via python-docx, plain text / markdown)
- Chunking (recursive character splitting with overlap)
- Code block extraction (fenced and indented blocks)
- Structure analysis (headings, paragraphs, lists, tables)
"""

from metis_mcp_core.extractors.chunking import (
    chunk_text,
    split_text,
    merge_splits,
    validate_chunk_params
)
from metis_mcp_core.extractors.code import extract_code_blocks, scan_code_blocks
from metis_mcp_core.extractors.structure import analyze_structure
from metis_mcp_core.extractors.pdf import PDFExtractor
from metis_mcp_core.extractors.docx import DOCXExtractor
from metis_mcp_core.extractors.loader import load_document

__all__ = [
    # Chunking
    "chunk_text",
    "split_text",
    "merge_splits",
    "validate_chunk_params",
    # Code blocks
    "extract_code_blocks",
    "scan_code_blocks",
    # Structure
    "analyze_structure",
    # Loaders
    "PDFExtractor",
    "DOCXExtractor",
    "load_document",
]
