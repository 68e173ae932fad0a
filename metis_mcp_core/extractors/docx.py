"""
DOCX (Microsoft Word) text extraction.

Extracts paragraph text and tables from Word documents using python-docx.
Tables are rendered as pipe-delimited rows after the body text.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from docx import Document

from metis_mcp_core.models.common import LoadedDocument
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)


class DOCXExtractor:
    """Extract plain text from Microsoft Word documents."""

    def extract_document(self, file_path: Path | str) -> LoadedDocument:
        """
        Extract text from a DOCX file.

        Args:
            file_path: Path to DOCX file

        Returns:
            LoadedDocument with paragraphs separated by newlines

        Example:
            >>> document = DOCXExtractor().extract_document("notes.docx")
            >>> document.file_type
            'docx'
        """
        file_path = Path(file_path)
        logger.info(f"Extracting DOCX: {file_path}")

        doc = Document(str(file_path))

        parts = [para.text for para in doc.paragraphs]
        for table in doc.tables:
            table_text = self._extract_table_text(table)
            if table_text:
                parts.append("")
                parts.append(table_text)

        metadata: dict[str, Any] = {"source": str(file_path)}
        title = doc.core_properties.title
        if title:
            metadata["title"] = title
        author = doc.core_properties.author
        if author:
            metadata["author"] = author

        return LoadedDocument(
            page_content="\n".join(parts).strip(),
            metadata=metadata,
            file_name=file_path.name,
            file_type="docx"
        )

    def _extract_table_text(self, table) -> str:
        """Extract text from table as markdown-style pipe rows."""
        rows = []
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells]
            rows.append("| " + " | ".join(cells) + " |")

        if len(rows) > 1:
            # Add separator after header
            column_count = len(table.rows[0].cells)
            separator = "| " + " | ".join(["---"] * column_count) + " |"
            return "\n".join([rows[0], separator] + rows[1:])

        return "\n".join(rows)


__all__ = ["DOCXExtractor"]
