"""
PDF text extraction.

Extracts plain text page by page using PyMuPDF and joins the pages with a
blank line so paragraph-based chunking keeps page boundaries.
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import fitz  # PyMuPDF

from metis_mcp_core.models.common import LoadedDocument
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)


class PDFExtractor:
    """
    Extract plain text from PDF files.

    Example:
        >>> extractor = PDFExtractor()
        >>> document = extractor.extract_document("datasheet.pdf")
        >>> document.metadata["total_pages"]
        42
    """

    def extract_document(self, file_path: Union[Path, str]) -> LoadedDocument:
        """
        Extract the text of every page.

        Args:
            file_path: Path to the PDF file

        Returns:
            LoadedDocument with pages joined by blank lines
        """
        file_path = Path(file_path)
        logger.info(f"Extracting PDF: {file_path}")

        with fitz.open(file_path) as doc:
            pages = self._extract_pages(doc)
            metadata: Dict[str, Any] = {
                "source": str(file_path),
                "total_pages": len(doc),
            }
            metadata.update(self._extract_info(doc))

        logger.info(f"Extracted {len(pages)} pages from {file_path.name}")

        return LoadedDocument(
            page_content="\n\n".join(pages),
            metadata=metadata,
            file_name=file_path.name,
            file_type="pdf"
        )

    def _extract_pages(self, doc: fitz.Document) -> List[str]:
        """Extract text content from each page, skipping empty pages."""
        pages = []
        for page in doc:
            text = page.get_text().strip()
            if text:
                pages.append(text)
        return pages

    def _extract_info(self, doc: fitz.Document) -> Dict[str, str]:
        """Document info dictionary (title, author, ...) without empty entries."""
        info = doc.metadata or {}
        return {key: value for key, value in info.items() if value}


__all__ = ["PDFExtractor"]
