"""
Document loading.

Picks an extractor by file extension:
- .pdf via PyMuPDF
- .docx via python-docx
- .txt / .md read as UTF-8 text
"""

from pathlib import Path
from typing import Optional, Union

from metis_mcp_core.errors import InvalidArgumentError
from metis_mcp_core.extractors.docx import DOCXExtractor
from metis_mcp_core.extractors.pdf import PDFExtractor
from metis_mcp_core.models.common import LoadedDocument
from metis_mcp_core.security.validation import validate_file_size, validate_file_type, validate_path
from metis_mcp_core.utils.config import DocumentConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

TEXT_EXTENSIONS = (".txt", ".md")


def load_document(file_path: Union[Path, str], config: Optional[DocumentConfig] = None) -> LoadedDocument:
    """
    Load a document from disk as plain text.

    Args:
        file_path: Path to the document
        config: DocumentConfig (allowed file types, size limit, workspace); defaults if None

    Returns:
        LoadedDocument

    Raises:
        FileNotFoundError: If the file does not exist
        InvalidArgumentError: If the path, type or size is not allowed
    """
    if not file_path:
        raise InvalidArgumentError("filePath is required")
    config = config or DocumentConfig()

    path = Path(file_path)
    validate_path(path, config.workspace_dir)

    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")

    extension = validate_file_type(path, config.allowed_file_types)
    validate_file_size(path, config.max_file_size_mb)

    if extension == ".pdf":
        return PDFExtractor().extract_document(path)
    if extension == ".docx":
        return DOCXExtractor().extract_document(path)
    if extension in TEXT_EXTENSIONS:
        return _load_text(path)

    # Allowed by config but no extractor for it
    raise InvalidArgumentError(f"Unsupported file type: {extension}")


def _load_text(path: Path) -> LoadedDocument:
    logger.info(f"Loading text file: {path}")
    return LoadedDocument(
        page_content=path.read_text(encoding="utf-8"),
        metadata={"source": str(path)},
        file_name=path.name,
        file_type=path.suffix.lower().lstrip(".")
    )


__all__ = ["load_document"]
