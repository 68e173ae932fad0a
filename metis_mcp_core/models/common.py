"""
Common models shared across the tool services.

Text-analysis results are frozen dataclasses; ``to_dict()`` renders the
camelCase shape returned over the tool boundary. Records that come back
from external systems are Pydantic models.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class TextChunk:
    """
    A bounded-size excerpt of a larger text.

    Attributes:
        text: Chunk content
        metadata: Metadata copied from the source document (same value for
            every chunk of one chunking call)
    """
    text: str
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"text": self.text, "metadata": copy.deepcopy(self.metadata)}


@dataclass(frozen=True)
class CodeBlock:
    """
    A code region found in a document.

    Attributes:
        language: Lower-cased language tag, or "unknown"
        code: Block contents with surrounding whitespace removed
    """
    language: str
    code: str

    def to_dict(self) -> Dict[str, Any]:
        return {"language": self.language, "code": self.code}


@dataclass(frozen=True)
class Heading:
    """A markdown ATX heading (level 1-6) and where its line starts."""
    level: int
    text: str
    position: int

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level, "text": self.text, "position": self.position}


@dataclass(frozen=True)
class StructureReport:
    """
    Point-in-time summary of a document's structure.

    Attributes:
        headings: Headings in document order
        paragraph_count: Blocks of text separated by blank lines
        bullet_list_item_count: Lines starting with -, * or +
        numbered_list_item_count: Lines starting with "<digits>."
        table_row_count: Pipe-delimited table lines (header and separator rows included)
        total_length: Character count of the input
        word_count: Whitespace-delimited tokens
    """
    headings: Tuple[Heading, ...]
    paragraph_count: int
    bullet_list_item_count: int
    numbered_list_item_count: int
    table_row_count: int
    total_length: int
    word_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headings": [heading.to_dict() for heading in self.headings],
            "paragraphCount": self.paragraph_count,
            "bulletListItemCount": self.bullet_list_item_count,
            "numberedListItemCount": self.numbered_list_item_count,
            "tableRowCount": self.table_row_count,
            "totalLength": self.total_length,
            "wordCount": self.word_count,
        }


@dataclass
class LoadedDocument:
    """
    Plain text loaded from a file on disk.

    Attributes:
        page_content: Full text (pages joined with a blank line)
        metadata: Loader metadata (source path, page count, document info)
        file_name: Base name of the file
        file_type: Extension without the leading dot
    """
    page_content: str
    metadata: Dict[str, Any]
    file_name: str
    file_type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pageContent": self.page_content,
            "metadata": self.metadata,
            "fileName": self.file_name,
            "fileType": self.file_type,
        }


class ColumnInfo(BaseModel):
    """One column of a table as reported by information_schema.columns."""
    column_name: str = Field(..., description="Column name")
    data_type: str = Field(..., description="SQL data type")
    is_nullable: str = Field(..., description="'YES' or 'NO'")
    column_default: Optional[str] = Field(None, description="Default expression, if any")

    model_config = {
        "json_schema_extra": {
            "example": {
                "column_name": "id",
                "data_type": "integer",
                "is_nullable": "NO",
                "column_default": "nextval('documents_id_seq'::regclass)"
            }
        }
    }


__all__ = [
    "TextChunk",
    "CodeBlock",
    "Heading",
    "StructureReport",
    "LoadedDocument",
    "ColumnInfo",
]
