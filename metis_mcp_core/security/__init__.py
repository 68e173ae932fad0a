"""
Security utilities module.

Provides file access checks for the document loader:
- Path validation (prevent path traversal outside a workspace)
- File type restrictions
- File size limits
"""

from metis_mcp_core.security.validation import (
    is_within_workspace,
    validate_path,
    validate_file_type,
    validate_file_size
)

__all__ = [
    "is_within_workspace",
    "validate_path",
    "validate_file_type",
    "validate_file_size",
]
