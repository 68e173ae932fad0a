"""
File access checks for the document loader.

Each check raises InvalidArgumentError with a message suitable for a tool
error result; a file that passes all of them is safe to open.
"""

from pathlib import Path
from typing import Iterable, Optional

from metis_mcp_core.errors import InvalidArgumentError


def is_within_workspace(path: Path, workspace: Path) -> bool:
    """
    True if path resolves to a location inside workspace.

    Example:
        >>> is_within_workspace(Path("/srv/docs/a.md"), Path("/srv/docs"))
        True
        >>> is_within_workspace(Path("/srv/docs/../secrets.txt"), Path("/srv/docs"))
        False
    """
    try:
        return path.resolve().is_relative_to(workspace.resolve())
    except (ValueError, OSError):
        return False


def validate_path(path: Path, workspace: Optional[Path]) -> None:
    """Reject paths outside the workspace (no restriction when workspace is None)."""
    if workspace is not None and not is_within_workspace(path, Path(workspace)):
        raise InvalidArgumentError(f"Path is outside the workspace: {path}")


def validate_file_type(path: Path, allowed_extensions: Iterable[str]) -> str:
    """
    Reject extensions not in allowed_extensions (case-insensitive).

    Returns:
        The lower-cased extension, e.g. ".pdf"
    """
    extension = path.suffix.lower()
    if extension not in {ext.lower() for ext in allowed_extensions}:
        raise InvalidArgumentError(f"Unsupported file type: {extension}")
    return extension


def validate_file_size(path: Path, max_size_mb: Optional[int]) -> None:
    """Reject files larger than max_size_mb megabytes (no limit when None)."""
    if max_size_mb is None:
        return
    size_mb = path.stat().st_size / (1024 * 1024)
    if size_mb > max_size_mb:
        raise InvalidArgumentError(f"File exceeds {max_size_mb} MB ({size_mb:.1f} MB): {path}")


__all__ = [
    "is_within_workspace",
    "validate_path",
    "validate_file_type",
    "validate_file_size",
]
