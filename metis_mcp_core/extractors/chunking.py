"""
Document chunking.

Recursive character splitting with overlap:
1. Split on the largest separator present (paragraph, line, word, character)
2. Merge small pieces into windows of at most chunk_size characters
3. Carry up to chunk_overlap characters of trailing pieces into the next window
4. Recurse with smaller separators into pieces that are still too large
"""

import copy
from typing import Any, Dict, List, Optional, Sequence

from metis_mcp_core.errors import InvalidArgumentError
from metis_mcp_core.models.common import TextChunk
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SEPARATORS = ["\n\n", "\n", " ", ""]


def validate_chunk_params(chunk_size: int, chunk_overlap: int) -> None:
    """Raise InvalidArgumentError unless 0 <= chunk_overlap < chunk_size."""
    if chunk_size <= 0:
        raise InvalidArgumentError(f"chunkSize must be positive, got {chunk_size}")
    if chunk_overlap < 0:
        raise InvalidArgumentError(f"chunkOverlap must not be negative, got {chunk_overlap}")
    if chunk_overlap >= chunk_size:
        raise InvalidArgumentError(
            f"chunkOverlap ({chunk_overlap}) must be smaller than chunkSize ({chunk_size})"
        )


def chunk_text(
    text: str,
    chunk_size: int = 1000,
    chunk_overlap: int = 200,
    metadata: Optional[Dict[str, Any]] = None,
    separators: Optional[Sequence[str]] = None
) -> List[TextChunk]:
    """
    Split text into overlapping chunks that each carry the same metadata.

    Args:
        text: Text to split
        chunk_size: Maximum chunk length in characters
        chunk_overlap: Characters of trailing context repeated at the start
            of the next chunk (upper bound, whole pieces only)
        metadata: Mapping attached to every chunk (deep-copied per chunk)
        separators: Separator priority list (default: paragraph, line, space, character)

    Returns:
        Chunks in text order

    Raises:
        InvalidArgumentError: If text is missing or the sizes are inconsistent

    Example:
        >>> chunks = chunk_text("one two three four five", chunk_size=10, chunk_overlap=0)
        >>> [c.text for c in chunks]
        ['one two', 'three four', 'five']
    """
    if text is None:
        raise InvalidArgumentError("text is required")
    validate_chunk_params(chunk_size, chunk_overlap)

    metadata = metadata or {}
    pieces = split_text(text, chunk_size, chunk_overlap, list(separators or DEFAULT_SEPARATORS))

    logger.debug(f"Split {len(text)} characters into {len(pieces)} chunks (size={chunk_size}, overlap={chunk_overlap})")

    return [TextChunk(text=piece, metadata=copy.deepcopy(metadata)) for piece in pieces]


def split_text(
    text: str,
    chunk_size: int,
    chunk_overlap: int,
    separators: List[str]
) -> List[str]:
    """
    Recursively split text, preferring the first separator that occurs in it.

    Returns:
        List of chunk strings (stripped, never empty)
    """
    final_chunks: List[str] = []

    # Pick the first separator present; "" always matches
    separator = separators[-1]
    remaining: List[str] = []
    for i, candidate in enumerate(separators):
        if candidate == "":
            separator = candidate
            break
        if candidate in text:
            separator = candidate
            remaining = separators[i + 1:]
            break

    splits = split_on_separator(text, separator)

    good_splits: List[str] = []
    for piece in splits:
        if len(piece) < chunk_size:
            good_splits.append(piece)
            continue

        if good_splits:
            final_chunks.extend(merge_splits(good_splits, separator, chunk_size, chunk_overlap))
            good_splits = []

        if remaining:
            final_chunks.extend(split_text(piece, chunk_size, chunk_overlap, remaining))
        else:
            # Atomic piece: nothing left to split on
            doc = _join_pieces([piece], separator)
            if doc is not None:
                final_chunks.append(doc)

    if good_splits:
        final_chunks.extend(merge_splits(good_splits, separator, chunk_size, chunk_overlap))

    return final_chunks


def split_on_separator(text: str, separator: str) -> List[str]:
    """Split text on separator ("" splits into characters), dropping empty pieces."""
    if separator:
        splits = text.split(separator)
    else:
        splits = list(text)
    return [piece for piece in splits if piece != ""]


def merge_splits(
    splits: List[str],
    separator: str,
    chunk_size: int,
    chunk_overlap: int
) -> List[str]:
    """
    Merge pieces into windows no longer than chunk_size.

    When a window is emitted, pieces are dropped from its front until at most
    chunk_overlap characters remain and the next piece fits; the survivors
    open the next window.
    """
    separator_len = len(separator)

    docs: List[str] = []
    current: List[str] = []
    total = 0

    for piece in splits:
        piece_len = len(piece)

        if total + piece_len + (separator_len if current else 0) > chunk_size:
            if total > chunk_size:
                logger.warning(f"Created a chunk of size {total}, longer than the specified {chunk_size}")

            if current:
                doc = _join_pieces(current, separator)
                if doc is not None:
                    docs.append(doc)

                while total > chunk_overlap or (
                    total + piece_len + (separator_len if current else 0) > chunk_size and total > 0
                ):
                    total -= len(current[0]) + (separator_len if len(current) > 1 else 0)
                    current.pop(0)

        current.append(piece)
        total += piece_len + (separator_len if len(current) > 1 else 0)

    doc = _join_pieces(current, separator)
    if doc is not None:
        docs.append(doc)

    return docs


def _join_pieces(pieces: List[str], separator: str) -> Optional[str]:
    text = separator.join(pieces).strip()
    return text or None


__all__ = [
    "DEFAULT_SEPARATORS",
    "chunk_text",
    "split_text",
    "split_on_separator",
    "merge_splits",
    "validate_chunk_params",
]
