"""
Code block extraction.

Line scanner with two block kinds:
- Fenced blocks between ``` markers, with an optional language tag on the
  opening line (```python\\n...```)
- Indented blocks: consecutive lines starting with a space or a tab

Matches are non-overlapping and reported in document order. A fence marker
at the start of a line, after any indentation, opens a fenced block. An
indented line with a fence marker later on it is part of an indented block;
a marker later in a non-indented line opens a fenced block from that point.
A fence without a closing marker is not a block; its indented opening line
is then scanned as an indented block.
"""

import string
from typing import Iterator, List, Optional, Tuple

from metis_mcp_core.errors import InvalidArgumentError, PatternLimitError
from metis_mcp_core.models.common import CodeBlock
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

FENCE = "```"
UNKNOWN_LANGUAGE = "unknown"

_TAG_CHARS = frozenset(string.ascii_letters + string.digits)
_INDENT_CHARS = (" ", "\t")


def extract_code_blocks(
    text: str,
    language: Optional[str] = None,
    max_blocks: int = 10_000
) -> List[CodeBlock]:
    """
    Extract fenced and indented code blocks from text.

    Args:
        text: Document text
        language: Keep only blocks with this language (case-insensitive)
        max_blocks: Upper bound on blocks scanned before giving up

    Returns:
        Matching code blocks in document order

    Raises:
        InvalidArgumentError: If text is missing
        PatternLimitError: If more than max_blocks blocks are found

    Example:
        >>> extract_code_blocks("```js\\nconsole.log(1)\\n```")
        [CodeBlock(language='js', code='console.log(1)')]
    """
    if text is None:
        raise InvalidArgumentError("text is required")

    wanted = language.lower() if language else None

    blocks: List[CodeBlock] = []
    scanned = 0
    for block in scan_code_blocks(text):
        scanned += 1
        if scanned > max_blocks:
            raise PatternLimitError(f"Found more than {max_blocks} code blocks")
        if wanted is None or block.language == wanted:
            blocks.append(block)

    logger.debug(f"Scanned {scanned} code blocks, kept {len(blocks)}")
    return blocks


def scan_code_blocks(text: str) -> Iterator[CodeBlock]:
    """Yield every code block in text, in document order."""
    length = len(text)
    pos = 0
    at_line_start = True

    while pos < length:
        line_end = text.find("\n", pos)
        if line_end == -1:
            line_end = length

        if at_line_start and text[pos] in _INDENT_CHARS:
            fenced = _match_indented_fence(text, pos, line_end)
            if fenced is not None:
                block, pos = fenced
                yield block
                at_line_start = False
                continue

            block, pos = _match_indented(text, pos)
            if block is not None:
                yield block
            continue

        marker = text.find(FENCE, pos, line_end)
        if marker != -1:
            fenced = _match_fence(text, marker)
            if fenced is not None:
                block, pos = fenced
                yield block
                # Scanning resumes mid-line, right after the closing marker
                at_line_start = False
                continue

        pos = line_end + 1
        at_line_start = True


def _match_fence(text: str, start: int) -> Optional[Tuple[CodeBlock, int]]:
    """Match a fenced block whose opening marker is at start."""
    body_start = start + len(FENCE)

    tag_end = body_start
    while tag_end < len(text) and text[tag_end] in _TAG_CHARS:
        tag_end += 1

    language = UNKNOWN_LANGUAGE
    if tag_end > body_start and text.startswith("\n", tag_end):
        language = text[body_start:tag_end].lower()
        body_start = tag_end + 1

    close = text.find(FENCE, body_start)
    if close == -1:
        return None

    return CodeBlock(language=language, code=text[body_start:close].strip()), close + len(FENCE)


def _match_indented_fence(text: str, start: int, line_end: int) -> Optional[Tuple[CodeBlock, int]]:
    """Match a fenced block opened after leading indentation (e.g. inside a list item)."""
    marker = start
    while marker < line_end and text[marker] in _INDENT_CHARS:
        marker += 1
    if not text.startswith(FENCE, marker):
        return None
    return _match_fence(text, marker)


def _match_indented(text: str, start: int) -> Tuple[Optional[CodeBlock], int]:
    """Consume consecutive indented lines starting at start."""
    length = len(text)
    pos = start
    while pos < length and text[pos] in _INDENT_CHARS:
        line_end = text.find("\n", pos)
        pos = length if line_end == -1 else line_end + 1

    code = text[start:pos].strip()
    if not code:
        # Whitespace-only lines are not code
        return None, pos
    return CodeBlock(language=UNKNOWN_LANGUAGE, code=code), pos


__all__ = ["extract_code_blocks", "scan_code_blocks", "UNKNOWN_LANGUAGE"]
