"""
Document structure analysis.

Scans markdown-style text line by line and reports headings, paragraphs,
bullet and numbered list items, and table rows. Every rule is a small
anchored pattern applied to a single line.
"""

import re
from typing import List

from metis_mcp_core.errors import InvalidArgumentError, PatternLimitError
from metis_mcp_core.models.common import Heading, StructureReport
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

HEADING_PATTERN = re.compile(r'(#{1,6})\s+(\S.*)')          # "## Title"
BULLET_ITEM_PATTERN = re.compile(r'\s*[-*+]\s+\S')          # "- item", "  * item"
NUMBERED_ITEM_PATTERN = re.compile(r'\s*[0-9]+\.\s+\S')     # "1. item"
TABLE_ROW_PATTERN = re.compile(r'\|.+\|\s*')                # "| a | b |"


def analyze_structure(text: str, max_headings: int = 10_000) -> StructureReport:
    """
    Analyze the structure of a document.

    Args:
        text: Document text
        max_headings: Upper bound on headings collected before giving up

    Returns:
        StructureReport for the text

    Raises:
        InvalidArgumentError: If text is missing
        PatternLimitError: If the text has more than max_headings headings

    Example:
        >>> report = analyze_structure("# Title\\n\\nSome text\\n\\n## Sub")
        >>> [(h.level, h.text, h.position) for h in report.headings]
        [(1, 'Title', 0), (2, 'Sub', 20)]
        >>> report.paragraph_count
        3
    """
    if text is None:
        raise InvalidArgumentError("text is required")

    headings: List[Heading] = []
    paragraph_count = 0
    bullet_items = 0
    numbered_items = 0
    table_rows = 0

    in_paragraph = False
    offset = 0

    for raw_line in text.split("\n"):
        line = raw_line[:-1] if raw_line.endswith("\r") else raw_line

        # Paragraphs are runs of non-blank lines
        if line.strip():
            if not in_paragraph:
                paragraph_count += 1
                in_paragraph = True
        else:
            in_paragraph = False

        heading_match = HEADING_PATTERN.match(line)
        if heading_match:
            headings.append(Heading(
                level=len(heading_match.group(1)),
                text=heading_match.group(2).strip(),
                position=offset
            ))
            if len(headings) > max_headings:
                raise PatternLimitError(f"Found more than {max_headings} headings")

        if BULLET_ITEM_PATTERN.match(line):
            bullet_items += 1
        elif NUMBERED_ITEM_PATTERN.match(line):
            numbered_items += 1

        if TABLE_ROW_PATTERN.fullmatch(line):
            table_rows += 1

        offset += len(raw_line) + 1

    report = StructureReport(
        headings=tuple(headings),
        paragraph_count=paragraph_count,
        bullet_list_item_count=bullet_items,
        numbered_list_item_count=numbered_items,
        table_row_count=table_rows,
        total_length=len(text),
        word_count=len(text.split())
    )

    logger.debug(
        f"Structure: {len(headings)} headings, {paragraph_count} paragraphs, "
        f"{table_rows} table rows, {report.word_count} words"
    )
    return report


__all__ = ["analyze_structure"]
