"""Tests for document structure analysis."""

import pytest

from metis_mcp_core.errors import InvalidArgumentError, PatternLimitError
from metis_mcp_core.extractors.structure import analyze_structure
from metis_mcp_core.models.common import Heading


def test_headings_and_paragraphs():
    report = analyze_structure("# Title\n\nSome text\n\n## Sub")

    assert report.headings == (
        Heading(level=1, text="Title", position=0),
        Heading(level=2, text="Sub", position=20),
    )
    assert report.paragraph_count == 3
    assert report.total_length == 26
    assert report.word_count == 6


def test_heading_levels():
    text = "# a\n## b\n### c\n#### d\n##### e\n###### f\n####### g"
    report = analyze_structure(text)
    assert [h.level for h in report.headings] == [1, 2, 3, 4, 5, 6]


def test_heading_requires_space_and_text():
    report = analyze_structure("#hashtag\n#   \n#\tTabbed title  ")
    assert [(h.level, h.text) for h in report.headings] == [(1, "Tabbed title")]


def test_heading_position_with_crlf():
    report = analyze_structure("intro\r\n## Next\r\n")
    assert report.headings == (Heading(level=2, text="Next", position=7),)


def test_list_items():
    text = "- one\n* two\n  + three\n-not a bullet\n1. first\n22. second\n3.missing space"
    report = analyze_structure(text)
    assert report.bullet_list_item_count == 3
    assert report.numbered_list_item_count == 2


def test_table_rows():
    text = "| a | b |\n|---|---|\n| 1 | 2 |  \n not | a row |\n||"
    report = analyze_structure(text)
    assert report.table_row_count == 3


def test_paragraphs_are_separated_by_blank_lines():
    text = "line one\nline two\n\n   \nnext paragraph\n\n\nlast"
    assert analyze_structure(text).paragraph_count == 3


def test_empty_text():
    report = analyze_structure("")
    assert report.headings == ()
    assert report.paragraph_count == 0
    assert report.total_length == 0
    assert report.word_count == 0


def test_word_count_uses_whitespace_runs():
    assert analyze_structure("  alpha\tbeta\n\ngamma  ").word_count == 3


def test_to_dict_uses_wire_names():
    result = analyze_structure("# T\n\n- item\n1. step\n| x |").to_dict()
    assert result == {
        "headings": [{"level": 1, "text": "T", "position": 0}],
        "paragraphCount": 2,
        "bulletListItemCount": 1,
        "numberedListItemCount": 1,
        "tableRowCount": 1,
        "totalLength": 25,
        "wordCount": 9,
    }


def test_heading_limit():
    text = "\n".join(f"# h{i}" for i in range(4))
    assert len(analyze_structure(text, max_headings=4).headings) == 4
    with pytest.raises(PatternLimitError):
        analyze_structure(text, max_headings=3)


def test_missing_text():
    with pytest.raises(InvalidArgumentError):
        analyze_structure(None)


def test_word_count_example():
    assert analyze_structure("one  two\nthree").word_count == 3


def test_separator_rows_count_as_table_rows():
    assert analyze_structure("| a | b |\n|---|---|\n| a | b |").table_row_count == 3


def test_analysis_is_repeatable():
    text = "# Title\n\n- a\n1. b\n| x | y |\n\nBody text"
    assert analyze_structure(text) == analyze_structure(text)
