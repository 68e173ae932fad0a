"""Tests for fenced and indented code block extraction."""

import pytest

from metis_mcp_core.errors import InvalidArgumentError, PatternLimitError
from metis_mcp_core.extractors.code import extract_code_blocks
from metis_mcp_core.models.common import CodeBlock


def test_fenced_block_with_language():
    blocks = extract_code_blocks("Intro\n```python\nprint('hi')\n```\nOutro")
    assert blocks == [CodeBlock(language="python", code="print('hi')")]


def test_language_tag_is_lowercased():
    blocks = extract_code_blocks("```JavaScript\nconsole.log(1)\n```")
    assert blocks[0].language == "javascript"


def test_fenced_block_without_language():
    blocks = extract_code_blocks("```\nplain code\n```")
    assert blocks == [CodeBlock(language="unknown", code="plain code")]


def test_tag_not_followed_by_newline_is_code():
    blocks = extract_code_blocks("```x = 1```")
    assert blocks == [CodeBlock(language="unknown", code="x = 1")]


def test_indented_block():
    text = "Example:\n\n    def f():\n        return 1\n\nDone."
    blocks = extract_code_blocks(text)
    assert blocks == [CodeBlock(language="unknown", code="def f():\n        return 1")]


def test_tab_indented_block_at_end_of_text():
    blocks = extract_code_blocks("Run:\n\tmake all")
    assert blocks == [CodeBlock(language="unknown", code="make all")]


def test_whitespace_only_lines_are_not_code():
    assert extract_code_blocks("text\n   \n\t\nmore text") == []


def test_blocks_in_document_order():
    text = (
        "```js\nlet a = 1;\n```\n"
        "\n"
        "    indented()\n"
        "\n"
        "```python\nb = 2\n```"
    )
    blocks = extract_code_blocks(text)
    assert [(b.language, b.code) for b in blocks] == [
        ("js", "let a = 1;"),
        ("unknown", "indented()"),
        ("python", "b = 2"),
    ]


def test_fence_in_middle_of_line():
    blocks = extract_code_blocks("Use ```sh\nls -la\n``` to list files")
    assert blocks == [CodeBlock(language="sh", code="ls -la")]


def test_unterminated_fence_is_ignored():
    assert extract_code_blocks("```python\nprint('never closed')") == []


def test_language_filter_is_case_insensitive():
    text = "```Python\na = 1\n```\n```js\nb = 2\n```"
    blocks = extract_code_blocks(text, language="PYTHON")
    assert blocks == [CodeBlock(language="python", code="a = 1")]


def test_empty_filter_keeps_everything():
    text = "```python\na = 1\n```\n```js\nb = 2\n```"
    assert len(extract_code_blocks(text, language="")) == 2
    assert len(extract_code_blocks(text, language=None)) == 2


def test_no_code():
    assert extract_code_blocks("Just prose.\nNothing else.") == []
    assert extract_code_blocks("") == []


def test_block_limit():
    text = "\n".join("```\nx\n```" for _ in range(5))
    assert len(extract_code_blocks(text, max_blocks=5)) == 5
    with pytest.raises(PatternLimitError):
        extract_code_blocks(text, max_blocks=4)


def test_missing_text():
    with pytest.raises(InvalidArgumentError):
        extract_code_blocks(None)


def test_to_dict():
    block = extract_code_blocks("```go\nfmt.Println()\n```")[0]
    assert block.to_dict() == {"language": "go", "code": "fmt.Println()"}


def test_js_example():
    assert extract_code_blocks("```js\nconsole.log(1)\n```") == [CodeBlock(language="js", code="console.log(1)")]


def test_fence_inside_list_item():
    text = "1. Install:\n  ```python\n  x = 1\n  ```\n2. Done"
    assert extract_code_blocks(text, language="python") == [CodeBlock(language="python", code="x = 1")]


def test_unterminated_indented_fence_is_indented_code():
    blocks = extract_code_blocks("Intro\n  ```python\n  x = 1")
    assert blocks == [CodeBlock(language="unknown", code="```python\n  x = 1")]
