"""Tests for document loading (TXT, MD, DOCX, PDF)."""

import fitz
import pytest
from docx import Document

from metis_mcp_core.errors import InvalidArgumentError
from metis_mcp_core.extractors.loader import load_document
from metis_mcp_core.utils.config import DocumentConfig


def test_load_text_file(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("Hello\n\nWorld", encoding="utf-8")

    document = load_document(path)

    assert document.page_content == "Hello\n\nWorld"
    assert document.file_name == "notes.txt"
    assert document.file_type == "txt"
    assert document.metadata == {"source": str(path)}


def test_load_markdown_file_to_dict(tmp_path):
    path = tmp_path / "README.md"
    path.write_text("# Title\n", encoding="utf-8")

    result = load_document(str(path)).to_dict()

    assert result == {
        "pageContent": "# Title\n",
        "metadata": {"source": str(path)},
        "fileName": "README.md",
        "fileType": "md",
    }


def test_load_docx(tmp_path):
    path = tmp_path / "report.docx"
    doc = Document()
    doc.core_properties.title = "Quarterly report"
    doc.add_paragraph("First paragraph")
    doc.add_paragraph("Second paragraph")
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "name"
    table.cell(0, 1).text = "value"
    table.cell(1, 0).text = "a"
    table.cell(1, 1).text = "1"
    doc.save(str(path))

    document = load_document(path)

    assert document.file_type == "docx"
    assert document.metadata["title"] == "Quarterly report"
    assert "First paragraph\nSecond paragraph" in document.page_content
    assert "| name | value |\n| --- | --- |\n| a | 1 |" in document.page_content


def test_load_pdf(tmp_path):
    path = tmp_path / "sheet.pdf"
    pdf = fitz.open()
    for text in ("Page one text", "Page two text"):
        page = pdf.new_page()
        page.insert_text((72, 72), text)
    pdf.save(str(path))
    pdf.close()

    document = load_document(path)

    assert document.file_type == "pdf"
    assert document.metadata["source"] == str(path)
    assert document.metadata["total_pages"] == 2
    assert document.page_content == "Page one text\n\nPage two text"


def test_missing_file(tmp_path):
    path = tmp_path / "missing.txt"
    with pytest.raises(FileNotFoundError, match="File not found"):
        load_document(path)


def test_unsupported_type(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text("a,b\n1,2\n")
    with pytest.raises(InvalidArgumentError, match=r"Unsupported file type: \.csv"):
        load_document(path)


def test_empty_path():
    with pytest.raises(InvalidArgumentError):
        load_document("")


def test_workspace_restriction(tmp_path):
    workspace = tmp_path / "workspace"
    workspace.mkdir()
    outside = tmp_path / "outside.txt"
    outside.write_text("secret")
    inside = workspace / "inside.txt"
    inside.write_text("ok")

    config = DocumentConfig(workspace_dir=workspace)

    assert load_document(inside, config).page_content == "ok"
    with pytest.raises(InvalidArgumentError, match="outside the workspace"):
        load_document(outside, config)


def test_allowed_types_from_config(tmp_path):
    path = tmp_path / "notes.md"
    path.write_text("# Notes")

    config = DocumentConfig(allowed_file_types=[".txt"])
    with pytest.raises(InvalidArgumentError, match="Unsupported file type"):
        load_document(path, config)


def test_size_limit(tmp_path):
    path = tmp_path / "big.txt"
    path.write_bytes(b"x" * (2 * 1024 * 1024))

    with pytest.raises(InvalidArgumentError, match="exceeds 1 MB"):
        load_document(path, DocumentConfig(max_file_size_mb=1))
    assert len(load_document(path, DocumentConfig(max_file_size_mb=3)).page_content) == 2 * 1024 * 1024
