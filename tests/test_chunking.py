"""Tests for recursive character chunking."""

import pytest

from metis_mcp_core.errors import InvalidArgumentError
from metis_mcp_core.extractors.chunking import chunk_text, merge_splits, split_on_separator


def texts(chunks):
    return [chunk.text for chunk in chunks]


class TestChunkText:

    def test_words_without_overlap(self):
        chunks = chunk_text("one two three four five", chunk_size=10, chunk_overlap=0)
        assert texts(chunks) == ["one two", "three four", "five"]

    def test_words_with_overlap(self):
        chunks = chunk_text("one two three four five", chunk_size=10, chunk_overlap=4)
        assert texts(chunks) == ["one two", "two three", "four five"]

    def test_character_fallback_with_overlap(self):
        chunks = chunk_text("abcdefghij", chunk_size=4, chunk_overlap=1)
        assert texts(chunks) == ["abcd", "defg", "ghij"]

    def test_long_word_is_split_into_characters(self):
        chunks = chunk_text("hi abcdefghijkl", chunk_size=5, chunk_overlap=0)
        assert texts(chunks) == ["hi", "abcde", "fghij", "kl"]

    def test_paragraphs_are_preferred(self):
        chunks = chunk_text("para one\n\npara two", chunk_size=12, chunk_overlap=0)
        assert texts(chunks) == ["para one", "para two"]

    def test_short_text_is_one_chunk(self):
        chunks = chunk_text("Short document.", chunk_size=1000, chunk_overlap=200)
        assert texts(chunks) == ["Short document."]

    def test_empty_and_blank_text(self):
        assert chunk_text("", chunk_size=10, chunk_overlap=0) == []
        assert chunk_text("   \n\n  ", chunk_size=10, chunk_overlap=0) == []

    def test_chunks_respect_size(self):
        text = " ".join(f"word{i}" for i in range(200))
        chunks = chunk_text(text, chunk_size=50, chunk_overlap=10)
        assert chunks
        assert all(len(chunk.text) <= 50 for chunk in chunks)

    def test_every_word_is_covered_in_order(self):
        words = [f"w{i}" for i in range(100)]
        chunks = chunk_text(" ".join(words), chunk_size=30, chunk_overlap=0)
        assert " ".join(texts(chunks)).split() == words

    def test_deterministic(self):
        text = "alpha beta\n\ngamma delta epsilon\nzeta eta theta"
        first = chunk_text(text, chunk_size=15, chunk_overlap=5)
        second = chunk_text(text, chunk_size=15, chunk_overlap=5)
        assert first == second

    def test_metadata_copied_to_every_chunk(self):
        metadata = {"source": "notes.md", "tags": ["a"]}
        chunks = chunk_text("one two three four five", chunk_size=10, chunk_overlap=0, metadata=metadata)

        assert all(chunk.metadata == metadata for chunk in chunks)
        # Each chunk owns its copy
        chunks[0].metadata["tags"].append("b")
        assert chunks[1].metadata["tags"] == ["a"]
        assert metadata["tags"] == ["a"]

    def test_default_metadata_is_empty(self):
        chunks = chunk_text("hello", chunk_size=10, chunk_overlap=0)
        assert chunks[0].metadata == {}
        assert chunks[0].to_dict() == {"text": "hello", "metadata": {}}


class TestChunkValidation:

    @pytest.mark.parametrize("size, overlap", [(0, 0), (-5, 0), (10, -1), (10, 10), (10, 20)])
    def test_invalid_sizes(self, size, overlap):
        with pytest.raises(InvalidArgumentError):
            chunk_text("some text", chunk_size=size, chunk_overlap=overlap)

    def test_missing_text(self):
        with pytest.raises(InvalidArgumentError):
            chunk_text(None)

    def test_invalid_argument_is_a_value_error(self):
        with pytest.raises(ValueError):
            chunk_text("text", chunk_size=0)


class TestHelpers:

    def test_split_on_separator_drops_empty_pieces(self):
        assert split_on_separator("a  b", " ") == ["a", "b"]
        assert split_on_separator("abc", "") == ["a", "b", "c"]

    def test_merge_splits(self):
        assert merge_splits(["aa", "bb", "cc"], "-", 5, 0) == ["aa-bb", "cc"]
