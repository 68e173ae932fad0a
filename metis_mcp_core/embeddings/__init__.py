"""
Local embedding models.

sentence-transformers wrapper used by the "local" embedding provider.
Importing this package loads torch; the LLM layer imports it lazily.
"""

from metis_mcp_core.embeddings.sentence_transformers import EmbeddingModel

__all__ = ["EmbeddingModel"]
