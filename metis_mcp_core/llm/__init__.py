"""
LLM integration module.

Provides provider API clients:
- Text generation for chat and completion models (OpenAI, Anthropic)
- Prompt templates with {variable} placeholders
- Embeddings (OpenAI, Cohere, local sentence-transformers)
"""

from metis_mcp_core.llm.client import LLMClient, LLMResponse, ModelHandle, SUPPORTED_PROVIDERS
from metis_mcp_core.llm.embeddings import EmbeddingsClient, EMBEDDING_PROVIDERS
from metis_mcp_core.llm.prompts import PromptTemplate, render_template

__all__ = [
    "LLMClient",
    "LLMResponse",
    "ModelHandle",
    "SUPPORTED_PROVIDERS",
    "EmbeddingsClient",
    "EMBEDDING_PROVIDERS",
    "PromptTemplate",
    "render_template",
]
