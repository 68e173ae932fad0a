"""
Embedding generation across providers.

- openai: POST {openai_base_url}/embeddings
- cohere: POST {cohere_base_url}/embed
- local: sentence-transformers model loaded in-process (no API key)
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional

import httpx

from metis_mcp_core.errors import InvalidArgumentError
from metis_mcp_core.utils.config import LLMConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

EMBEDDING_PROVIDERS = ("openai", "cohere", "local")

DEFAULT_EMBEDDING_MODELS = {
    "openai": "text-embedding-ada-002",
    "cohere": "embed-english-v3.0",
    "local": "all-MiniLM-L6-v2",
}


def _default_local_factory(model_name: str, device: Optional[str] = None):
    # Deferred: importing sentence-transformers pulls in torch
    from metis_mcp_core.embeddings import EmbeddingModel
    return EmbeddingModel(model_name=model_name, device=device)


class EmbeddingsClient:
    """
    Generate embeddings with a remote provider or a local model.

    Example:
        >>> client = EmbeddingsClient(LLMConfig())
        >>> vectors = await client.embed("local", ["hello", "world"])
        >>> len(vectors), len(vectors[0])
        (2, 384)
    """

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        local_model_factory: Optional[Callable[..., Any]] = None
    ):
        self.config = config or LLMConfig()
        self.client = http_client
        self._owns_client = http_client is None
        self.local_model_factory = local_model_factory or _default_local_factory
        self._local_models: Dict[str, Any] = {}

    def _http(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.config.timeout, connect=5.0),
                verify=self.config.verify_ssl
            )
            self._owns_client = True
        return self.client

    async def aclose(self) -> None:
        if self.client is not None and self._owns_client:
            await self.client.aclose()
            self.client = None

    async def embed(
        self,
        provider: str,
        texts: List[str],
        model_name: Optional[str] = None,
        api_key: Optional[str] = None
    ) -> List[List[float]]:
        """
        Embed texts with the given provider.

        Args:
            provider: "openai", "cohere" or "local"
            texts: Non-empty list of strings
            model_name: Provider model (provider default if None)
            api_key: Required for openai and cohere

        Returns:
            One embedding per input text, in input order
        """
        if provider not in EMBEDDING_PROVIDERS:
            raise InvalidArgumentError(f"Unsupported provider: {provider}")
        if not texts:
            raise InvalidArgumentError("texts must be a non-empty list")

        model_name = model_name or DEFAULT_EMBEDDING_MODELS[provider]

        if provider == "local":
            return await self._embed_local(model_name, texts)

        if not api_key:
            raise InvalidArgumentError(f"apiKey is required for provider {provider}")

        if provider == "openai":
            return await self._embed_openai(model_name, texts, api_key)
        return await self._embed_cohere(model_name, texts, api_key)

    async def _post(self, url: str, payload: Dict[str, Any], api_key: str) -> Dict[str, Any]:
        logger.debug(f"Sending embedding request: {url}")

        response = await self._http().post(
            url,
            json=payload,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json"
            }
        )
        response.raise_for_status()
        return response.json()

    async def _embed_openai(self, model_name: str, texts: List[str], api_key: str) -> List[List[float]]:
        result = await self._post(
            f"{self.config.openai_base_url}/embeddings",
            {"model": model_name, "input": texts},
            api_key
        )
        data = sorted(result.get("data", []), key=lambda item: item.get("index", 0))
        return [item["embedding"] for item in data]

    async def _embed_cohere(self, model_name: str, texts: List[str], api_key: str) -> List[List[float]]:
        result = await self._post(
            f"{self.config.cohere_base_url}/embed",
            {"model": model_name, "texts": texts, "input_type": "search_document"},
            api_key
        )
        return result.get("embeddings", [])

    async def _embed_local(self, model_name: str, texts: List[str]) -> List[List[float]]:
        model = self._local_models.get(model_name)
        if model is None:
            model = await asyncio.to_thread(
                self.local_model_factory, model_name, self.config.local_embedding_device
            )
            self._local_models[model_name] = model

        vectors = await asyncio.to_thread(model.embed, texts)
        return [list(map(float, row)) for row in vectors]


__all__ = ["EmbeddingsClient", "EMBEDDING_PROVIDERS", "DEFAULT_EMBEDDING_MODELS"]
