"""
LLM client for provider API integration.

Calls the OpenAI and Anthropic REST APIs with httpx:
- Chat models: OpenAI chat completions, Anthropic messages
- Completion models: OpenAI completions, Anthropic legacy text completions
- Per-call temperature / max token overrides
- Secret masking in logs
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx

from metis_mcp_core.errors import InvalidArgumentError
from metis_mcp_core.utils.config import LLMConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

SUPPORTED_PROVIDERS = ("openai", "anthropic")


@dataclass
class ModelHandle:
    """A registered model: provider, model name, credentials and defaults."""
    model_id: str
    provider: str
    model_name: str
    api_key: str = field(repr=False)
    temperature: float = 0.7
    max_tokens: int = 1000
    is_chat_model: bool = True

    def __post_init__(self):
        if self.provider not in SUPPORTED_PROVIDERS:
            raise InvalidArgumentError(f"Unsupported provider: {self.provider}")


@dataclass
class LLMResponse:
    """Response from an LLM provider."""
    content: str
    model: str
    input_tokens: int = 0
    output_tokens: int = 0
    metadata: Optional[Dict[str, Any]] = None


class LLMClient:
    """
    Async client for LLM provider APIs.

    Example:
        >>> handle = ModelHandle("gpt", "openai", "gpt-4o-mini", api_key="sk-...")
        >>> async with LLMClient(LLMConfig()) as client:
        ...     response = await client.generate(handle, "Summarize RAG in one line")
        ...     print(response.content)
    """

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Initialize LLM client.

        Args:
            config: LLMConfig with endpoints and timeouts (defaults if None)
            http_client: Shared httpx.AsyncClient (created on demand if None)
        """
        self.config = config or LLMConfig()
        self.client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self):
        """Async context manager entry."""
        self._http()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.aclose()

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

    async def generate(
        self,
        handle: ModelHandle,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None
    ) -> LLMResponse:
        """
        Generate text for a single user prompt.

        Args:
            handle: Registered model
            prompt: Prompt text (sent as one user message to chat models)
            temperature: Override the model's temperature for this call
            max_tokens: Override the model's max tokens for this call

        Returns:
            LLMResponse with the generated text and token usage
        """
        temperature = handle.temperature if temperature is None else temperature
        max_tokens = handle.max_tokens if max_tokens is None else max_tokens

        if handle.provider == "openai":
            if handle.is_chat_model:
                return await self._openai_chat(handle, prompt, temperature, max_tokens)
            return await self._openai_completion(handle, prompt, temperature, max_tokens)

        if handle.provider == "anthropic":
            if handle.is_chat_model:
                return await self._anthropic_messages(handle, prompt, temperature, max_tokens)
            return await self._anthropic_completion(handle, prompt, temperature, max_tokens)

        raise InvalidArgumentError(f"Unsupported provider: {handle.provider}")

    async def _post(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> Dict[str, Any]:
        logger.debug(f"Sending request to LLM API: {url}")

        response = await self._http().post(url, json=payload, headers=headers)
        response.raise_for_status()
        return response.json()

    def _openai_headers(self, handle: ModelHandle) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {handle.api_key}",
            "Content-Type": "application/json"
        }

    def _anthropic_headers(self, handle: ModelHandle) -> Dict[str, str]:
        return {
            "x-api-key": handle.api_key,
            "anthropic-version": self.config.anthropic_version,
            "Content-Type": "application/json"
        }

    async def _openai_chat(self, handle, prompt, temperature, max_tokens) -> LLMResponse:
        result = await self._post(
            f"{self.config.openai_base_url}/chat/completions",
            {
                "model": handle.model_name,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": temperature,
                "max_tokens": max_tokens
            },
            self._openai_headers(handle)
        )

        content = result.get("choices", [{}])[0].get("message", {}).get("content") or ""
        usage = result.get("usage", {})
        return LLMResponse(
            content=content,
            model=result.get("model", handle.model_name),
            input_tokens=usage.get("prompt_tokens", 0),
            output_tokens=usage.get("completion_tokens", 0),
            metadata={"temperature": temperature, "max_tokens": max_tokens}
        )

    async def _openai_completion(self, handle, prompt, temperature, max_tokens) -> LLMResponse:
        result = await self._post(
            f"{self.config.openai_base_url}/completions",
            {
                "model": handle.model_name,
                "prompt": prompt,
                "temperature": temperature,
                "max_tokens": max_tokens
            },
            self._openai_headers(handle)
        )

        content = result.get("choices", [{}])[0].get("text") or ""
        usage = result.get("usage", {})
        return LLMResponse(
            content=content,
            model=result.get("model", handle.model_name),
            input_tokens=usage.get("prompt_tokens", 0),
            output_tokens=usage.get("completion_tokens", 0),
            metadata={"temperature": temperature, "max_tokens": max_tokens}
        )

    async def _anthropic_messages(self, handle, prompt, temperature, max_tokens) -> LLMResponse:
        result = await self._post(
            f"{self.config.anthropic_base_url}/messages",
            {
                "model": handle.model_name,
                "messages": [{"role": "user", "content": prompt}],
                "temperature": temperature,
                "max_tokens": max_tokens
            },
            self._anthropic_headers(handle)
        )

        # Concatenate text blocks; tool-use blocks are ignored
        content = "".join(
            block.get("text", "")
            for block in result.get("content", [])
            if block.get("type") == "text"
        )
        usage = result.get("usage", {})
        return LLMResponse(
            content=content,
            model=result.get("model", handle.model_name),
            input_tokens=usage.get("input_tokens", 0),
            output_tokens=usage.get("output_tokens", 0),
            metadata={"temperature": temperature, "max_tokens": max_tokens}
        )

    async def _anthropic_completion(self, handle, prompt, temperature, max_tokens) -> LLMResponse:
        result = await self._post(
            f"{self.config.anthropic_base_url}/complete",
            {
                "model": handle.model_name,
                "prompt": f"\n\nHuman: {prompt}\n\nAssistant:",
                "temperature": temperature,
                "max_tokens_to_sample": max_tokens
            },
            self._anthropic_headers(handle)
        )

        return LLMResponse(
            content=result.get("completion", ""),
            model=result.get("model", handle.model_name),
            metadata={"temperature": temperature, "max_tokens": max_tokens}
        )


__all__ = ["LLMClient", "LLMResponse", "ModelHandle", "SUPPORTED_PROVIDERS"]
