"""
llm-interaction-tool: registered models, text generation, prompt templates
and embeddings.

Models registered with init_llm_model live in the LLMContext for the life of
the server process.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Annotated, Any, AsyncIterator, Dict, List, Optional

import httpx
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from metis_mcp_core.errors import NotInitializedError
from metis_mcp_core.llm.client import LLMClient, ModelHandle
from metis_mcp_core.llm.embeddings import EmbeddingsClient
from metis_mcp_core.llm.prompts import PromptTemplate
from metis_mcp_core.tools.base import tool_handler
from metis_mcp_core.utils.config import LLMConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

SERVER_NAME = "llm-interaction-tool"


@dataclass
class LLMContext:
    """
    Per-server LLM state.

    Attributes:
        config: LLMConfig with endpoints, defaults and timeouts
        models: Registered models by id
        http_client: Shared httpx client (created on first use if None)
        local_model_factory: Factory for local embedding models (tests inject one)
    """
    config: LLMConfig = field(default_factory=LLMConfig)
    models: Dict[str, ModelHandle] = field(default_factory=dict)
    http_client: Optional[httpx.AsyncClient] = None
    local_model_factory: Optional[Any] = None
    _llm_client: Optional[LLMClient] = field(default=None, repr=False)
    _embeddings_client: Optional[EmbeddingsClient] = field(default=None, repr=False)

    def get_model(self, model_id: str) -> ModelHandle:
        handle = self.models.get(model_id)
        if handle is None:
            raise NotInitializedError(f"Model '{model_id}' not found")
        return handle

    @property
    def llm_client(self) -> LLMClient:
        if self._llm_client is None:
            self._llm_client = LLMClient(self.config, http_client=self.http_client)
        return self._llm_client

    @property
    def embeddings_client(self) -> EmbeddingsClient:
        if self._embeddings_client is None:
            self._embeddings_client = EmbeddingsClient(
                self.config,
                http_client=self.http_client,
                local_model_factory=self.local_model_factory
            )
        return self._embeddings_client

    async def aclose(self) -> None:
        if self._llm_client is not None:
            await self._llm_client.aclose()
        if self._embeddings_client is not None:
            await self._embeddings_client.aclose()


def _describe(handle: ModelHandle) -> Dict[str, Any]:
    return {"modelId": handle.model_id, "provider": handle.provider, "modelName": handle.model_name}


def init_llm_model(
    ctx: LLMContext,
    model_id: str,
    provider: str,
    model_name: str,
    api_key: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    is_chat_model: bool = True
) -> Dict[str, Any]:
    """Register (or replace) a model under model_id."""
    handle = ModelHandle(
        model_id=model_id,
        provider=provider,
        model_name=model_name,
        api_key=api_key,
        temperature=ctx.config.temperature if temperature is None else temperature,
        max_tokens=ctx.config.max_tokens if max_tokens is None else max_tokens,
        is_chat_model=is_chat_model
    )
    ctx.models[model_id] = handle

    logger.info(f"Registered {provider} model {model_name} as '{model_id}'")
    return {"message": f"Model '{model_id}' initialized", **_describe(handle)}


async def generate_text(
    ctx: LLMContext,
    model_id: str,
    prompt: str,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None
) -> Dict[str, Any]:
    handle = ctx.get_model(model_id)
    response = await ctx.llm_client.generate(handle, prompt, temperature=temperature, max_tokens=max_tokens)
    return {"text": response.content, **_describe(handle)}


async def use_prompt_template(
    ctx: LLMContext,
    model_id: str,
    template: str,
    variables: Dict[str, Any],
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None
) -> Dict[str, Any]:
    """Render the template with variables, then generate from the result."""
    handle = ctx.get_model(model_id)
    prompt = PromptTemplate(template).format(variables)
    response = await ctx.llm_client.generate(handle, prompt, temperature=temperature, max_tokens=max_tokens)
    return {"text": response.content, **_describe(handle)}


async def generate_embeddings(
    ctx: LLMContext,
    provider: str,
    texts: List[str],
    model_name: Optional[str] = None,
    api_key: Optional[str] = None
) -> Dict[str, Any]:
    embeddings = await ctx.embeddings_client.embed(provider, texts, model_name=model_name, api_key=api_key)
    return {
        "embeddings": embeddings,
        "count": len(embeddings),
        "dimensions": len(embeddings[0]) if embeddings else 0,
    }


def client_lifespan(ctx: LLMContext):
    """FastMCP lifespan that closes the provider HTTP clients on shutdown."""

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await ctx.aclose()

    return lifespan


def create_llm_server(context: Optional[LLMContext] = None) -> FastMCP:
    """
    Create the LLM interaction MCP server.

    Args:
        context: Shared LLMContext (a fresh one if None)

    Returns:
        Configured FastMCP server instance
    """
    ctx = context or LLMContext()
    mcp = FastMCP(name=SERVER_NAME, lifespan=client_lifespan(ctx))

    @mcp.tool(name="init_llm_model", description="Register an LLM model under an id")
    @tool_handler
    def init_llm_model_tool(
        modelId: Annotated[str, Field(description="Id used to refer to this model")],
        provider: Annotated[str, Field(description="Provider: openai or anthropic")],
        modelName: Annotated[str, Field(description="Provider model name")],
        apiKey: Annotated[str, Field(description="Provider API key")],
        temperature: Annotated[Optional[float], Field(description="Default sampling temperature")] = None,
        maxTokens: Annotated[Optional[int], Field(description="Default max tokens to generate")] = None,
        isChatModel: Annotated[bool, Field(description="Chat model (true) or completion model (false)")] = True,
    ):
        return init_llm_model(ctx, modelId, provider, modelName, apiKey, temperature, maxTokens, isChatModel)

    @mcp.tool(name="generate_text", description="Generate text from a prompt")
    @tool_handler
    async def generate_text_tool(
        modelId: Annotated[str, Field(description="Registered model id")],
        prompt: Annotated[str, Field(description="Prompt text")],
        temperature: Annotated[Optional[float], Field(description="Override temperature")] = None,
        maxTokens: Annotated[Optional[int], Field(description="Override max tokens")] = None,
    ):
        return await generate_text(ctx, modelId, prompt, temperature, maxTokens)

    @mcp.tool(name="use_prompt_template", description="Fill a {variable} prompt template and generate text")
    @tool_handler
    async def use_prompt_template_tool(
        modelId: Annotated[str, Field(description="Registered model id")],
        template: Annotated[str, Field(description="Prompt template with {variable} placeholders")],
        variables: Annotated[Dict[str, Any], Field(description="Values for the template variables")],
        temperature: Annotated[Optional[float], Field(description="Override temperature")] = None,
        maxTokens: Annotated[Optional[int], Field(description="Override max tokens")] = None,
    ):
        return await use_prompt_template(ctx, modelId, template, variables, temperature, maxTokens)

    @mcp.tool(name="generate_embeddings", description="Generate embeddings for texts")
    @tool_handler
    async def generate_embeddings_tool(
        provider: Annotated[str, Field(description="Provider: openai, cohere or local")],
        texts: Annotated[List[str], Field(description="Texts to embed")],
        modelName: Annotated[Optional[str], Field(description="Embedding model name")] = None,
        apiKey: Annotated[Optional[str], Field(description="Provider API key (not needed for local)")] = None,
    ):
        return await generate_embeddings(ctx, provider, texts, modelName, apiKey)

    return mcp


__all__ = [
    "LLMContext",
    "SERVER_NAME",
    "init_llm_model",
    "generate_text",
    "use_prompt_template",
    "generate_embeddings",
    "client_lifespan",
    "create_llm_server",
]
