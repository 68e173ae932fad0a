"""
Configuration management using Pydantic Settings.

Provides one configuration class per tool service. Each supports environment
variables (with its own prefix), .env files, and programmatic configuration.
Values here are defaults only: tool parameters always take precedence.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentConfig(BaseSettings):
    """Configuration for document loading, chunking and text analysis."""

    # Chunking defaults
    chunk_size: int = Field(default=1000, ge=1, description="Maximum chunk size in characters")
    chunk_overlap: int = Field(default=200, ge=0, description="Overlap between consecutive chunks")

    # Scan limits
    max_scan_matches: int = Field(
        default=10_000,
        ge=1,
        description="Maximum code blocks or headings collected in one scan"
    )

    # Loader restrictions
    allowed_file_types: list[str] = Field(
        default=[".pdf", ".docx", ".txt", ".md"],
        description="File extensions accepted by load_document"
    )
    max_file_size_mb: int = Field(default=50, ge=1, description="Max file size in MB")
    workspace_dir: Optional[Path] = Field(
        None,
        description="If set, load_document only opens files inside this directory"
    )

    model_config = SettingsConfigDict(
        env_prefix="DOCUMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )


class DatabaseConfig(BaseSettings):
    """Configuration for the PostgreSQL connection pool."""

    port: int = Field(default=5432, description="Default server port")
    default_schema: str = Field(default="public", description="Schema used when none is given")
    min_pool_size: int = Field(default=1, ge=0, description="Minimum pooled connections")
    max_pool_size: int = Field(default=10, ge=1, description="Maximum pooled connections")
    command_timeout: Optional[float] = Field(default=60.0, description="Per-statement timeout (seconds)")

    model_config = SettingsConfigDict(
        env_prefix="DATABASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )


class VectorStoreConfig(BaseSettings):
    """Configuration for the ChromaDB HTTP client."""

    port: int = Field(default=8000, description="Default Chroma server port")
    ssl: bool = Field(default=False, description="Connect over HTTPS")
    n_results: int = Field(default=10, ge=1, description="Default results per query text")
    anonymized_telemetry: bool = Field(default=False, description="Chroma client telemetry")

    model_config = SettingsConfigDict(
        env_prefix="VECTOR_STORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )


class LLMConfig(BaseSettings):
    """Configuration for LLM provider APIs."""

    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Default temperature")
    max_tokens: int = Field(default=1000, ge=1, description="Default max tokens in response")
    timeout: int = Field(default=60, ge=1, description="Request timeout (seconds)")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")

    # Provider endpoints
    openai_base_url: str = Field(default="https://api.openai.com/v1", description="OpenAI API base URL")
    anthropic_base_url: str = Field(default="https://api.anthropic.com/v1", description="Anthropic API base URL")
    anthropic_version: str = Field(default="2023-06-01", description="anthropic-version header")
    cohere_base_url: str = Field(default="https://api.cohere.ai/v1", description="Cohere API base URL")

    # Local embeddings
    local_embedding_device: Optional[str] = Field(
        None,
        description="Device for local embeddings: 'cpu', 'cuda', 'mps' (auto-detect if None)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LLM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )


class MetisSettings(BaseSettings):
    """
    Unified configuration for metis-mcp-core.

    Combines all sub-configurations into a single settings object.
    """

    document: DocumentConfig = Field(default_factory=DocumentConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    vector_store: VectorStoreConfig = Field(default_factory=VectorStoreConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)

    # General settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )


# Singleton instance
_settings: Optional[MetisSettings] = None


def get_settings() -> MetisSettings:
    """Get global settings instance (singleton pattern)."""
    global _settings
    if _settings is None:
        _settings = MetisSettings()
    return _settings


def load_config_from_dict(config_dict: Dict[str, Any]) -> MetisSettings:
    """
    Load configuration from a nested dictionary.

    Keys: "document", "database", "vector_store", "llm", plus the
    top-level "debug" and "log_level".
    """
    return MetisSettings(
        document=DocumentConfig(**config_dict.get("document", {})),
        database=DatabaseConfig(**config_dict.get("database", {})),
        vector_store=VectorStoreConfig(**config_dict.get("vector_store", {})),
        llm=LLMConfig(**config_dict.get("llm", {})),
        debug=config_dict.get("debug", False),
        log_level=config_dict.get("log_level", "INFO"),
    )
