"""
Common utilities module.

Provides shared utilities:
- Configuration (Pydantic Settings-based)
- Logging (structured logging with secret masking)
"""

from metis_mcp_core.utils.config import (
    DocumentConfig,
    DatabaseConfig,
    VectorStoreConfig,
    LLMConfig,
    MetisSettings,
    get_settings,
    load_config_from_dict
)
from metis_mcp_core.utils.logger import get_logger, setup_logger

__all__ = [
    # Config
    "DocumentConfig",
    "DatabaseConfig",
    "VectorStoreConfig",
    "LLMConfig",
    "MetisSettings",
    "get_settings",
    "load_config_from_dict",
    # Logging
    "get_logger",
    "setup_logger",
]
