"""
Tool result envelope.

Every tool returns ``{"success": True, **payload}`` or
``{"success": False, "error": message}``. Operations raise; ``tool_handler``
is the only place exceptions are turned into error results.
"""

import functools
import inspect
from typing import Any, Awaitable, Callable, Dict

from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

ToolResult = Dict[str, Any]


def tool_success(**payload: Any) -> ToolResult:
    """Build a successful tool result."""
    return {"success": True, **payload}


def tool_error(error: Any) -> ToolResult:
    """Build a failed tool result from an exception or message."""
    return {"success": False, "error": str(error)}


def tool_handler(func: Callable[..., Any]) -> Callable[..., Awaitable[ToolResult]]:
    """
    Wrap an operation returning a payload dict into an enveloped async tool.

    The wrapped function may be sync or async. Its signature is preserved so
    FastMCP can still derive the parameter schema from it.

    Example:
        >>> @tool_handler
        ... async def list_tables(schema: str = "public"):
        ...     return {"tables": await client.list_tables(schema)}
    """
    @functools.wraps(func)
    async def wrapper(*args, **kwargs) -> ToolResult:
        try:
            payload = func(*args, **kwargs)
            if inspect.isawaitable(payload):
                payload = await payload
        except Exception as e:
            logger.error(f"{func.__name__} failed: {e}")
            return tool_error(e)

        return tool_success(**(payload or {}))

    return wrapper


__all__ = ["ToolResult", "tool_success", "tool_error", "tool_handler"]
