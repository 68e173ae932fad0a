"""CLI entry point: start one MCP tool server."""

import argparse
from typing import Literal, Optional, Sequence, cast

from metis_mcp_core.utils.config import get_settings
from metis_mcp_core.utils.logger import setup_logger

SERVERS = ("database", "vector-store", "document", "llm")


def create_server(name: str):
    """Build the FastMCP server for a service name, configured from settings."""
    from metis_mcp_core.tools import SERVER_FACTORIES

    factory = SERVER_FACTORIES.get(name)
    if factory is None:
        raise ValueError(f"Unknown server: {name}")
    return factory(get_settings())


def serve(name: str, transport: str = "stdio") -> None:
    """Start a tool server.

    Args:
        name: One of SERVERS
        transport: Transport protocol (stdio or sse)
    """
    settings = get_settings()
    logger = setup_logger(level="DEBUG" if settings.debug else settings.log_level)

    logger.info(f"Serving {name} via {transport}")
    mcp = create_server(name)
    mcp.run(transport=cast(Literal["stdio", "sse", "streamable-http"], transport))


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="metis-mcp",
        description="Metis MCP tool servers",
    )
    parser.add_argument("server", choices=SERVERS, help="Tool server to start")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport protocol (default: stdio)",
    )

    args = parser.parse_args(argv)
    serve(args.server, args.transport)


if __name__ == "__main__":
    main()
