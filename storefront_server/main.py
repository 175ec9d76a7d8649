# storefront_server/main.py
import logging

from fastmcp import FastMCP
from storefront_app.config import Settings
from storefront_app.di import build_container
from storefront_app.logging import configure_logging
from storefront_server.registry import build_tool_registry, register_into_fastmcp

logger = logging.getLogger(__name__)

def create_app(settings: Settings | None = None) -> FastMCP:
    """
    Build DI container, create FastMCP host, and register tools and resources.
    Keep the server (protocol) separate from tool/service logic.
    """
    container = build_container(settings)
    registry = build_tool_registry(container)

    mcp = FastMCP("storefront-api-mcp-server", version="0.1.0")
    register_into_fastmcp(mcp, registry, container)

    return mcp


def main() -> None:
    configure_logging()
    app = create_app()
    logger.info("Storefront API MCP server running on stdio")
    # stdio transport: client (agent/IDE) launches this process and speaks JSON-RPC on stdin/stdout
    app.run(transport="stdio")


if __name__ == "__main__":
    main()
