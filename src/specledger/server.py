"""
MCP server entry point for specledger.

Builds a FastMCP app exposing the spec document tools. Configuration is
resolved once here and handed to the tool registrations.
"""

import logging
from typing import Optional

from mcp.server.fastmcp import FastMCP

from specledger.config import EngineConfig
from specledger.tools import register_spec_tools

logger = logging.getLogger(__name__)


def create_server(config: Optional[EngineConfig] = None) -> FastMCP:
    """
    Create the FastMCP server with all specledger tools registered.

    Args:
        config: Engine configuration; loaded from the environment when omitted
    """
    config = config or EngineConfig.from_env()
    mcp = FastMCP(config.server_name)
    register_spec_tools(mcp, config)
    logger.info(
        "Created %s %s serving specs from %s",
        config.server_name,
        config.server_version,
        config.specs_dir,
    )
    return mcp


def main() -> None:
    """Run the server over stdio."""
    config = EngineConfig.from_env()
    config.setup_logging()
    create_server(config).run()


if __name__ == "__main__":
    main()
