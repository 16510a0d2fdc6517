"""
MCP server entry point.

Serves every registered Cronos analytics tool over the stdio transport.
Logs go to stderr; stdout belongs to the protocol.
"""

import asyncio
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

import yaml
from loguru import logger
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from cronosmcp import __version__
from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.config import (
    NETWORK_CONFIGS,
    LoggingConfig,
    load_config,
    validate_environment,
)
from cronosmcp.core import setup_logging
from cronosmcp.exceptions import ConfigurationError, CronosMCPError, handle_exception
from cronosmcp.server.registry import CRONOS_ANALYTICS_TOOLS, TOOL_COUNT, get_tool

SERVER_NAME = "cronos-mcp"


def list_tool_definitions() -> List[types.Tool]:
    return [
        types.Tool(name=tool.name, description=tool.description, inputSchema=tool.input_schema())
        for tool in CRONOS_ANALYTICS_TOOLS.values()
    ]


async def execute_tool(
    agent: CronosAnalyticsAgent, name: str, arguments: Optional[Dict[str, Any]]
) -> List[types.TextContent]:
    """Run one tool and render its payload as pretty-printed JSON text.

    Raises:
        UnknownToolError, ToolValidationError, ToolExecutionError
    """
    tool = get_tool(name)
    result = await tool.run(agent, arguments)
    return [types.TextContent(type="text", text=json.dumps(result, indent=2, default=str))]


def create_server(agent: CronosAnalyticsAgent) -> Server:
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> List[types.Tool]:
        return list_tool_definitions()

    @server.call_tool()
    async def call_tool(name: str, arguments: Dict[str, Any]) -> List[types.TextContent]:
        # Raised errors are reported to the client as isError results
        try:
            return await execute_tool(agent, name, arguments)
        except CronosMCPError as e:
            logger.error(f"Tool execution error [{name}]: {e.message}")
            raise
        except Exception as e:
            error = handle_exception(e, tool_name=name)
            logger.exception(f"Unexpected error in tool [{name}]: {e}")
            raise error from e

    logger.info(f"✅ Registered {TOOL_COUNT} Cronos analytics tools")
    return server


def log_capabilities(agent: CronosAnalyticsAgent) -> None:
    available = agent.config.available_networks()

    logger.info("✅ Cronos Analytics MCP Server is running!")
    logger.info("🔧 Available capabilities:")
    logger.info("   • Native token balance analytics (CRO/zkCRO)")
    logger.info("   • ERC20 token and wallet analytics")
    logger.info("   • Transaction & block analysis")
    logger.info("   • DeFi protocols (VVS Finance, H2 Finance)")
    logger.info("   • VVS Finance DEX integration (top DEX on Cronos)")
    logger.info("   • CronosId domain resolution (.cro)")
    logger.info("   • Exchange market data")
    logger.info(f"   • {'Multi-network' if len(available) == len(NETWORK_CONFIGS) else 'Single-network'} support")

    if len(available) == len(NETWORK_CONFIGS):
        logger.info("🌐 Cross-network analytics enabled!")
        return

    for network, info in NETWORK_CONFIGS.items():
        if network not in available:
            logger.info(f"💡 Add {info.api_key_env} to enable {info.name} analytics")


async def serve(agent: CronosAnalyticsAgent) -> None:
    server = create_server(agent)
    try:
        async with stdio_server() as (read_stream, write_stream):
            log_capabilities(agent)
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await agent.aclose()


def main(argv: Optional[Sequence[str]] = None) -> None:
    # Console logging before the configuration (and its log level) is known
    setup_logging(LoggingConfig())
    logger.info("🔍 Starting Cronos Analytics MCP Server...")

    try:
        config = load_config(argv)
    except ConfigurationError as e:
        logger.error(f"❌ Error starting Cronos Analytics MCP server: {e.message}")
        logger.error("💡 Please set CRONOS_EVM_API_KEY and/or CRONOS_ZKEVM_API_KEY")
        sys.exit(1)
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.error(f"❌ Invalid configuration: {e}")
        sys.exit(1)

    setup_logging(config.logging)
    validate_environment(config)

    agent = CronosAnalyticsAgent(config)

    try:
        asyncio.run(serve(agent))
    except KeyboardInterrupt:
        logger.info("👋 Cronos Analytics MCP Server stopped")


if __name__ == "__main__":
    main()
