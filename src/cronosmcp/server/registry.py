"""
Registry of every Cronos analytics tool served over MCP.
"""

from typing import Dict, List

from cronosmcp.exceptions import UnknownToolError
from cronosmcp.server.tools import (
    BALANCE_TOOLS,
    BLOCK_TOOLS,
    CRONOSID_TOOLS,
    DEFI_TOOLS,
    MARKET_TOOLS,
    TRANSACTION_TOOLS,
    VVS_TOOLS,
    McpTool,
)

CRONOS_ANALYTICS_TOOLS: Dict[str, McpTool] = {
    tool.name: tool
    for tool in [
        *BALANCE_TOOLS,        # native, ERC20, wallet overview, network info
        *TRANSACTION_TOOLS,    # details, status
        *BLOCK_TOOLS,          # current block, block by tag
        *DEFI_TOOLS,           # farms
        *CRONOSID_TOOLS,       # .cro names
        *VVS_TOOLS,            # VVS Finance DEX
        *MARKET_TOOLS,         # Crypto.com Exchange tickers
    ]
}

TOOL_COUNT = len(CRONOS_ANALYTICS_TOOLS)


def list_tool_names() -> List[str]:
    return list(CRONOS_ANALYTICS_TOOLS)


def get_tool(name: str) -> McpTool:
    """
    Look up a registered tool.

    Raises:
        UnknownToolError: If no tool is registered under ``name``
    """
    try:
        return CRONOS_ANALYTICS_TOOLS[name]
    except KeyError:
        raise UnknownToolError(name, list_tool_names()) from None
