"""
MCP tool definitions, grouped by data domain.
"""
from .balance import BALANCE_TOOLS
from .base import McpTool, require_data, resolve_target_agent
from .block import BLOCK_TOOLS
from .cronosid import CRONOSID_TOOLS
from .defi import DEFI_TOOLS
from .market import MARKET_TOOLS
from .transaction import TRANSACTION_TOOLS
from .vvs import VVS_TOOLS

__all__ = [
    "McpTool",
    "require_data",
    "resolve_target_agent",
    "BALANCE_TOOLS",
    "TRANSACTION_TOOLS",
    "BLOCK_TOOLS",
    "DEFI_TOOLS",
    "CRONOSID_TOOLS",
    "VVS_TOOLS",
    "MARKET_TOOLS",
]
