"""
MCP server layer: input schemas, tool handlers, registry and stdio entry point.
"""
from .registry import CRONOS_ANALYTICS_TOOLS, TOOL_COUNT, get_tool, list_tool_names

__all__ = [
    "CRONOS_ANALYTICS_TOOLS",
    "TOOL_COUNT",
    "get_tool",
    "list_tool_names",
]
