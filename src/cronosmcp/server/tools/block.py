"""Block lookup tools."""

from typing import Any, Dict

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.server.schemas import BlockByTagInput, ToolInput
from cronosmcp.server.tools.base import (
    McpTool,
    block_explorer_url,
    require_data,
    resolve_target_agent,
)
from cronosmcp.toolkits.utils import ResponseBuilder


async def get_current_block(agent: CronosAnalyticsAgent, params: ToolInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_current_block())

    block_number = data.get("blockNumber") or "latest"

    return ResponseBuilder.tool_response(
        "✅ Current block information retrieved",
        {**data, "blockExplorer": block_explorer_url(target, f"block/{block_number}")},
    )


async def get_block_by_tag(agent: CronosAnalyticsAgent, params: BlockByTagInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_block_by_tag(params.block_tag, params.include_transactions))

    return ResponseBuilder.tool_response(
        f"✅ Block data retrieved for {params.block_tag}",
        {**data, "blockExplorer": block_explorer_url(target, f"block/{params.block_tag}")},
    )


BLOCK_TOOLS = [
    McpTool(
        name="cronos_get_current_block",
        description="Get the current latest block number and information",
        input_model=ToolInput,
        handler=get_current_block,
        failure_message="Failed to get current block",
    ),
    McpTool(
        name="cronos_get_block_by_tag",
        description="Get block information by block number, 'latest', or 'pending'",
        input_model=BlockByTagInput,
        handler=get_block_by_tag,
        failure_message="Failed to get block data",
    ),
]
