"""VVS Finance DEX tools, backed by the agent's ``VVSToolkit``."""

from typing import Any, Dict

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.server.schemas import (
    ToolInput,
    VVSPairsInput,
    VVSSummaryInput,
    VVSTokenInfoInput,
    VVSTokensInput,
    VVSTopPairsInput,
)
from cronosmcp.server.tools.base import McpTool, require_data, resolve_target_agent
from cronosmcp.toolkits.utils import WCRO_ADDRESS, ResponseBuilder

PROTOCOL_NAME = "VVS Finance"


async def get_vvs_supply(agent: CronosAnalyticsAgent, params: ToolInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.vvs.get_supply_info())

    return ResponseBuilder.tool_response(
        "✅ VVS supply information retrieved",
        {**data, "protocol": PROTOCOL_NAME, "dex": "Leading DEX on Cronos"},
    )


async def get_vvs_summary(agent: CronosAnalyticsAgent, params: VVSSummaryInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.vvs.get_summary(limit=params.limit))

    return ResponseBuilder.tool_response(
        "✅ VVS DEX summary retrieved",
        {
            **data,
            "protocol": PROTOCOL_NAME,
            "description": "Top DEX on Cronos network",
            "wcroInfo": {
                "address": WCRO_ADDRESS,
                "note": "CRO is represented as WCRO in pairs",
            },
        },
    )


async def get_vvs_tokens(agent: CronosAnalyticsAgent, params: VVSTokensInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.vvs.get_tokens(limit=params.limit))

    return ResponseBuilder.tool_response(
        "✅ VVS tokens retrieved",
        {
            **data,
            "protocol": PROTOCOL_NAME,
            "wcroInfo": {
                "address": WCRO_ADDRESS,
                "note": "Canonical WCRO address used by VVS",
            },
        },
    )


async def get_vvs_token_info(agent: CronosAnalyticsAgent, params: VVSTokenInfoInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.vvs.get_token_info(params.token_address))

    return ResponseBuilder.tool_response(
        f"✅ VVS token info retrieved for {params.token_address}",
        {**data, "protocol": PROTOCOL_NAME, "tokenAddress": params.token_address},
    )


async def get_vvs_pairs(agent: CronosAnalyticsAgent, params: VVSPairsInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.vvs.get_pairs(limit=params.limit))

    return ResponseBuilder.tool_response(
        "✅ VVS trading pairs retrieved",
        {
            **data,
            "protocol": PROTOCOL_NAME,
            "dexInfo": {
                "type": "Automated Market Maker (AMM)",
                "chainName": target.network_info.name,
                "wcroAddress": WCRO_ADDRESS,
            },
        },
    )


async def get_vvs_top_pairs(agent: CronosAnalyticsAgent, params: VVSTopPairsInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.vvs.get_top_pairs(limit=params.limit, sort_by=params.sort_by))

    return ResponseBuilder.tool_response(
        f"✅ Top {params.limit} VVS pairs retrieved (sorted by {params.sort_by})",
        {**data, "protocol": PROTOCOL_NAME},
    )


VVS_TOOLS = [
    McpTool(
        name="cronos_get_vvs_supply",
        description="Get VVS token supply information (total, circulating, burned)",
        input_model=ToolInput,
        handler=get_vvs_supply,
        failure_message="Failed to get VVS supply info",
    ),
    McpTool(
        name="cronos_get_vvs_summary",
        description="Get VVS DEX summary with top trading pairs and liquidity data",
        input_model=VVSSummaryInput,
        handler=get_vvs_summary,
        failure_message="Failed to get VVS summary",
    ),
    McpTool(
        name="cronos_get_vvs_tokens",
        description="Get all tokens available on VVS with price information",
        input_model=VVSTokensInput,
        handler=get_vvs_tokens,
        failure_message="Failed to get VVS tokens",
    ),
    McpTool(
        name="cronos_get_vvs_token_info",
        description="Get specific token information from VVS including USD and CRO prices",
        input_model=VVSTokenInfoInput,
        handler=get_vvs_token_info,
        failure_message="Failed to get VVS token info",
    ),
    McpTool(
        name="cronos_get_vvs_pairs",
        description="Get all trading pairs on VVS with detailed liquidity and volume data",
        input_model=VVSPairsInput,
        handler=get_vvs_pairs,
        failure_message="Failed to get VVS pairs",
    ),
    McpTool(
        name="cronos_get_vvs_top_pairs",
        description="Get top VVS trading pairs by liquidity or 24h volume with analytics",
        input_model=VVSTopPairsInput,
        handler=get_vvs_top_pairs,
        failure_message="Failed to get top VVS pairs",
    ),
]
