"""DeFi yield farm tools (H2 Finance, VVS Finance)."""

from typing import Any, Dict, List

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.server.schemas import FarmBySymbolInput, FarmsInput
from cronosmcp.server.tools.base import McpTool, require_data, resolve_target_agent
from cronosmcp.toolkits.utils import DexDataNormalizer, ResponseBuilder


def summarize_farms(farms: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Counts of active and finished farms plus the mean base APR of active ones."""
    active = [farm for farm in farms if not farm.get("isFinished")]
    average_apr = (
        sum(DexDataNormalizer.sanitize_number(farm.get("baseApr")) for farm in active) / len(active)
        if active else 0
    )
    return {
        "totalFarms": len(farms),
        "activeFarms": len(active),
        "finishedFarms": len(farms) - len(active),
        "averageAPR": average_apr,
    }


async def get_all_farms(agent: CronosAnalyticsAgent, params: FarmsInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_all_farms(params.protocol))

    result = data.pop("result", None)
    farms = [farm for farm in result if isinstance(farm, dict)] if isinstance(result, list) else []

    return ResponseBuilder.tool_response(
        f"✅ Farm data retrieved for {params.protocol}",
        {
            **data,
            "farms": farms,
            "protocol": params.protocol,
            "summary": summarize_farms(farms),
        },
    )


async def get_farm_by_symbol(agent: CronosAnalyticsAgent, params: FarmBySymbolInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_farm_by_symbol(params.protocol, params.symbol))

    return ResponseBuilder.tool_response(
        f"✅ Farm details retrieved for {params.symbol}",
        {
            **data,
            "protocol": params.protocol,
            "symbol": params.symbol,
            "yieldInfo": {
                "baseAPR": data.get("baseApr") or 0,
                "baseAPY": data.get("baseApy") or 0,
                "lpAPR": data.get("lpApr") or 0,
                "lpAPY": data.get("lpApy") or 0,
                "isActive": not data.get("isFinished"),
                "rewardEndDate": data.get("rewardEndAt"),
            },
        },
    )


DEFI_TOOLS = [
    McpTool(
        name="cronos_get_all_farms",
        description="Get all yield farms for DeFi protocols with APR/APY data",
        input_model=FarmsInput,
        handler=get_all_farms,
        failure_message="Failed to get farms",
    ),
    McpTool(
        name="cronos_get_farm_by_symbol",
        description="Get specific farm details by LP symbol",
        input_model=FarmBySymbolInput,
        handler=get_farm_by_symbol,
        failure_message="Failed to get farm data",
    ),
]
