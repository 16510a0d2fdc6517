"""CronosId (.cro name) resolution tools."""

from typing import Any, Dict

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.exceptions import ToolExecutionError
from cronosmcp.server.schemas import AddressInput, CronosIdInput
from cronosmcp.server.tools.base import (
    McpTool,
    block_explorer_url,
    require_data,
    resolve_target_agent,
)
from cronosmcp.toolkits.utils import ResponseBuilder


async def resolve_cronos_id(agent: CronosAnalyticsAgent, params: CronosIdInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    if not target.is_valid_cronos_id(params.cronos_id):
        raise ToolExecutionError("Invalid CronosId format. Must end with .cro")

    data = require_data(await target.resolve_cronos_id(params.cronos_id))
    address = data.get("address")

    return ResponseBuilder.tool_response(
        f"✅ CronosId resolved: {params.cronos_id}",
        {
            "cronosId": params.cronos_id,
            **data,
            "blockExplorer": block_explorer_url(target, f"address/{address}") if address else None,
        },
    )


async def reverse_resolve_cronos_id(agent: CronosAnalyticsAgent, params: AddressInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.reverse_resolve_cronos_id(params.address))

    return ResponseBuilder.tool_response(
        f"✅ Address reverse resolved: {params.address}",
        {
            "address": params.address,
            **data,
            "hasCronosId": bool(data.get("name")),
            "blockExplorer": block_explorer_url(target, f"address/{params.address}"),
        },
    )


CRONOSID_TOOLS = [
    McpTool(
        name="cronos_resolve_cronosid",
        description="Resolve a CronosId (like alice.cro) to its wallet address",
        input_model=CronosIdInput,
        handler=resolve_cronos_id,
        failure_message="Failed to resolve CronosId",
    ),
    McpTool(
        name="cronos_reverse_resolve_cronosid",
        description="Look up the CronosId associated with a wallet address",
        input_model=AddressInput,
        handler=reverse_resolve_cronos_id,
        failure_message="Failed to reverse resolve address",
    ),
]
