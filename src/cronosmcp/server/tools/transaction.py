"""Transaction lookup tools."""

from typing import Any, Dict

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.server.schemas import TransactionInput
from cronosmcp.server.tools.base import (
    McpTool,
    block_explorer_url,
    require_data,
    resolve_target_agent,
)
from cronosmcp.toolkits.utils import ResponseBuilder


async def get_transaction(agent: CronosAnalyticsAgent, params: TransactionInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_transaction(params.transaction_hash))

    return ResponseBuilder.tool_response(
        "✅ Transaction details retrieved",
        {
            "transactionHash": params.transaction_hash,
            **data,
            "blockExplorer": block_explorer_url(target, f"tx/{params.transaction_hash}"),
        },
    )


async def get_transaction_status(agent: CronosAnalyticsAgent, params: TransactionInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_transaction_status(params.transaction_hash))
    status = data.get("status")

    return ResponseBuilder.tool_response(
        "✅ Transaction status retrieved",
        {
            "transactionHash": params.transaction_hash,
            **data,
            "blockExplorer": block_explorer_url(target, f"tx/{params.transaction_hash}"),
            "statusSummary": {
                "isConfirmed": status == "confirmed",
                "isPending": status == "pending",
                "hasFailed": status == "failed",
            },
        },
    )


TRANSACTION_TOOLS = [
    McpTool(
        name="cronos_get_transaction",
        description="Get detailed transaction information by transaction hash",
        input_model=TransactionInput,
        handler=get_transaction,
        failure_message="Failed to get transaction",
    ),
    McpTool(
        name="cronos_get_transaction_status",
        description="Get transaction confirmation status and details",
        input_model=TransactionInput,
        handler=get_transaction_status,
        failure_message="Failed to get transaction status",
    ),
]
