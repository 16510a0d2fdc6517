"""Balance, wallet and network information tools."""

from typing import Any, Dict

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.server.schemas import AddressInput, ERC20BalanceInput, ToolInput
from cronosmcp.server.tools.base import (
    McpTool,
    block_explorer_url,
    require_data,
    resolve_target_agent,
)
from cronosmcp.toolkits.utils import ResponseBuilder

NETWORK_CAPABILITIES = [
    "Native token balance queries",
    "ERC20 token analytics",
    "Transaction analysis",
    "Contract information",
    "Exchange data integration",
]


async def get_native_balance(agent: CronosAnalyticsAgent, params: AddressInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_native_balance(params.address))

    return ResponseBuilder.tool_response(
        f"✅ Native balance retrieved for {params.address}",
        {
            "address": params.address,
            **data,
            "blockExplorer": block_explorer_url(target, f"address/{params.address}"),
        },
    )


async def get_erc20_balance(agent: CronosAnalyticsAgent, params: ERC20BalanceInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_erc20_balance(params.address, params.contract_address))

    return ResponseBuilder.tool_response(
        f"✅ ERC20 balance retrieved for {params.address}",
        {
            "address": params.address,
            "contractAddress": params.contract_address,
            **data,
            "blockExplorer": block_explorer_url(
                target, f"token/{params.contract_address}?a={params.address}"
            ),
        },
    )


async def get_wallet_overview(agent: CronosAnalyticsAgent, params: AddressInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_wallet_overview(params.address))

    tokens = data.get("tokens")
    transaction_count = data.get("transactionCount")

    return ResponseBuilder.tool_response(
        f"✅ Wallet overview retrieved for {params.address}",
        {
            "address": params.address,
            **data,
            "blockExplorer": block_explorer_url(target, f"address/{params.address}"),
            "analytics": {
                "totalTokens": len(tokens) if isinstance(tokens, list) else 0,
                "hasActivity": isinstance(transaction_count, (int, float)) and transaction_count > 0,
            },
        },
    )


async def get_network_info(agent: CronosAnalyticsAgent, params: ToolInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(target.get_network_info())

    return ResponseBuilder.tool_response(
        "✅ Network information retrieved",
        {**data, "capabilities": list(NETWORK_CAPABILITIES)},
    )


BALANCE_TOOLS = [
    McpTool(
        name="cronos_get_native_balance",
        description="Get native token balance (CRO/zkCRO) for any address on Cronos networks",
        input_model=AddressInput,
        handler=get_native_balance,
        failure_message="Failed to get native balance",
    ),
    McpTool(
        name="cronos_get_erc20_balance",
        description="Get ERC20 token balance for any address and token contract on Cronos networks",
        input_model=ERC20BalanceInput,
        handler=get_erc20_balance,
        failure_message="Failed to get ERC20 balance",
    ),
    McpTool(
        name="cronos_get_wallet_overview",
        description="Get comprehensive wallet overview including all token balances and portfolio summary",
        input_model=AddressInput,
        handler=get_wallet_overview,
        failure_message="Failed to get wallet overview",
    ),
    McpTool(
        name="cronos_get_network_info",
        description="Get current network information and statistics",
        input_model=ToolInput,
        handler=get_network_info,
        failure_message="Failed to get network info",
    ),
]
