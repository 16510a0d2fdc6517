"""
Input models for the MCP tools.

Each tool publishes its model's JSON schema as ``inputSchema`` and validates
incoming arguments against it before the handler runs. Field aliases carry
the camelCase argument names clients send.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from cronosmcp.toolkits.utils.data_validator import (
    ADDRESS_PATTERN,
    CRONOS_ID_PATTERN,
    TX_HASH_PATTERN,
)

NetworkName = Literal["cronos-mainnet", "cronos-zkevm-mainnet"]
ProtocolName = Literal["h2finance", "vvsfinance"]

_NETWORK_DESCRIPTION = "Network to query (defaults to configured network)"


class ToolInput(BaseModel):
    """Base input: every tool accepts an optional target network."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    network: Optional[NetworkName] = Field(None, description=_NETWORK_DESCRIPTION)


class AddressInput(ToolInput):
    address: str = Field(
        ..., pattern=ADDRESS_PATTERN, description="Wallet address (0x...)"
    )


class ERC20BalanceInput(AddressInput):
    contract_address: str = Field(
        ...,
        alias="contractAddress",
        pattern=ADDRESS_PATTERN,
        description="ERC20 token contract address (0x...)",
    )


class TransactionInput(ToolInput):
    transaction_hash: str = Field(
        ...,
        alias="transactionHash",
        pattern=TX_HASH_PATTERN,
        description="Transaction hash to look up (0x...)",
    )


class BlockByTagInput(ToolInput):
    block_tag: str = Field(
        ...,
        alias="blockTag",
        min_length=1,
        description="Block identifier ('latest', 'pending', or block number in hex like '0x1b4')",
    )
    include_transactions: bool = Field(
        False,
        alias="includeTransactions",
        description="Include full transaction details (default: false)",
    )


class FarmsInput(ToolInput):
    protocol: ProtocolName = Field(..., description="DeFi protocol to query")


class FarmBySymbolInput(FarmsInput):
    symbol: str = Field(
        ..., min_length=1, description="LP symbol to query (e.g., 'zkCRO-MOON', 'CRO-USDC')"
    )


class CronosIdInput(ToolInput):
    cronos_id: str = Field(
        ...,
        alias="cronosId",
        pattern=CRONOS_ID_PATTERN,
        description="CronosId to resolve (e.g., 'alice.cro')",
    )


class VVSSummaryInput(ToolInput):
    limit: int = Field(50, ge=1, le=1000, description="Limit number of pairs returned (default: 50, max: 1000)")


class VVSTokensInput(ToolInput):
    limit: int = Field(100, ge=1, le=1000, description="Limit number of tokens returned (default: 100, max: 1000)")


class VVSTokenInfoInput(ToolInput):
    token_address: str = Field(
        ...,
        alias="tokenAddress",
        pattern=ADDRESS_PATTERN,
        description="Token contract address (0x...)",
    )


class VVSPairsInput(ToolInput):
    limit: int = Field(100, ge=1, le=1000, description="Limit number of pairs returned (default: 100, max: 1000)")


class VVSTopPairsInput(ToolInput):
    limit: int = Field(10, ge=1, le=50, description="Number of top pairs to return (default: 10, max: 50)")
    sort_by: Literal["liquidity", "volume"] = Field(
        "liquidity", alias="sortBy", description="Sort criteria (default: liquidity)"
    )


class TickersInput(ToolInput):
    limit: int = Field(50, ge=1, le=200, description="Limit number of results (default: 50, max: 200)")


class TickerInput(ToolInput):
    instrument: str = Field(
        ..., min_length=1, description="Trading pair instrument name (e.g., 'CRO_USD', 'BTC_CRO')"
    )


class MarketSummaryInput(ToolInput):
    include_cro_pairs: bool = Field(
        True,
        alias="includeCROPairs",
        description="Include CRO trading pairs analysis (default: true)",
    )
