"""
Cronos analytics agent.

Thin façade over the upstream clients. Every lookup resolves to an envelope:
the upstream payload merged with the network and call-specific context on
success, or ``{"status": "error", "message", "network"}`` on failure.
"""

from typing import Any, Awaitable, Dict, Optional

from loguru import logger

from cronosmcp.config import (
    CRONOS_MAINNET,
    CRONOS_ZKEVM_MAINNET,
    NETWORK_CONFIGS,
    CronosConfig,
    mask_key,
)
from cronosmcp.exceptions import UpstreamError
from cronosmcp.toolkits.data import DeveloperPlatformClient, ExchangeClient, VVSToolkit
from cronosmcp.toolkits.utils import DataValidator, HTTPClientError, ResponseBuilder, ValueFormatter

_FETCH_ERRORS = (HTTPClientError, UpstreamError, ValueError)


class CronosAnalyticsAgent:
    """Read-only analytics for one Cronos network."""

    def __init__(
        self,
        config: CronosConfig,
        platform_client: Optional[DeveloperPlatformClient] = None,
        exchange_client: Optional[ExchangeClient] = None,
        vvs_toolkit: Optional[VVSToolkit] = None,
    ):
        self.config = config
        self.network = config.network
        self.network_info = config.network_info
        self.response_builder = ResponseBuilder(self.network)

        self.platform = platform_client or DeveloperPlatformClient(config)
        self.exchange = exchange_client or ExchangeClient(config)
        self.vvs = vvs_toolkit or VVSToolkit(config)

        self._network_agents: Dict[str, "CronosAnalyticsAgent"] = {}

        logger.info(f"🔍 Cronos Analytics Agent initialized for {self.network}")
        logger.debug(f"📍 Network: {self.network_info.name}")
        logger.debug(f"🔗 Block Explorer: {self.network_info.block_explorer}")

    async def _call(self, request: Awaitable[Any], default_message: str, **context: Any) -> Dict[str, Any]:
        try:
            payload = await request
        except _FETCH_ERRORS as e:
            logger.error(f"{default_message} on {self.network}: {e}")
            return self.response_builder.error_response(str(e) or default_message)

        # Non-object payloads (lists, scalars) are kept under "result"
        data = dict(payload) if isinstance(payload, dict) else {"result": payload}
        data["network"] = self.network
        data.update(context)
        return self.response_builder.success_response(data)

    # === BALANCE & TOKEN ANALYTICS ===

    async def get_native_balance(self, address: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_native_balance(address),
            "Failed to get native balance",
            currency=self.network_info.native_currency,
        )

    async def get_erc20_balance(self, address: str, contract_address: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_erc20_balance(address, contract_address),
            "Failed to get ERC20 balance",
            contractAddress=contract_address,
        )

    async def get_wallet_overview(self, address: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_wallet_balance(address),
            "Failed to get wallet overview",
            address=address,
        )

    # === TRANSACTION ANALYTICS ===

    async def get_transaction(self, tx_hash: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_transaction(tx_hash),
            "Failed to get transaction details",
            blockExplorer=f"{self.network_info.block_explorer}/tx/{tx_hash}",
        )

    async def get_transaction_status(self, tx_hash: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_transaction_status(tx_hash),
            "Failed to get transaction status",
            transactionHash=tx_hash,
        )

    # === BLOCK ANALYTICS ===

    async def get_current_block(self) -> Dict[str, Any]:
        return await self._call(self.platform.get_current_block(), "Failed to get current block")

    async def get_block_by_tag(self, block_tag: str, include_transactions: bool = False) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_block_by_tag(block_tag, include_transactions),
            "Failed to get block data",
            blockTag=block_tag,
            includeTransactions=include_transactions,
        )

    # === DEFI ANALYTICS ===

    async def get_whitelisted_tokens(self, protocol: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_whitelisted_tokens(protocol),
            "Failed to get whitelisted tokens",
            protocol=protocol,
        )

    async def get_all_farms(self, protocol: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_all_farms(protocol),
            "Failed to get farms",
            protocol=protocol,
        )

    async def get_farm_by_symbol(self, protocol: str, symbol: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.get_farm_by_symbol(protocol, symbol),
            "Failed to get farm data",
            protocol=protocol,
            symbol=symbol,
        )

    # === CRONOS ID ANALYTICS ===

    async def resolve_cronos_id(self, cronos_id: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.resolve_cronos_id(cronos_id),
            "Failed to resolve CronosId",
            cronosId=cronos_id,
        )

    async def reverse_resolve_cronos_id(self, address: str) -> Dict[str, Any]:
        return await self._call(
            self.platform.reverse_resolve_cronos_id(address),
            "Failed to reverse resolve address",
            address=address,
        )

    # === EXCHANGE & MARKET ANALYTICS ===

    async def get_all_tickers(self) -> Dict[str, Any]:
        return await self._call(
            self.exchange.get_all_tickers(),
            "Failed to get exchange tickers",
            exchangeInfo="Crypto.com Exchange data",
        )

    async def get_ticker(self, instrument: str) -> Dict[str, Any]:
        return await self._call(
            self.exchange.get_ticker(instrument),
            "Failed to get ticker data",
            instrument=instrument,
        )

    # === UTILITY METHODS ===

    def get_network_info(self) -> Dict[str, Any]:
        return self.response_builder.success_response({
            "network": self.network,
            "name": self.network_info.name,
            "chainId": self.network_info.chain_id,
            "rpcUrl": self.network_info.rpc_url,
            "blockExplorer": self.network_info.block_explorer,
            "nativeCurrency": self.network_info.native_currency,
            "hasApiKey": bool(self.config.api_key),
            "canSwitchNetworks": {
                CRONOS_MAINNET: self.config.can_switch_to(CRONOS_MAINNET),
                CRONOS_ZKEVM_MAINNET: self.config.can_switch_to(CRONOS_ZKEVM_MAINNET),
            },
        })

    def for_network(self, network: Optional[str]) -> "CronosAnalyticsAgent":
        """Agent bound to ``network``; this agent when switching is impossible."""
        if not network or network == self.network:
            return self

        if network in self._network_agents:
            return self._network_agents[network]

        if not self.config.can_switch_to(network):
            target = NETWORK_CONFIGS.get(network)
            reason = f"Missing {target.api_key_env}" if target else "Unsupported network"
            logger.warning(f"⚠️ Cannot switch to {network}: {reason}")
            logger.warning(f"📍 Continuing with default network: {self.network}")
            return self

        target_config = self.config.for_network(network)
        agent = CronosAnalyticsAgent(target_config)
        self._network_agents[network] = agent
        logger.info(f"🔄 Switched to {target_config.network_info.name} with API key {mask_key(target_config.api_key)}")
        return agent

    @staticmethod
    def format_balance(balance: Any, decimals: int = 18) -> str:
        return ValueFormatter.format_balance(balance, decimals)

    @staticmethod
    def is_valid_address(address: str) -> bool:
        return DataValidator.is_valid_address(address)

    @staticmethod
    def is_valid_tx_hash(tx_hash: str) -> bool:
        return DataValidator.is_valid_tx_hash(tx_hash)

    @staticmethod
    def is_valid_cronos_id(name: str) -> bool:
        return DataValidator.is_valid_cronos_id(name)

    async def aclose(self) -> None:
        """Close upstream clients, including those of other-network agents."""
        for agent in self._network_agents.values():
            await agent.aclose()
        self._network_agents.clear()

        await self.platform.aclose()
        await self.exchange.aclose()
        await self.vvs.aclose()
