"""Crypto.com Developer Platform Client
====================================

Async REST wrapper around the Crypto.com Developer Platform API, the source
of balances, transactions, blocks, DeFi farms and CronosId lookups. Each
instance is bound to one network: its API key is sent as a header and the
network's chain id accompanies every request.

The platform wraps payloads as ``{"status": "Success", "data": {...}}``;
callers receive the ``data`` part. Transport problems surface as
``HTTPClientError`` and platform-level failures as ``UpstreamError``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from loguru import logger

from cronosmcp.config import CronosConfig
from cronosmcp.exceptions import UpstreamError
from cronosmcp.toolkits.base import BaseAPIToolkit
from cronosmcp.toolkits.utils import DataHTTPClient, DataValidator

__all__ = ["DeveloperPlatformClient", "DefiProtocol"]


class DefiProtocol(str, Enum):
    """DeFi protocols indexed by the Developer Platform."""
    H2_FINANCE = "h2finance"
    VVS_FINANCE = "vvsfinance"


_ENDPOINT_NAME = "platform"

_API_ENDPOINTS = {
    "native_balance": "/token/native-token-balance",
    "erc20_balance": "/token/erc20-token-balance",
    "wallet_balance": "/wallet/balance",
    "transaction": "/transaction/tx-by-hash",
    "transaction_status": "/transaction/tx-status",
    "current_block": "/block/current-block",
    "block_by_tag": "/block/block-by-tag",
    "whitelisted_tokens": "/defi/whitelisted-tokens/{protocol}",
    "all_farms": "/defi/farms/{protocol}",
    "farm_by_symbol": "/defi/farms/{protocol}/{symbol}",
    "cronosid_resolve": "/cronosid/resolve/{name}",
    "cronosid_reverse": "/cronosid/reverse-resolve/{address}",
}

_SUCCESS_STATUSES = {"success", "ok"}


class DeveloperPlatformClient(BaseAPIToolkit):
    """Developer Platform lookups for a single Cronos network.

    Example:
        ```python
        client = DeveloperPlatformClient(config)
        balance = await client.get_native_balance("0x...")
        await client.aclose()
        ```
    """

    def __init__(self, config: CronosConfig, http_client: Optional[DataHTTPClient] = None):
        self.network = config.network
        self.network_info = config.network_info
        self._api_key = config.api_key

        self._init_standard_configuration(
            http_timeout=config.http.timeout,
            max_retries=config.http.max_retries,
            retry_delay=config.http.retry_delay,
            http_client=http_client,
        )
        self._register_endpoint(
            _ENDPOINT_NAME,
            config.endpoints.platform_base_url,
            headers={
                "Accept": "application/json",
                "x-api-key": self._api_key,
            },
        )

        logger.debug(f"Initialized DeveloperPlatformClient for {self.network} (chain {self.network_info.chain_id})")

    async def _request(self, endpoint_key: str, params: Optional[Dict[str, Any]] = None, **path_args: str) -> Any:
        if not self._api_key:
            raise UpstreamError(
                "developer-platform",
                f"Missing {self.network_info.api_key_env} for {self.network_info.name}",
            )

        await self._ensure_endpoints()

        path = _API_ENDPOINTS[endpoint_key].format(**path_args)
        query = {"chainId": self.network_info.chain_id}
        if params:
            query.update(params)

        payload = await self._http_client.get(_ENDPOINT_NAME, path, params=query)
        return self._unwrap(endpoint_key, payload)

    @staticmethod
    def _unwrap(endpoint_key: str, payload: Any) -> Any:
        validation = DataValidator.validate_structure(payload, expected_type=dict)
        if not validation["valid"]:
            raise UpstreamError("developer-platform", f"Unexpected {endpoint_key} response: {validation['errors']}")

        status = payload.get("status")
        if status is not None and str(status).lower() not in _SUCCESS_STATUSES:
            message = payload.get("message") or f"{endpoint_key} request failed with status {status}"
            raise UpstreamError("developer-platform", message)

        return payload.get("data", payload)

    # =========================================================================
    # Token & wallet
    # =========================================================================

    async def get_native_balance(self, address: str) -> Any:
        return await self._request("native_balance", {"walletAddress": address})

    async def get_erc20_balance(self, address: str, contract_address: str) -> Any:
        return await self._request(
            "erc20_balance",
            {"walletAddress": address, "contractAddress": contract_address},
        )

    async def get_wallet_balance(self, address: str) -> Any:
        """All balances held by a wallet (native plus tokens)."""
        return await self._request("wallet_balance", {"walletAddress": address})

    # =========================================================================
    # Transactions & blocks
    # =========================================================================

    async def get_transaction(self, tx_hash: str) -> Any:
        return await self._request("transaction", {"txHash": tx_hash})

    async def get_transaction_status(self, tx_hash: str) -> Any:
        return await self._request("transaction_status", {"txHash": tx_hash})

    async def get_current_block(self) -> Any:
        return await self._request("current_block")

    async def get_block_by_tag(self, block_tag: str, include_transactions: bool = False) -> Any:
        return await self._request(
            "block_by_tag",
            {"blockTag": block_tag, "txDetail": "true" if include_transactions else "false"},
        )

    # =========================================================================
    # DeFi
    # =========================================================================

    def _validate_protocol(self, protocol: str) -> str:
        value = protocol.value if isinstance(protocol, DefiProtocol) else str(protocol).lower()
        self._validate_configuration_mapping(
            value, {p.value: p for p in DefiProtocol}, "protocol"
        )
        return value

    async def get_whitelisted_tokens(self, protocol: str) -> Any:
        return await self._request("whitelisted_tokens", protocol=self._validate_protocol(protocol))

    async def get_all_farms(self, protocol: str) -> Any:
        return await self._request("all_farms", protocol=self._validate_protocol(protocol))

    async def get_farm_by_symbol(self, protocol: str, symbol: str) -> Any:
        return await self._request(
            "farm_by_symbol", protocol=self._validate_protocol(protocol), symbol=symbol
        )

    # =========================================================================
    # CronosId
    # =========================================================================

    async def resolve_cronos_id(self, name: str) -> Any:
        return await self._request("cronosid_resolve", name=name)

    async def reverse_resolve_cronos_id(self, address: str) -> Any:
        return await self._request("cronosid_reverse", address=address)
