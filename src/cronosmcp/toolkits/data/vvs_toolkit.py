"""VVS Finance DEX Toolkit
=======================

An Agno-compatible toolkit over the VVS Finance info API, the leading DEX
on Cronos. Every pair and token payload goes through ``DexDataNormalizer``
before it is aggregated, so totals never include corrupted or misscaled
upstream values.

## Supported Data

- VVS token supply (total, circulating, burned, burn rate)
- DEX summary with pair liquidity and 24h volume
- Token list and single-token prices (USD and CRO)
- Pair list with liquidity distribution statistics
- Top pairs by liquidity or volume

## Response Format

**Success:**
```json
{
  "status": "success",
  "data": {"pairs": [...], "summary": {...}, "dataQuality": {...}, "network": "cronos-mainnet"},
  "network": "cronos-mainnet",
  "timestamp": 1718000000000
}
```

**Error** (network error, non-2xx, non-JSON body):
```json
{"status": "error", "message": "...", "network": "cronos-mainnet"}
```
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from agno.tools import Toolkit
from loguru import logger

from cronosmcp.config import CronosConfig
from cronosmcp.exceptions import UpstreamError
from cronosmcp.toolkits.base import BaseAPIToolkit
from cronosmcp.toolkits.utils import (
    DataHTTPClient,
    DataValidator,
    DexDataNormalizer,
    HTTPClientError,
    ResponseBuilder,
    StatisticalAnalyzer,
    ValueFormatter,
    WCRO_ADDRESS,
)

__all__ = ["VVSToolkit", "PairSortKey"]


class PairSortKey(str, Enum):
    """Ranking criteria for top pairs."""
    LIQUIDITY = "liquidity"
    VOLUME = "volume"


_ENDPOINT_NAME = "vvs"

_API_ENDPOINTS = {
    "supply": "/supply",
    "summary": "/summary",
    "tokens": "/tokens",
    "token": "/tokens/{address}",
    "pairs": "/pairs",
}

_FETCH_ERRORS = (HTTPClientError, UpstreamError, ValueError)


class VVSToolkit(Toolkit, BaseAPIToolkit):
    """VVS Finance DEX analytics bound to one Cronos network.

    Example:
        ```python
        toolkit = VVSToolkit(config)
        summary = await toolkit.get_summary(limit=20)
        if summary["status"] == "success":
            print(summary["data"]["summary"]["totalLiquidityUSD"])
        ```
    """

    def __init__(
        self,
        config: CronosConfig,
        http_client: Optional[DataHTTPClient] = None,
        name: str = "vvs_toolkit",
        **kwargs: Any,
    ):
        self.network = config.network
        self.network_info = config.network_info
        self.response_builder = ResponseBuilder(self.network)

        self._init_standard_configuration(
            http_timeout=config.http.timeout,
            max_retries=config.http.max_retries,
            retry_delay=config.http.retry_delay,
            http_client=http_client,
        )
        self._register_endpoint(
            _ENDPOINT_NAME,
            config.endpoints.vvs_base_url,
            headers={"Accept": "application/json"},
        )

        available_tools = [
            self.get_supply_info,
            self.get_summary,
            self.get_tokens,
            self.get_token_info,
            self.get_pairs,
            self.get_top_pairs,
        ]

        super().__init__(name=name, tools=available_tools, **kwargs)

        logger.info(f"Initialized VVSToolkit for {self.network}")

    async def _fetch(self, endpoint_key: str, **path_args: str) -> Dict[str, Any]:
        await self._ensure_endpoints()

        path = _API_ENDPOINTS[endpoint_key].format(**path_args)
        payload = await self._http_client.get(_ENDPOINT_NAME, path)

        validation = DataValidator.validate_structure(payload, expected_type=dict)
        if not validation["valid"]:
            raise UpstreamError("vvs", f"Unexpected {endpoint_key} response: {validation['errors']}")
        return payload

    def _error(self, error: Exception, default_message: str) -> Dict[str, Any]:
        logger.error(f"{default_message}: {error}")
        return self.response_builder.error_response(str(error) or default_message)

    # =========================================================================
    # Supply
    # =========================================================================

    async def get_supply_info(self) -> Dict[str, Any]:
        """Get VVS token supply with human-readable figures and burn rate.

        **Success data:**
        ```json
        {
            "totalSupply": "...", "circulatingSupply": "...", "burnedSupply": "...",
            "formatted": {"totalSupply": "1.25T", "circulatingSupply": "...",
                          "burnedSupply": "...", "burnRate": "12.34%"}
        }
        ```
        """
        try:
            payload = await self._fetch("supply")
        except _FETCH_ERRORS as e:
            return self._error(e, "Failed to get VVS supply info")

        total = payload.get("totalSupply")
        burned = payload.get("burnedSupply")

        return self.response_builder.success_response({
            **payload,
            "network": self.network,
            "formatted": {
                "totalSupply": ValueFormatter.format_token_amount(total),
                "circulatingSupply": ValueFormatter.format_token_amount(payload.get("circulatingSupply")),
                "burnedSupply": ValueFormatter.format_token_amount(burned),
                "burnRate": ValueFormatter.format_percentage(burned, total),
            },
        })

    # =========================================================================
    # Pairs
    # =========================================================================

    async def get_summary(self, limit: int = 50) -> Dict[str, Any]:
        """Get the DEX summary: cleaned pairs ranked by liquidity plus totals.

        Args:
            limit: Maximum number of pairs returned (totals cover returned pairs)
        """
        try:
            payload = await self._fetch("summary")
        except _FETCH_ERRORS as e:
            return self._error(e, "Failed to get VVS summary")

        batch = DexDataNormalizer.normalize_pair_batch(payload.get("data"), limit=limit)
        records = batch.records

        total_liquidity = sum(r.liquidity_usd for r in records)
        total_volume = sum(r.total_volume for r in records)

        return self.response_builder.success_response({
            "updated_at": payload.get("updated_at"),
            "pairs": [r.to_dict() for r in records],
            "network": self.network,
            "summary": {
                "totalPairs": len(records),
                "totalLiquidityUSD": total_liquidity,
                "totalVolume24hUSD": total_volume,
                "averageLiquidityPerPair": total_liquidity / len(records) if records else 0.0,
                "topPairByLiquidity": records[0].pair_id if records else None,
                "formatted": {
                    "totalLiquidity": ValueFormatter.format_currency(total_liquidity),
                    "totalVolume24h": ValueFormatter.format_currency(total_volume),
                },
            },
            "dataQuality": batch.report.to_dict("Pairs"),
        })

    async def get_pairs(self, limit: int = 100) -> Dict[str, Any]:
        """Get trading pairs with liquidity, volume and distribution statistics."""
        try:
            payload = await self._fetch("pairs")
        except _FETCH_ERRORS as e:
            return self._error(e, "Failed to get VVS pairs")

        batch = DexDataNormalizer.normalize_pair_batch(payload.get("data"), limit=limit)
        records = batch.records
        liquidity = [r.liquidity_usd for r in records]

        return self.response_builder.success_response({
            "updated_at": payload.get("updated_at"),
            "pairs": [r.to_dict() for r in records],
            "network": self.network,
            "summary": {
                "totalPairs": len(records),
                "totalLiquidityUSD": sum(liquidity),
                "wcroPairs": sum(1 for r in records if r.has_native_token),
                "stablePairs": sum(1 for r in records if r.is_stable_pair),
                "topPairsByLiquidity": [
                    {"pairId": r.pair_id, "liquidity": r.liquidity_usd} for r in records[:5]
                ],
                "liquidityDistribution": StatisticalAnalyzer.calculate_distribution_stats(liquidity),
                "top5LiquiditySharePct": round(StatisticalAnalyzer.calculate_top_share(liquidity, 5), 2),
            },
            "dataQuality": batch.report.to_dict("Pairs"),
        })

    async def get_top_pairs(self, limit: int = 10, sort_by: str = "liquidity") -> Dict[str, Any]:
        """Get the top pairs ranked by USD liquidity or by 24h volume.

        Args:
            limit: Number of pairs to return
            sort_by: "liquidity" or "volume" (base + quote volume)
        """
        try:
            self._validate_configuration_mapping(
                sort_by, {k.value: k for k in PairSortKey}, "sort_by"
            )
            payload = await self._fetch("pairs")
        except _FETCH_ERRORS as e:
            return self._error(e, "Failed to get top VVS pairs")

        batch = DexDataNormalizer.normalize_pair_batch(payload.get("data"))
        ranked = list(batch.records)
        if sort_by == PairSortKey.VOLUME.value:
            ranked = sorted(ranked, key=lambda r: r.total_volume, reverse=True)
        top = ranked[:max(limit, 0)]

        total_liquidity = sum(r.liquidity_usd for r in top)

        return self.response_builder.success_response({
            "pairs": [r.to_dict() for r in top],
            "analytics": {
                "totalLiquidityInTopPairs": total_liquidity,
                "totalVolumeInTopPairs": sum(r.total_volume for r in top),
                "wcroPairs": sum(1 for r in top if r.has_native_token),
                "stablePairs": sum(1 for r in top if r.is_stable_pair),
                "averageLiquidity": total_liquidity / len(top) if top else 0.0,
            },
            "sortBy": sort_by,
            "limit": limit,
            "updated_at": payload.get("updated_at"),
            "network": self.network,
            "dataQuality": batch.report.to_dict("Pairs"),
        })

    # =========================================================================
    # Tokens
    # =========================================================================

    async def get_tokens(self, limit: int = 100) -> Dict[str, Any]:
        """Get tokens with validated USD and CRO prices."""
        try:
            payload = await self._fetch("tokens")
        except _FETCH_ERRORS as e:
            return self._error(e, "Failed to get VVS tokens")

        batch = DexDataNormalizer.normalize_token_batch(payload.get("data"))
        wcro = next((t for t in batch.records if t.is_canonical_wrapped_native), None)
        tokens = list(batch.records[:max(limit, 0)])

        return self.response_builder.success_response({
            "updated_at": payload.get("updated_at"),
            "tokens": [t.to_dict() for t in tokens],
            "network": self.network,
            "summary": {
                "totalTokens": len(tokens),
                "wcroPrice": wcro.price_usd if wcro else 0.0,
                "wcroAddress": WCRO_ADDRESS,
                "tokensWithUSDPrice": sum(1 for t in tokens if t.price_usd > 0),
                "tokensWithCROPrice": sum(1 for t in tokens if t.price_native > 0),
            },
            "dataQuality": batch.report.to_dict("Tokens"),
        })

    async def get_token_info(self, address: str) -> Dict[str, Any]:
        """Get one token's prices by contract address."""
        if not DataValidator.is_valid_address(address):
            return self.response_builder.error_response(f"Invalid token address: {address}")

        try:
            payload = await self._fetch("token", address=address)
            raw = payload.get("data")
            if not isinstance(raw, dict):
                raise UpstreamError("vvs", f"Token not found: {address}")
        except _FETCH_ERRORS as e:
            return self._error(e, "Failed to get token info")

        record = DexDataNormalizer.normalize_token(address, raw)

        return self.response_builder.success_response({
            **record.to_dict(),
            "updated_at": payload.get("updated_at"),
            "network": self.network,
            "blockExplorer": f"{self.network_info.block_explorer}/token/{address}",
        })
