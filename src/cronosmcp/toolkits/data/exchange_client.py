"""Crypto.com Exchange Ticker Client
=================================

Reads public tickers from the Crypto.com Exchange v1 REST API. No API key
is needed. The exchange answers with ``{"code": 0, "result": {"data": [...]}}``
where each ticker uses the exchange's short field names (``i`` instrument,
``a`` last price, ``v`` 24h volume, ``h``/``l`` high/low, ``c`` change).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from cronosmcp.config import CronosConfig
from cronosmcp.exceptions import UpstreamError
from cronosmcp.toolkits.base import BaseAPIToolkit
from cronosmcp.toolkits.utils import DataHTTPClient, DataValidator

__all__ = ["ExchangeClient"]

_ENDPOINT_NAME = "exchange"

_API_ENDPOINTS = {
    "tickers": "/public/get-tickers",
}


class ExchangeClient(BaseAPIToolkit):
    """Public ticker lookups on Crypto.com Exchange."""

    def __init__(self, config: CronosConfig, http_client: Optional[DataHTTPClient] = None):
        self._init_standard_configuration(
            http_timeout=config.http.timeout,
            max_retries=config.http.max_retries,
            retry_delay=config.http.retry_delay,
            http_client=http_client,
        )
        self._register_endpoint(
            _ENDPOINT_NAME,
            config.endpoints.exchange_base_url,
            headers={"Accept": "application/json"},
        )

        logger.debug("Initialized ExchangeClient")

    async def _fetch_tickers(self, instrument: Optional[str] = None) -> List[Dict[str, Any]]:
        await self._ensure_endpoints()

        params = {"instrument_name": instrument} if instrument else None
        payload = await self._http_client.get(_ENDPOINT_NAME, _API_ENDPOINTS["tickers"], params=params)

        validation = DataValidator.validate_structure(payload, required_fields=["result"], expected_type=dict)
        if not validation["valid"]:
            raise UpstreamError("exchange", f"Unexpected ticker response: {validation['errors']}")

        code = payload.get("code", 0)
        if code != 0:
            raise UpstreamError("exchange", payload.get("message") or f"Exchange error code {code}")

        result = payload.get("result") or {}
        data = result.get("data") if isinstance(result, dict) else None
        if not isinstance(data, list):
            raise UpstreamError("exchange", "Ticker response has no data list")

        return [ticker for ticker in data if isinstance(ticker, dict)]

    async def get_all_tickers(self) -> Dict[str, Any]:
        """All tickers as ``{"result": [ticker, ...]}``."""
        tickers = await self._fetch_tickers()
        logger.debug(f"Fetched {len(tickers)} exchange tickers")
        return {"result": tickers}

    async def get_ticker(self, instrument: str) -> Dict[str, Any]:
        """A single ticker as ``{"result": ticker}``.

        Raises:
            UpstreamError: If the exchange does not list ``instrument``
        """
        tickers = await self._fetch_tickers(instrument)

        match = next((t for t in tickers if t.get("i") == instrument), None)
        if match is None:
            raise UpstreamError("exchange", f"Instrument not found: {instrument}")

        return {"result": match}
