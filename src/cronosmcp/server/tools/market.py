"""Crypto.com Exchange market data tools."""

import time
from typing import Any, Dict, List, Optional

from loguru import logger

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.server.schemas import MarketSummaryInput, TickerInput, TickersInput
from cronosmcp.server.tools.base import McpTool, require_data, resolve_target_agent
from cronosmcp.toolkits.utils import ResponseBuilder, is_success

EXCHANGE_NAME = "Crypto.com Exchange"

# Tried in order; the first instrument the exchange prices wins
CRO_PRICE_INSTRUMENTS = ("CRO_USD", "CRO_USDT")

_USD_QUOTES = ("_USD", "_USDT", "_USDC")


def _instrument(ticker: Dict[str, Any]) -> str:
    name = ticker.get("i")
    return name if isinstance(name, str) else ""


def count_cro_base_pairs(tickers: List[Dict[str, Any]]) -> int:
    return sum(1 for t in tickers if _instrument(t).endswith("_CRO"))


def count_usd_base_pairs(tickers: List[Dict[str, Any]]) -> int:
    return sum(1 for t in tickers if _instrument(t).endswith(_USD_QUOTES))


def _tickers_of(data: Dict[str, Any]) -> List[Dict[str, Any]]:
    result = data.get("result")
    return [t for t in result if isinstance(t, dict)] if isinstance(result, list) else []


async def get_all_tickers(agent: CronosAnalyticsAgent, params: TickersInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    all_tickers = _tickers_of(require_data(await target.get_all_tickers()))
    tickers = all_tickers[:params.limit]

    return ResponseBuilder.tool_response(
        f"✅ Retrieved {len(tickers)} trading pairs",
        {
            "tickers": tickers,
            "count": len(tickers),
            "exchange": EXCHANGE_NAME,
            "network": target.network,
            "timestamp": int(time.time() * 1000),
            "summary": {
                "totalPairs": len(all_tickers),
                "croBasePairs": count_cro_base_pairs(tickers),
                "usdBasePairs": count_usd_base_pairs(tickers),
            },
        },
    )


async def get_ticker(agent: CronosAnalyticsAgent, params: TickerInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    data = require_data(await target.get_ticker(params.instrument))

    ticker = data.get("result") if isinstance(data.get("result"), dict) else {}
    instrument = params.instrument

    return ResponseBuilder.tool_response(
        f"✅ Ticker data retrieved for {instrument}",
        {
            "instrument": instrument,
            **data,
            "exchange": EXCHANGE_NAME,
            "network": target.network,
            "timestamp": int(time.time() * 1000),
            "analysis": {
                "isCROPair": "CRO" in instrument,
                "isStablePair": "USD" in instrument,
                "priceAvailable": bool(ticker.get("a")),
                "volumeAvailable": bool(ticker.get("v")),
            },
        },
    )


async def lookup_cro_price(agent: CronosAnalyticsAgent) -> Optional[Dict[str, Any]]:
    """First available CRO ticker from ``CRO_PRICE_INSTRUMENTS``, else None."""
    for instrument in CRO_PRICE_INSTRUMENTS:
        response = await agent.get_ticker(instrument)
        if is_success(response):
            ticker = (response.get("data") or {}).get("result")
            if ticker:
                return ticker
        logger.debug(f"CRO price not available from {instrument}")
    return None


async def get_market_summary(agent: CronosAnalyticsAgent, params: MarketSummaryInput) -> Dict[str, Any]:
    target = resolve_target_agent(agent, params.network)
    tickers = _tickers_of(require_data(await target.get_all_tickers()))

    cro_price = await lookup_cro_price(target) if params.include_cro_pairs else None
    cro_pairs = (
        [t for t in tickers if "CRO_" in _instrument(t) or "_CRO" in _instrument(t)]
        if params.include_cro_pairs else []
    )

    return ResponseBuilder.tool_response(
        "✅ Market summary retrieved",
        {
            "exchange": EXCHANGE_NAME,
            "network": target.network,
            "timestamp": int(time.time() * 1000),
            "summary": {
                "totalTradingPairs": len(tickers),
                "croPrice": cro_price,
                "croBasePairs": count_cro_base_pairs(tickers),
                "usdBasePairs": count_usd_base_pairs(tickers),
            },
            "croPairs": cro_pairs,
            "networkInfo": {
                "nativeCurrency": target.network_info.native_currency,
                "blockExplorer": target.network_info.block_explorer,
            },
        },
    )


MARKET_TOOLS = [
    McpTool(
        name="cronos_get_all_tickers",
        description="Get all available trading pairs and market data from Crypto.com Exchange",
        input_model=TickersInput,
        handler=get_all_tickers,
        failure_message="Failed to get all tickers",
    ),
    McpTool(
        name="cronos_get_ticker",
        description="Get specific trading pair data and market information",
        input_model=TickerInput,
        handler=get_ticker,
        failure_message="Failed to get ticker for {instrument}",
    ),
    McpTool(
        name="cronos_get_market_summary",
        description="Get market summary and CRO-related trading data",
        input_model=MarketSummaryInput,
        handler=get_market_summary,
        failure_message="Failed to get market summary",
    ),
]
