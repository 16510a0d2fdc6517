"""
Shared fixtures for the Cronos MCP test suite.
No test touches the network: HTTP clients are mocks and payloads are inline.
"""
import pytest
from unittest.mock import AsyncMock, Mock

from cronosmcp.config import ApiKeys, CronosConfig
from cronosmcp.toolkits.utils import DataHTTPClient, WCRO_ADDRESS

USDC_ADDRESS = "0xc21223249CA28397B4B6541dfFaEcC539BfF0c59"
VVS_ADDRESS = "0x2D03bECE6747ADC00E1a131BBA1469C15fD11e03"
WALLET = "0x1111111111111111111111111111111111111111"
TOKEN = "0x2222222222222222222222222222222222222222"
TX_HASH = "0x" + "ab" * 32


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture
def config():
    """Mainnet configuration with keys for both networks."""
    return CronosConfig(
        network="cronos-mainnet",
        api_keys=ApiKeys(evm="evm-test-key-1234", zkevm="zk-test-key-5678"),
    )


@pytest.fixture
def evm_only_config():
    return CronosConfig(network="cronos-mainnet", api_keys=ApiKeys(evm="evm-test-key-1234"))


# ============================================================================
# HTTP MOCKS
# ============================================================================

@pytest.fixture
def mock_http_client():
    """DataHTTPClient stand-in; set ``get.return_value`` per test."""
    client = Mock(spec=DataHTTPClient)
    client.add_endpoint = AsyncMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.aclose = AsyncMock()
    return client


# ============================================================================
# VVS PAYLOADS
# ============================================================================

@pytest.fixture
def raw_pairs():
    """Five upstream pair entries: three usable, two rejected."""
    return {
        f"{WCRO_ADDRESS}_{USDC_ADDRESS}": {
            "base_symbol": "WCRO",
            "quote_symbol": "USDC",
            "liquidity": "25000000.5",
            "liquidity_CRO": "300000000",
            "base_volume": "100000",
            "quote_volume": "150000",
            "price": "0.08",
        },
        "0xAAA_0xBBB": {
            "base_symbol": "FOO",
            "quote_symbol": "BAR",
            "liquidity": "5e15",
            "base_volume": "0",
            "quote_volume": "",
            "price": "abc",
        },
        f"{VVS_ADDRESS}_{WCRO_ADDRESS}": {
            "base_symbol": "VVS",
            "quote_symbol": "WCRO",
            "liquidity": "1000000",
            "liquidity_CRO": "12000000",
            "base_volume": "5000",
            "quote_volume": "2500",
            "price": "0.000004",
        },
        "0xEEE_0xFFF": "corrupted",
        "0x111_0x222": {
            "base_symbol": "dai",
            "quote_symbol": "XYZ",
            "liquidity": "-10",
            "base_volume": "10",
            "quote_volume": "0",
            "price": "2",
        },
    }


@pytest.fixture
def raw_tokens():
    """Four upstream token entries: two with valid prices."""
    return {
        WCRO_ADDRESS: {"name": "Wrapped CRO", "symbol": "WCRO", "price": "0.08", "price_CRO": "1"},
        USDC_ADDRESS: {"name": "USD Coin", "symbol": "USDC", "price": "1.0001", "price_CRO": "12.5"},
        "0xdead000000000000000000000000000000000000": {"name": "Dead", "symbol": "DEAD", "price": "0", "price_CRO": "abc"},
        "0xbad0000000000000000000000000000000000000": None,
    }


@pytest.fixture
def pairs_payload(raw_pairs):
    return {"updated_at": 1718000000000, "data": raw_pairs}


@pytest.fixture
def tokens_payload(raw_tokens):
    return {"updated_at": 1718000000000, "data": raw_tokens}


@pytest.fixture
def supply_payload():
    return {
        "totalSupply": "100000000000",
        "circulatingSupply": "50000000000",
        "burnedSupply": "25000000000",
    }


# ============================================================================
# EXCHANGE PAYLOADS
# ============================================================================

@pytest.fixture
def tickers():
    return [
        {"i": "CRO_USD", "a": "0.0812", "v": "1500000", "h": "0.083", "l": "0.079", "c": "0.012"},
        {"i": "CRO_USDT", "a": "0.0811", "v": "900000"},
        {"i": "BTC_USDC", "a": "65000.1", "v": "12"},
        {"i": "VVS_CRO", "a": "0.00005", "v": "100"},
        {"i": "ETH_BTC", "a": "0.05", "v": ""},
    ]


@pytest.fixture
def tickers_payload(tickers):
    return {"code": 0, "method": "public/get-tickers", "result": {"data": tickers}}
