"""
Tests for CronosAnalyticsAgent envelopes and network switching.
"""
import pytest
from unittest.mock import AsyncMock

from cronosmcp.agent import CronosAnalyticsAgent
from cronosmcp.exceptions import UpstreamError
from cronosmcp.toolkits.utils import HTTPClientError

from conftest import TOKEN, TX_HASH, WALLET


@pytest.fixture
def clients():
    return AsyncMock(), AsyncMock(), AsyncMock()


@pytest.fixture
def agent(config, clients):
    platform, exchange, vvs = clients
    return CronosAnalyticsAgent(config, platform_client=platform, exchange_client=exchange, vvs_toolkit=vvs)


class TestEnvelopes:

    @pytest.mark.asyncio
    async def test_native_balance_merges_context(self, agent, clients):
        clients[0].get_native_balance.return_value = {"balance": "1500000000000000000"}

        result = await agent.get_native_balance(WALLET)

        assert result["status"] == "success"
        assert result["data"] == {
            "balance": "1500000000000000000",
            "network": "cronos-mainnet",
            "currency": "CRO",
        }
        clients[0].get_native_balance.assert_awaited_once_with(WALLET)

    @pytest.mark.asyncio
    async def test_context_overrides_payload_fields(self, agent, clients):
        clients[0].get_erc20_balance.return_value = {"contractAddress": "stale", "balance": "5"}

        result = await agent.get_erc20_balance(WALLET, TOKEN)

        assert result["data"]["contractAddress"] == TOKEN

    @pytest.mark.asyncio
    async def test_transaction_explorer_link(self, agent, clients):
        clients[0].get_transaction.return_value = {"hash": TX_HASH}

        result = await agent.get_transaction(TX_HASH)

        assert result["data"]["blockExplorer"] == f"https://cronoscan.com/tx/{TX_HASH}"

    @pytest.mark.asyncio
    async def test_block_by_tag_context(self, agent, clients):
        clients[0].get_block_by_tag.return_value = {"number": "0x1"}

        result = await agent.get_block_by_tag("latest", include_transactions=True)

        clients[0].get_block_by_tag.assert_awaited_once_with("latest", True)
        assert result["data"]["blockTag"] == "latest"
        assert result["data"]["includeTransactions"] is True

    @pytest.mark.asyncio
    async def test_list_payload_kept_under_result(self, agent, clients):
        farms = [{"symbol": "VVS-CRO", "baseApr": "12.5"}]
        clients[0].get_all_farms.return_value = farms

        result = await agent.get_all_farms("vvsfinance")

        assert result["data"] == {"result": farms, "network": "cronos-mainnet", "protocol": "vvsfinance"}

    @pytest.mark.asyncio
    async def test_exchange_context(self, agent, clients, tickers):
        clients[1].get_all_tickers.return_value = {"result": tickers}

        result = await agent.get_all_tickers()

        assert result["data"]["result"] == tickers
        assert result["data"]["exchangeInfo"] == "Crypto.com Exchange data"

    @pytest.mark.asyncio
    async def test_upstream_error_message_is_kept(self, agent, clients):
        clients[1].get_ticker.side_effect = UpstreamError("exchange", "Instrument not found: DOGE_USD")

        result = await agent.get_ticker("DOGE_USD")

        assert result == {
            "status": "error",
            "message": "Instrument not found: DOGE_USD",
            "network": "cronos-mainnet",
        }

    @pytest.mark.asyncio
    async def test_empty_error_falls_back_to_default_message(self, agent, clients):
        clients[0].get_transaction.side_effect = HTTPClientError("")

        result = await agent.get_transaction(TX_HASH)

        assert result["message"] == "Failed to get transaction details"

    @pytest.mark.asyncio
    async def test_unexpected_errors_propagate(self, agent, clients):
        clients[0].get_current_block.side_effect = RuntimeError("bug")

        with pytest.raises(RuntimeError):
            await agent.get_current_block()


class TestNetworkInfo:

    def test_network_info(self, agent):
        data = agent.get_network_info()["data"]

        assert data["chainId"] == 25
        assert data["nativeCurrency"] == "CRO"
        assert data["hasApiKey"] is True
        assert data["canSwitchNetworks"] == {"cronos-mainnet": True, "cronos-zkevm-mainnet": True}

    def test_network_info_single_key(self, evm_only_config, clients):
        agent = CronosAnalyticsAgent(evm_only_config, *clients)

        assert agent.get_network_info()["data"]["canSwitchNetworks"]["cronos-zkevm-mainnet"] is False


class TestNetworkSwitching:

    def test_same_or_missing_network_returns_self(self, agent):
        assert agent.for_network(None) is agent
        assert agent.for_network("cronos-mainnet") is agent

    @pytest.mark.asyncio
    async def test_switch_is_cached(self, agent):
        switched = agent.for_network("cronos-zkevm-mainnet")

        assert switched is not agent
        assert switched.network == "cronos-zkevm-mainnet"
        assert switched.network_info.native_currency == "zkCRO"
        assert agent.for_network("cronos-zkevm-mainnet") is switched

        await switched.aclose()

    def test_missing_key_falls_back(self, evm_only_config, clients):
        agent = CronosAnalyticsAgent(evm_only_config, *clients)

        assert agent.for_network("cronos-zkevm-mainnet") is agent
        assert agent._network_agents == {}

    def test_unsupported_network_falls_back(self, agent):
        assert agent.for_network("ethereum") is agent

    @pytest.mark.asyncio
    async def test_aclose_closes_children(self, agent, clients):
        child = AsyncMock()
        agent._network_agents["cronos-zkevm-mainnet"] = child

        await agent.aclose()

        child.aclose.assert_awaited_once()
        assert agent._network_agents == {}
        for client in clients:
            client.aclose.assert_awaited_once()


class TestValidationHelpers:

    def test_helpers(self):
        assert CronosAnalyticsAgent.is_valid_address(WALLET)
        assert CronosAnalyticsAgent.is_valid_tx_hash(TX_HASH)
        assert CronosAnalyticsAgent.is_valid_cronos_id("alice.cro")
        assert CronosAnalyticsAgent.format_balance("1500000000000000000") == "1.5000"
