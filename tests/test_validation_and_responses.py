"""Tests for identifier validation and response envelopes."""
import pytest
from unittest.mock import patch

from cronosmcp.toolkits.utils import DataValidator, ResponseBuilder, is_success

from conftest import TX_HASH, WALLET


class TestDataValidator:

    @pytest.mark.parametrize("address,expected", [
        (WALLET, True),
        ("0x5C7F8A570d578ED84E63fdFA7b1eE72dEae1AE23", True),
        ("0x123", False),
        ("5C7F8A570d578ED84E63fdFA7b1eE72dEae1AE23", False),
        ("0xZZ7F8A570d578ED84E63fdFA7b1eE72dEae1AE23", False),
        (None, False),
    ])
    def test_addresses(self, address, expected):
        assert DataValidator.is_valid_address(address) is expected

    def test_tx_hashes(self):
        assert DataValidator.is_valid_tx_hash(TX_HASH) is True
        assert DataValidator.is_valid_tx_hash(TX_HASH[:-2]) is False

    @pytest.mark.parametrize("name,expected", [
        ("alice.cro", True),
        ("my_name-1.cro", True),
        ("alice.eth", False),
        ("al ice.cro", False),
        (".cro", False),
    ])
    def test_cronos_ids(self, name, expected):
        assert DataValidator.is_valid_cronos_id(name) is expected

    def test_validate_structure(self):
        ok = DataValidator.validate_structure({"code": 0, "result": {}}, ["result"], dict)
        missing = DataValidator.validate_structure({"code": 0}, ["result"], dict)
        wrong_type = DataValidator.validate_structure([1, 2], expected_type=dict)

        assert ok["valid"] is True
        assert missing["valid"] is False
        assert "Missing required fields" in missing["errors"][0]
        assert wrong_type["valid"] is False
        assert wrong_type["size"] == 2


class TestResponseBuilder:

    def test_success_envelope(self):
        builder = ResponseBuilder("cronos-mainnet")

        with patch("time.time", return_value=1718000000.5):
            response = builder.success_response({"balance": "1"})

        assert response == {
            "status": "success",
            "data": {"balance": "1"},
            "network": "cronos-mainnet",
            "timestamp": 1718000000500,
        }
        assert is_success(response)

    def test_error_envelope(self):
        response = ResponseBuilder("cronos-zkevm-mainnet").error_response("Failed to get native balance")

        assert response == {
            "status": "error",
            "message": "Failed to get native balance",
            "network": "cronos-zkevm-mainnet",
        }
        assert not is_success(response)

    def test_reserved_fields_cannot_be_overridden(self):
        response = ResponseBuilder("cronos-mainnet").success_response({}, status="error", extra=1)

        assert response["status"] == "success"
        assert response["extra"] == 1

    def test_tool_response(self):
        assert ResponseBuilder.tool_response("✅ done", {"a": 1}) == {
            "status": "success",
            "message": "✅ done",
            "data": {"a": 1},
        }
