"""
Tests for DexDataNormalizer: sanitizing, validation bands, unit-scale
correction, batch reports and formatting of cleaned records.
"""
import math

import pytest

from cronosmcp.toolkits.utils import DexDataNormalizer, WCRO_ADDRESS
from cronosmcp.toolkits.utils.dex_normalizer import (
    DataQualityReport,
    RawPairRecord,
    RawTokenRecord,
)

from conftest import USDC_ADDRESS, VVS_ADDRESS


class TestSanitizeNumber:

    @pytest.mark.parametrize("raw", ["", "abc", "Infinity", "-Infinity", "NaN", "1e20", None, True, [], {}])
    def test_unusable_inputs_are_zero(self, raw):
        assert DexDataNormalizer.sanitize_number(raw) == 0

    @pytest.mark.parametrize("raw,expected", [
        ("12.5", 12.5),
        (" 42 ", 42.0),
        (7, 7.0),
        ("1e15", 1e15),
        ("-5", -5.0),
        (0.000001, 0.000001),
    ])
    def test_numeric_inputs_parse(self, raw, expected):
        assert DexDataNormalizer.sanitize_number(raw) == expected

    def test_ceiling_applies_to_both_signs(self):
        assert DexDataNormalizer.sanitize_number(1.5e15) == 0
        assert DexDataNormalizer.sanitize_number("-2e15") == 0

    def test_result_is_always_finite(self):
        for raw in ["inf", float("inf"), float("nan"), "1e400", object()]:
            value = DexDataNormalizer.sanitize_number(raw)
            assert math.isfinite(value)


class TestValidationBands:

    def test_liquidity_band(self):
        assert DexDataNormalizer.is_valid_liquidity_value(0.5) is False
        assert DexDataNormalizer.is_valid_liquidity_value(1) is True
        assert DexDataNormalizer.is_valid_liquidity_value(1e9) is True
        assert DexDataNormalizer.is_valid_liquidity_value(1e10) is False

    def test_price_band(self):
        assert DexDataNormalizer.is_valid_price(0) is False
        assert DexDataNormalizer.is_valid_price(0.000001) is True
        assert DexDataNormalizer.is_valid_price(100000) is True
        assert DexDataNormalizer.is_valid_price(200000) is False


class TestNormalizePair:

    def test_unit_scale_correction(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"liquidity": "5e15"})

        assert record.liquidity_usd == pytest.approx(0.005)
        assert record.data_quality.has_valid_liquidity is False

    def test_scale_correction_applies_to_native_liquidity(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"liquidity_CRO": "2.5e20"})

        assert record.liquidity_native == pytest.approx(250.0)

    def test_negative_liquidity_is_zeroed(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"liquidity": "-10"})

        assert record.liquidity_usd == 0
        assert record.data_quality.has_valid_liquidity is False

    def test_liquidity_above_band_is_zeroed(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"liquidity": "5e9"})

        assert record.liquidity_usd == 0
        assert record.data_quality.has_valid_liquidity is False

    def test_native_liquidity_above_band_is_zeroed(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"liquidity": "100", "liquidity_CRO": "5e11"})

        assert record.liquidity_native == 0
        assert record.data_quality.has_valid_native_liquidity is False
        assert record.data_quality.has_valid_liquidity is True
        assert record.formatted["liquidityCRO"] == "0.00 CRO"
        assert record.is_valid is True

    def test_invalid_price_is_zeroed_and_flagged(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"liquidity": "100", "price": "250000"})

        assert record.price == 0
        assert record.data_quality.has_valid_price is False
        assert record.formatted["price"] == "$0.00"

    def test_price_falls_back_to_last_price(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"last_price": "1.5"})

        assert record.price == 1.5
        assert record.data_quality.has_valid_price is True

    def test_native_token_detection_is_case_sensitive(self):
        exact = DexDataNormalizer.normalize_pair(f"{WCRO_ADDRESS}_{USDC_ADDRESS}", {})
        lowered = DexDataNormalizer.normalize_pair(f"{WCRO_ADDRESS.lower()}_{USDC_ADDRESS}", {})

        assert exact.has_native_token is True
        assert lowered.has_native_token is False

    def test_stable_pair_detection(self):
        usdc = DexDataNormalizer.normalize_pair("0xA_0xB", {"base_symbol": "USDC", "quote_symbol": "ANY"})
        lower = DexDataNormalizer.normalize_pair("0xA_0xB", {"base_symbol": "WCRO", "quote_symbol": "frax"})
        neither = DexDataNormalizer.normalize_pair("0xA_0xB", {"base_symbol": "FOO", "quote_symbol": "BAR"})

        assert usdc.is_stable_pair is True
        assert lower.is_stable_pair is True
        assert neither.is_stable_pair is False

    def test_non_text_symbols_are_dropped(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"base_symbol": 12, "quote_symbol": "USDT"})

        assert record.base_symbol is None
        assert record.is_stable_pair is True

    def test_negative_volumes_are_clamped(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"base_volume": "-3", "quote_volume": "4"})

        assert record.base_volume == 0
        assert record.total_volume == 4
        assert record.data_quality.has_volume is True

    def test_formatted_fields(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {
            "liquidity": "1234",
            "liquidity_CRO": "15000",
            "base_volume": "1000000",
            "quote_volume": "500000",
            "price": "1234.5",
        })

        assert record.formatted == {
            "liquidity": "$1.23K",
            "liquidityCRO": "15,000.00 CRO",
            "volume24h": "$1.50M",
            "price": "$1,234.50",
        }

    def test_to_dict_shape(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", {"liquidity": "10", "base_volume": "1"})
        data = record.to_dict()

        assert data["pairId"] == "0xA_0xB"
        assert data["tokens"] == ["0xA", "0xB"]
        assert data["liquidityUSD"] == 10.0
        assert data["volume24h"] == 1.0
        assert data["dataQuality"] == {
            "hasValidLiquidity": True,
            "hasValidPrice": False,
            "hasVolume": True,
            "hasValidCROLiquidity": False,
        }

    def test_non_object_input_yields_empty_record(self):
        record = DexDataNormalizer.normalize_pair("0xA_0xB", "garbage")

        assert record.liquidity_usd == 0
        assert record.is_valid is False


class TestNormalizePairBatch:

    def test_counts_and_ordering(self, raw_pairs):
        batch = DexDataNormalizer.normalize_pair_batch(raw_pairs)

        assert batch.report.total == 5
        assert batch.report.valid == 3
        assert batch.report.rejected == 2
        assert batch.report.issues_detected is True

        liquidity = [r.liquidity_usd for r in batch.records]
        assert liquidity == sorted(liquidity, reverse=True)
        assert batch.records[0].pair_id == f"{WCRO_ADDRESS}_{USDC_ADDRESS}"
        assert batch.records[1].pair_id == f"{VVS_ADDRESS}_{WCRO_ADDRESS}"

    def test_limit_truncates_records_not_report(self, raw_pairs):
        batch = DexDataNormalizer.normalize_pair_batch(raw_pairs, limit=1)

        assert len(batch.records) == 1
        assert batch.report.total == 5
        assert batch.report.valid == 3

    def test_volume_alone_qualifies_a_pair(self, raw_pairs):
        batch = DexDataNormalizer.normalize_pair_batch(raw_pairs)
        ids = [r.pair_id for r in batch.records]

        assert "0x111_0x222" in ids
        assert "0xAAA_0xBBB" not in ids

    def test_sort_is_stable_for_ties(self):
        raw = {
            "first": {"liquidity": "100"},
            "second": {"liquidity": "500"},
            "third": {"liquidity": "100"},
            "fourth": {"liquidity": "100"},
        }
        batch = DexDataNormalizer.normalize_pair_batch(raw)

        assert [r.pair_id for r in batch.records] == ["second", "first", "third", "fourth"]

    def test_all_invalid_is_not_an_error(self):
        batch = DexDataNormalizer.normalize_pair_batch({"a": {"liquidity": "0"}, "b": 5})

        assert batch.records == ()
        assert batch.report.to_dict("Pairs") == {
            "totalPairs": 2,
            "validPairs": 0,
            "rejectedPairs": 2,
            "issuesDetected": True,
        }

    @pytest.mark.parametrize("raw", [None, [], "pairs", 12])
    def test_non_mapping_batches_are_empty(self, raw):
        batch = DexDataNormalizer.normalize_pair_batch(raw)

        assert batch.records == ()
        assert batch.report.total == 0
        assert batch.report.issues_detected is False

    def test_idempotent_on_cleaned_output(self, raw_pairs):
        first = DexDataNormalizer.normalize_pair_batch(raw_pairs)
        cleaned = {
            r.pair_id: {
                "base_symbol": r.base_symbol,
                "quote_symbol": r.quote_symbol,
                "liquidity": r.liquidity_usd,
                "liquidity_CRO": r.liquidity_native,
                "base_volume": r.base_volume,
                "quote_volume": r.quote_volume,
                "price": r.price,
            }
            for r in first.records
        }
        second = DexDataNormalizer.normalize_pair_batch(cleaned)

        assert [r.to_dict() for r in second.records] == [r.to_dict() for r in first.records]


class TestNormalizeTokens:

    def test_batch_counts_and_order(self, raw_tokens):
        batch = DexDataNormalizer.normalize_token_batch(raw_tokens)

        assert [t.symbol for t in batch.records] == ["WCRO", "USDC"]
        assert batch.report.to_dict("Tokens") == {
            "totalTokens": 4,
            "validTokens": 2,
            "rejectedTokens": 2,
            "issuesDetected": True,
        }

    def test_either_price_makes_a_token_valid(self):
        batch = DexDataNormalizer.normalize_token_batch({
            "0xA": {"price": "0", "price_CRO": "3"},
            "0xB": {"price": "2", "price_CRO": "-1"},
        })

        assert batch.report.valid == 2
        assert batch.records[0].price_usd == 0
        assert batch.records[1].price_native == 0

    def test_wrapped_native_flag_ignores_case(self):
        record = DexDataNormalizer.normalize_token(WCRO_ADDRESS.lower(), {"price": "0.08"})

        assert record.is_canonical_wrapped_native is True
        assert record.to_dict()["isCanonicalWrappedNative"] is True

    def test_token_formatting(self):
        record = DexDataNormalizer.normalize_token(USDC_ADDRESS, {"price": "1.0001", "price_CRO": "12.5"})

        assert record.formatted == {"priceUSD": "$1.0001", "priceCRO": "12.5000 CRO"}

    def test_limit_keeps_report_over_whole_batch(self, raw_tokens):
        batch = DexDataNormalizer.normalize_token_batch(raw_tokens, limit=1)

        assert len(batch.records) == 1
        assert batch.report.valid == 2


class TestRawRecords:

    def test_extra_fields_are_kept(self):
        record = RawPairRecord.from_raw({"liquidity": "1", "pool_type": "v2"})

        assert record.liquidity == "1"
        assert record.model_extra == {"pool_type": "v2"}

    @pytest.mark.parametrize("raw", [None, "x", 3, ["a"]])
    def test_non_objects_are_rejected(self, raw):
        assert RawPairRecord.from_raw(raw) is None
        assert RawTokenRecord.from_raw(raw) is None

    def test_report_without_rejections(self):
        report = DataQualityReport.from_counts(total=3, valid=3)

        assert report.rejected == 0
        assert report.issues_detected is False
