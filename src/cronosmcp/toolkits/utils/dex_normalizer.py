"""DEX Data Normalizer
===================

Turns the loosely typed aggregates served by the VVS Finance info API into
bounded, unit-corrected records with a data-quality report attached.

The upstream aggregator is known to emit malformed numbers, wildly scaled
values and, occasionally, raw 18-decimal integers instead of decimal
amounts. Field-level defects never raise: a bad field degrades to ``0`` and
is flagged in the record's ``dataQuality`` block. Records that are not
objects at all are rejected and counted in the batch report.

Example:
    ```python
    payload = await http_client.get("vvs", "/pairs")
    batch = DexDataNormalizer.normalize_pair_batch(payload.get("data"), limit=100)
    batch.report.to_dict("Pairs")
    # {"totalPairs": 412, "validPairs": 380, "rejectedPairs": 32, "issuesDetected": True}
    ```
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from loguru import logger
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .formatting import ValueFormatter

__all__ = [
    "WCRO_ADDRESS",
    "STABLE_SYMBOLS",
    "RawPairRecord",
    "RawTokenRecord",
    "PairDataQuality",
    "TokenDataQuality",
    "CleanedPairRecord",
    "CleanedTokenRecord",
    "DataQualityReport",
    "NormalizedBatch",
    "DexDataNormalizer",
]

# Canonical wrapped CRO used as the base asset of VVS pairs
WCRO_ADDRESS = "0x5C7F8A570d578ED84E63fdFA7b1eE72dEae1AE23"
STABLE_SYMBOLS = frozenset({"USDT", "USDC", "DAI", "BUSD", "TUSD", "FRAX"})

MAX_SANE_VALUE = 1e15
FIXED_POINT_THRESHOLD = 1e12
FIXED_POINT_DIVISOR = 1e18

MIN_LIQUIDITY_USD = 1.0
MAX_LIQUIDITY_USD = 1e9
MIN_PRICE = 0.000001
MAX_PRICE = 100000.0


# =========================================================================
# Raw records (boundary parse)
# =========================================================================

def _symbol_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


class RawPairRecord(BaseModel):
    """One ``data`` entry of ``/summary`` or ``/pairs``, as served upstream.

    Numeric fields are kept untyped; ``DexDataNormalizer`` does the parsing.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    liquidity: Any = None
    liquidity_CRO: Any = None
    base_volume: Any = None
    quote_volume: Any = None
    price: Any = None
    last_price: Any = None
    base_symbol: Optional[str] = None
    quote_symbol: Optional[str] = None
    base_name: Optional[str] = None
    quote_name: Optional[str] = None

    @field_validator("base_symbol", "quote_symbol", "base_name", "quote_name", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _symbol_or_none(value)

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["RawPairRecord"]:
        """Parse an upstream entry; ``None`` when it is not an object."""
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, Mapping):
            return None
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            logger.debug(f"Rejected pair entry: {e.error_count()} validation errors")
            return None


class RawTokenRecord(BaseModel):
    """One ``data`` entry of ``/tokens`` or the body of ``/tokens/{address}``."""

    model_config = ConfigDict(extra="allow", frozen=True)

    name: Optional[str] = None
    symbol: Optional[str] = None
    price: Any = None
    price_CRO: Any = None
    volume: Any = None
    market_cap: Any = None

    @field_validator("name", "symbol", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Optional[str]:
        return _symbol_or_none(value)

    @classmethod
    def from_raw(cls, raw: Any) -> Optional["RawTokenRecord"]:
        if isinstance(raw, cls):
            return raw
        if not isinstance(raw, Mapping):
            return None
        try:
            return cls.model_validate(dict(raw))
        except ValidationError as e:
            logger.debug(f"Rejected token entry: {e.error_count()} validation errors")
            return None


# =========================================================================
# Cleaned records
# =========================================================================

@dataclass(frozen=True)
class PairDataQuality:
    has_valid_liquidity: bool
    has_valid_price: bool
    has_volume: bool
    has_valid_native_liquidity: bool

    def to_dict(self) -> Dict[str, bool]:
        return {
            "hasValidLiquidity": self.has_valid_liquidity,
            "hasValidPrice": self.has_valid_price,
            "hasVolume": self.has_volume,
            "hasValidCROLiquidity": self.has_valid_native_liquidity,
        }


@dataclass(frozen=True)
class TokenDataQuality:
    has_valid_usd_price: bool
    has_valid_native_price: bool

    def to_dict(self) -> Dict[str, bool]:
        return {
            "hasValidUSDPrice": self.has_valid_usd_price,
            "hasValidCROPrice": self.has_valid_native_price,
        }


@dataclass(frozen=True)
class CleanedPairRecord:
    """A trading pair with finite, non-negative and bounded numeric fields."""

    pair_id: str
    base_symbol: Optional[str]
    quote_symbol: Optional[str]
    liquidity_usd: float
    liquidity_native: float
    base_volume: float
    quote_volume: float
    price: float
    has_native_token: bool
    is_stable_pair: bool
    data_quality: PairDataQuality
    formatted: Dict[str, str] = field(default_factory=dict)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(self.pair_id.split("_"))

    @property
    def total_volume(self) -> float:
        return self.base_volume + self.quote_volume

    @property
    def is_valid(self) -> bool:
        # Price alone never qualifies a pair; illiquid pairs legitimately quote 0
        return self.data_quality.has_valid_liquidity or self.data_quality.has_volume

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pairId": self.pair_id,
            "tokens": list(self.tokens),
            "baseSymbol": self.base_symbol,
            "quoteSymbol": self.quote_symbol,
            "liquidityUSD": self.liquidity_usd,
            "liquidityCRO": self.liquidity_native,
            "baseVolume": self.base_volume,
            "quoteVolume": self.quote_volume,
            "volume24h": self.total_volume,
            "price": self.price,
            "hasNativeToken": self.has_native_token,
            "isStablePair": self.is_stable_pair,
            "dataQuality": self.data_quality.to_dict(),
            "formatted": dict(self.formatted),
        }


@dataclass(frozen=True)
class CleanedTokenRecord:
    address: str
    name: Optional[str]
    symbol: Optional[str]
    price_usd: float
    price_native: float
    volume: float
    market_cap: float
    is_canonical_wrapped_native: bool
    data_quality: TokenDataQuality
    formatted: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return self.data_quality.has_valid_usd_price or self.data_quality.has_valid_native_price

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "name": self.name,
            "symbol": self.symbol,
            "priceUSD": self.price_usd,
            "priceCRO": self.price_native,
            "volume": self.volume,
            "marketCap": self.market_cap,
            "isCanonicalWrappedNative": self.is_canonical_wrapped_native,
            "dataQuality": self.data_quality.to_dict(),
            "formatted": dict(self.formatted),
        }


@dataclass(frozen=True)
class DataQualityReport:
    """Counts over a whole input batch, independent of any output limit."""

    total: int
    valid: int
    rejected: int
    issues_detected: bool

    @classmethod
    def from_counts(cls, total: int, valid: int) -> "DataQualityReport":
        rejected = total - valid
        return cls(total=total, valid=valid, rejected=rejected, issues_detected=rejected > 0)

    def to_dict(self, entity: str = "Records") -> Dict[str, Any]:
        return {
            f"total{entity}": self.total,
            f"valid{entity}": self.valid,
            f"rejected{entity}": self.rejected,
            "issuesDetected": self.issues_detected,
        }


@dataclass(frozen=True)
class NormalizedBatch:
    records: Tuple[Any, ...]
    report: DataQualityReport


# =========================================================================
# Normalizer
# =========================================================================

def _parse_float(raw: Any) -> float:
    """Strict float parse; ``0.0`` for anything unusable, no ceiling applied."""
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip()
        if not raw:
            return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    return value if math.isfinite(value) else 0.0


class DexDataNormalizer:
    """Stateless sanitize/validate/derive routines for DEX aggregates."""

    @staticmethod
    def sanitize_number(raw: Any) -> float:
        """Parse ``raw`` to a finite float.

        Returns ``0.0`` when parsing fails, the result is not finite, or its
        magnitude exceeds ``1e15``. Never raises.
        """
        value = _parse_float(raw)
        if abs(value) > MAX_SANE_VALUE:
            return 0.0
        return value

    @staticmethod
    def is_valid_liquidity_value(value: float) -> bool:
        return MIN_LIQUIDITY_USD <= value <= MAX_LIQUIDITY_USD

    @staticmethod
    def is_valid_price(value: float) -> bool:
        return MIN_PRICE <= value <= MAX_PRICE

    @staticmethod
    def _scaled_liquidity(raw: Any) -> float:
        value = _parse_float(raw)
        if value > FIXED_POINT_THRESHOLD:
            # Unconverted 18-decimal integer from the aggregator
            value = value / FIXED_POINT_DIVISOR
        return max(DexDataNormalizer.sanitize_number(value), 0.0)

    @staticmethod
    def _bounded_liquidity(raw: Any) -> Tuple[float, bool]:
        """Scale-corrected liquidity, zeroed above the band, and its validity flag."""
        value = DexDataNormalizer._scaled_liquidity(raw)
        if value > MAX_LIQUIDITY_USD:
            value = 0.0
        return value, DexDataNormalizer.is_valid_liquidity_value(value)

    @staticmethod
    def _non_negative(raw: Any) -> float:
        return max(DexDataNormalizer.sanitize_number(raw), 0.0)

    @staticmethod
    def is_stable_pair(base_symbol: Optional[str], quote_symbol: Optional[str]) -> bool:
        return any(
            symbol is not None and symbol.upper() in STABLE_SYMBOLS
            for symbol in (base_symbol, quote_symbol)
        )

    @staticmethod
    def normalize_pair(pair_id: str, raw: Any) -> CleanedPairRecord:
        record = RawPairRecord.from_raw(raw) or RawPairRecord()

        liquidity_usd, has_valid_liquidity = DexDataNormalizer._bounded_liquidity(record.liquidity)
        liquidity_native, has_valid_native_liquidity = DexDataNormalizer._bounded_liquidity(
            record.liquidity_CRO
        )

        raw_price = record.price if record.price not in (None, "") else record.last_price
        price = DexDataNormalizer.sanitize_number(raw_price)
        has_valid_price = DexDataNormalizer.is_valid_price(price)
        if not has_valid_price:
            price = 0.0

        base_volume = DexDataNormalizer._non_negative(record.base_volume)
        quote_volume = DexDataNormalizer._non_negative(record.quote_volume)

        formatted = {
            "liquidity": ValueFormatter.format_currency(liquidity_usd),
            "liquidityCRO": f"{ValueFormatter.format_price(liquidity_native, prefix='')} CRO",
            "volume24h": ValueFormatter.format_currency(base_volume + quote_volume),
            "price": ValueFormatter.format_price(price),
        }

        return CleanedPairRecord(
            pair_id=pair_id,
            base_symbol=record.base_symbol,
            quote_symbol=record.quote_symbol,
            liquidity_usd=liquidity_usd,
            liquidity_native=liquidity_native,
            base_volume=base_volume,
            quote_volume=quote_volume,
            price=price,
            has_native_token=WCRO_ADDRESS in pair_id,
            is_stable_pair=DexDataNormalizer.is_stable_pair(record.base_symbol, record.quote_symbol),
            data_quality=PairDataQuality(
                has_valid_liquidity=has_valid_liquidity,
                has_valid_price=has_valid_price,
                has_volume=(base_volume + quote_volume) > 0,
                has_valid_native_liquidity=has_valid_native_liquidity,
            ),
            formatted=formatted,
        )

    @staticmethod
    def normalize_token(address: str, raw: Any) -> CleanedTokenRecord:
        record = RawTokenRecord.from_raw(raw) or RawTokenRecord()

        price_usd = DexDataNormalizer.sanitize_number(record.price)
        has_valid_usd_price = DexDataNormalizer.is_valid_price(price_usd)
        if not has_valid_usd_price:
            price_usd = 0.0

        price_native = DexDataNormalizer.sanitize_number(record.price_CRO)
        has_valid_native_price = DexDataNormalizer.is_valid_price(price_native)
        if not has_valid_native_price:
            price_native = 0.0

        return CleanedTokenRecord(
            address=address,
            name=record.name,
            symbol=record.symbol,
            price_usd=price_usd,
            price_native=price_native,
            volume=DexDataNormalizer._non_negative(record.volume),
            market_cap=DexDataNormalizer._non_negative(record.market_cap),
            is_canonical_wrapped_native=address.lower() == WCRO_ADDRESS.lower(),
            data_quality=TokenDataQuality(
                has_valid_usd_price=has_valid_usd_price,
                has_valid_native_price=has_valid_native_price,
            ),
            formatted={
                "priceUSD": ValueFormatter.format_price(price_usd),
                "priceCRO": f"{ValueFormatter.format_price(price_native, prefix='')} CRO",
            },
        )

    @staticmethod
    def _entries(raw_entries: Any, kind: str):
        if raw_entries is None:
            return []
        if not isinstance(raw_entries, Mapping):
            logger.warning(f"Expected a mapping of {kind}, got {type(raw_entries).__name__}")
            return []
        return list(raw_entries.items())

    @staticmethod
    def normalize_pair_batch(raw_entries: Any, limit: Optional[int] = None) -> NormalizedBatch:
        """Normalize a ``{pairId: rawPair}`` mapping.

        Valid pairs (valid liquidity or non-zero volume) are sorted by USD
        liquidity, descending and stable, then truncated to ``limit``. The
        report covers every input entry.
        """
        entries = DexDataNormalizer._entries(raw_entries, "pairs")

        valid = []
        for pair_id, raw in entries:
            parsed = RawPairRecord.from_raw(raw)
            if parsed is None:
                logger.debug(f"Rejected non-object pair entry '{pair_id}'")
                continue
            record = DexDataNormalizer.normalize_pair(str(pair_id), parsed)
            if record.is_valid:
                valid.append(record)

        report = DataQualityReport.from_counts(total=len(entries), valid=len(valid))
        ranked = sorted(valid, key=lambda r: r.liquidity_usd, reverse=True)
        if limit is not None:
            ranked = ranked[:max(limit, 0)]

        logger.debug(f"Normalized {report.total} pairs: {report.valid} valid, {report.rejected} rejected")
        return NormalizedBatch(records=tuple(ranked), report=report)

    @staticmethod
    def normalize_token_batch(raw_entries: Any, limit: Optional[int] = None) -> NormalizedBatch:
        """Normalize a ``{address: rawToken}`` mapping, keeping input order."""
        entries = DexDataNormalizer._entries(raw_entries, "tokens")

        valid = []
        for address, raw in entries:
            parsed = RawTokenRecord.from_raw(raw)
            if parsed is None:
                logger.debug(f"Rejected non-object token entry '{address}'")
                continue
            record = DexDataNormalizer.normalize_token(str(address), parsed)
            if record.is_valid:
                valid.append(record)

        report = DataQualityReport.from_counts(total=len(entries), valid=len(valid))
        if limit is not None:
            valid = valid[:max(limit, 0)]

        logger.debug(f"Normalized {report.total} tokens: {report.valid} valid, {report.rejected} rejected")
        return NormalizedBatch(records=tuple(valid), report=report)
