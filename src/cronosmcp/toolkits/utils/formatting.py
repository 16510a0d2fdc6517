"""Value Formatting Utilities
==========================

Human-readable renderings of USD amounts, unit prices, token amounts and
raw on-chain balances. The magnitude ladders are fixed and must stay stable
because clients compare the rendered strings.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

__all__ = ["ValueFormatter"]

_SUFFIXES = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)

# Raw integer amounts above this are 18-decimal fixed point
_FIXED_POINT_THRESHOLD = 1e15
_FIXED_POINT_DIVISOR = 1e18


def _lenient_float(raw: Any) -> float:
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def _to_fixed(value: float, places: int, grouping: bool = False) -> str:
    """Fixed-point rendering of the exact binary value, ties rounded away from zero."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    return f"{rounded:,f}" if grouping else f"{rounded:f}"


class ValueFormatter:
    """Static formatting helpers.

    Example:
        ```python
        ValueFormatter.format_currency(1234)        # "$1.23K"
        ValueFormatter.format_price(0.00000001)     # "$0.00000001"
        ValueFormatter.format_token_amount("5e26")  # "500.00M"
        ```
    """

    @staticmethod
    def _ladder(value: float, prefix: str) -> str:
        for threshold, suffix in _SUFFIXES:
            if value >= threshold:
                return f"{prefix}{_to_fixed(value / threshold, 2)}{suffix}"
        if value >= 1:
            return f"{prefix}{_to_fixed(value, 2)}"
        if value >= 0.01:
            return f"{prefix}{_to_fixed(value, 4)}"
        return f"{prefix}{_to_fixed(value, 8)}"

    @staticmethod
    def format_currency(value: float) -> str:
        """Format a USD amount with a T/B/M/K suffix ladder.

        Non-finite, zero and negative values render as ``"$0.00"``.
        """
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return "$0.00"
        if not math.isfinite(value) or value <= 0:
            return "$0.00"
        return ValueFormatter._ladder(float(value), "$")

    @staticmethod
    def format_price(value: float, prefix: str = "$") -> str:
        """Format a unit price.

        ``>= 1000`` uses thousands separators and 2 decimals, ``>= 1`` 4
        decimals, ``>= 0.0001`` 6 decimals, anything positive 8 decimals.
        """
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return f"{prefix}0.00"
        if not math.isfinite(value) or value <= 0:
            return f"{prefix}0.00"
        if value >= 1000:
            return f"{prefix}{_to_fixed(value, 2, grouping=True)}"
        if value >= 1:
            return f"{prefix}{_to_fixed(value, 4)}"
        if value >= 0.0001:
            return f"{prefix}{_to_fixed(value, 6)}"
        return f"{prefix}{_to_fixed(value, 8)}"

    @staticmethod
    def format_token_amount(raw: Any) -> str:
        """Format a supply figure (numeric or numeric string) without a currency sign."""
        value = _lenient_float(raw)
        if value > _FIXED_POINT_THRESHOLD:
            value = value / _FIXED_POINT_DIVISOR
        if value <= 0:
            return "0.00"
        return ValueFormatter._ladder(value, "")

    @staticmethod
    def format_balance(balance: Any, decimals: int = 18) -> str:
        """Format a raw on-chain balance given its token decimals."""
        value = _lenient_float(balance) / (10 ** decimals)
        if value >= 1e9:
            return f"{_to_fixed(value / 1e9, 2)}B"
        if value >= 1e6:
            return f"{_to_fixed(value / 1e6, 2)}M"
        if value >= 1e3:
            return f"{_to_fixed(value / 1e3, 2)}K"
        return f"{_to_fixed(value, 4)}"

    @staticmethod
    def format_percentage(numerator: Any, denominator: Any) -> str:
        """``numerator / denominator`` as ``"X.XX%"``; ``"0.00%"`` when undefined."""
        num = _lenient_float(numerator)
        den = _lenient_float(denominator)
        if den == 0:
            return "0.00%"
        return f"{_to_fixed(num / den * 100, 2)}%"
