"""Statistical Analysis Helper for DEX Aggregates
==============================================

Distribution statistics over cleaned pair liquidity and volume figures,
computed with NumPy.

Key Features:
- Percentile/spread summary for any value distribution
- Gini coefficient as a liquidity concentration measure
- Share of the total held by the top N entries
"""

from typing import Dict, Iterable

import numpy as _np

__all__ = ["StatisticalAnalyzer"]


class StatisticalAnalyzer:
    """Static helpers for summarizing value distributions.

    Example:
        ```python
        liquidity = [pair.liquidity_usd for pair in batch.records]
        stats = StatisticalAnalyzer.calculate_distribution_stats(liquidity)
        ```
    """

    @staticmethod
    def _as_array(values: Iterable[float]) -> _np.ndarray:
        return _np.asarray(list(values), dtype=float)

    @staticmethod
    def calculate_gini_coefficient(values: Iterable[float]) -> float:
        """Calculate Gini coefficient for a liquidity distribution.

        Ranges from 0 (liquidity spread evenly across pairs) to 1 (all
        liquidity concentrated in a single pair).

        Args:
            values: Non-negative values (e.g. per-pair USD liquidity)

        Returns:
            float: Gini coefficient between 0 and 1
        """
        arr = StatisticalAnalyzer._as_array(values)
        if len(arr) == 0:
            return 0.0

        sorted_values = _np.sort(arr)
        n = len(sorted_values)

        total = _np.sum(sorted_values)
        if total == 0:
            return 0.0

        cumsum = _np.sum((2 * _np.arange(1, n + 1) - n - 1) * sorted_values)
        gini = cumsum / (n * total)

        return float(max(0.0, min(1.0, gini)))

    @staticmethod
    def calculate_top_share(values: Iterable[float], top_n: int = 5) -> float:
        """Percentage of the total held by the ``top_n`` largest values."""
        arr = StatisticalAnalyzer._as_array(values)
        total = float(_np.sum(arr)) if len(arr) else 0.0
        if total <= 0:
            return 0.0

        top = _np.sort(arr)[::-1][:top_n]
        return float(_np.sum(top) / total * 100)

    @staticmethod
    def calculate_distribution_stats(values: Iterable[float]) -> Dict[str, float]:
        """Calculate distribution statistics for any collection of values.

        Returns:
            dict: Percentiles, spread and concentration; empty for no input
        """
        arr = StatisticalAnalyzer._as_array(values)
        if len(arr) == 0:
            return {}

        stats = {}
        for p in (10, 25, 50, 75, 90, 95, 99):
            stats[f"p{p}"] = float(_np.percentile(arr, p))

        stats.update({
            "mean": float(_np.mean(arr)),
            "median": float(_np.median(arr)),
            "std": float(_np.std(arr)),
            "min": float(_np.min(arr)),
            "max": float(_np.max(arr)),
            "range": float(_np.max(arr) - _np.min(arr)),
            "iqr": float(_np.percentile(arr, 75) - _np.percentile(arr, 25)),
            "gini_coefficient": StatisticalAnalyzer.calculate_gini_coefficient(arr),
        })

        return stats
