"""
Lift-to-Weight Trend Analysis
=============================

Classifies a chronological series of lift-to-weight ratios.

Rules, checked in order:
1. slope < declining_slope                      -> Declining
2. current ratio < ceiling_ratio                -> ApproachingCeiling
3. ratio in optimal band and |slope| flat       -> OptimalReserve
4. otherwise                                    -> Stable

An empty history is not an error; it is classified as Stable with a
zero slope.
"""

from typing import Optional, Sequence

import numpy as np

from ..config import LiftAnalyzerConfig, DEFAULT_CONFIG, TrendThresholds
from ..models.history import HistoricalRecord, TrendKind, TrendClassification


def compute_slope(ratios: Sequence[float]) -> float:
    """
    Least-squares slope of ratio against record index.

    Fewer than two points have no defined slope; 0 is returned.
    """
    if len(ratios) < 2:
        return 0.0
    indices = np.arange(len(ratios), dtype=float)
    slope, _intercept = np.polyfit(indices, np.asarray(ratios, dtype=float), 1)
    return float(slope)


class TrendAnalyzer:
    """
    Trend classifier for lift-to-weight history.

    Attributes:
    ----------
    thresholds : TrendThresholds
        Classification thresholds
    """

    def __init__(self, config: Optional[LiftAnalyzerConfig] = None):
        config = config if config is not None else DEFAULT_CONFIG
        self.thresholds: TrendThresholds = config.trend

    def classify(
        self,
        history: Sequence[HistoricalRecord],
        current_ratio: float
    ) -> TrendClassification:
        """
        Classify the trend of a ratio history.

        Parameters:
        ----------
        history : sequence of HistoricalRecord
            Records in chronological order

        current_ratio : float
            Lift-to-weight ratio of the current configuration

        Returns:
        -------
        TrendClassification
        """
        if not history:
            return TrendClassification(kind=TrendKind.STABLE, slope=0.0)

        t = self.thresholds
        slope = compute_slope([r.lift_to_weight_ratio for r in history])

        if slope < t.declining_slope:
            kind = TrendKind.DECLINING
        elif current_ratio < t.ceiling_ratio:
            kind = TrendKind.APPROACHING_CEILING
        elif (t.optimal_ratio_min <= current_ratio <= t.optimal_ratio_max
              and -t.flat_slope <= slope <= t.flat_slope):
            kind = TrendKind.OPTIMAL_RESERVE
        else:
            kind = TrendKind.STABLE

        return TrendClassification(kind=kind, slope=slope)
