"""
Lift History Data Model
=======================

Historical lift-to-weight records and the trend classification produced
from them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class TrendKind(Enum):
    """Lift-to-weight trend categories."""
    APPROACHING_CEILING = "ApproachingCeiling"
    OPTIMAL_RESERVE = "OptimalReserve"
    DECLINING = "Declining"
    STABLE = "Stable"


# User-facing messages for the analysis view
TREND_MESSAGES = {
    TrendKind.APPROACHING_CEILING: "Approaching maximum altitude for current configuration",
    TrendKind.OPTIMAL_RESERVE: "Lift reserve within optimal range",
    TrendKind.DECLINING: "Lift-to-weight ratio is declining",
    TrendKind.STABLE: "Lift-to-weight ratio is stable",
}


@dataclass(frozen=True)
class HistoricalRecord:
    """One dated lift-to-weight observation."""
    date: str
    lift_to_weight_ratio: float

    def to_dict(self) -> Dict[str, Any]:
        return {"date": self.date, "liftToWeightRatio": self.lift_to_weight_ratio}


@dataclass(frozen=True)
class TrendClassification:
    """
    Trend category plus the least-squares slope it was derived from.

    Attributes:
    ----------
    kind : TrendKind
        Classified trend

    slope : float
        Ratio change per record (1/record)
    """
    kind: TrendKind
    slope: float

    def describe(self) -> str:
        """Message shown to the user for this trend."""
        return TREND_MESSAGES[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "slope": self.slope, "message": self.describe()}
