"""
Lift Analyzer Calculations Module
=================================

Atmosphere, buoyancy and trend calculations.
Altitudes are in km, densities in kg/m³, pressures in kPa.
"""

from .atmosphere import AtmosphericModel

from .lift import (
    LiftCalculator,
    compute_required_volume,
    compute_lift_capacity,
    compute_excess_lift,
    compute_lift_to_weight_ratio,
)

from .trend import TrendAnalyzer, compute_slope

__all__ = [
    # Atmosphere
    "AtmosphericModel",
    # Lift
    "LiftCalculator",
    "compute_required_volume",
    "compute_lift_capacity",
    "compute_excess_lift",
    "compute_lift_to_weight_ratio",
    # Trend
    "TrendAnalyzer",
    "compute_slope",
]
