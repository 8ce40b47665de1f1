"""
Lift Analyzer Data Models
=========================

Immutable value objects exchanged between the engine components.
"""

from .atmosphere import (
    AtmosphericLayer,
    AtmosphereSample,
    TemperatureRange,
    validate_layer_table,
    KELVIN_OFFSET,
)
from .airship import AirshipConfig, LiftResult, AltitudeProfilePoint
from .history import HistoricalRecord, TrendKind, TrendClassification

__all__ = [
    "AtmosphericLayer",
    "AtmosphereSample",
    "TemperatureRange",
    "validate_layer_table",
    "KELVIN_OFFSET",
    "AirshipConfig",
    "LiftResult",
    "AltitudeProfilePoint",
    "HistoricalRecord",
    "TrendKind",
    "TrendClassification",
]
