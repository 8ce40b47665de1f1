"""
Lift Analyzer Module
====================

Atmospheric and buoyant-lift calculation engine for airships:
- Multi-layer ISA atmosphere with optional ambient temperature range
- Envelope volume and excess lift at sea level and target altitude
- Lift-to-weight trend classification over a history
- Field-level input validation

Key Classes:
------------
- AtmosphericModel: Density, temperature and pressure by altitude
- LiftCalculator: Envelope sizing, lift profile and buoyancy ceiling
- TrendAnalyzer: Lift-to-weight trend classification
- Validator: Raw form input -> AirshipConfig
- CalculationPipeline: End-to-end calculation

Example Usage:
-------------
    from src.lift_analyzer import CalculationPipeline, HistoricalRecord

    pipeline = CalculationPipeline()
    result = pipeline.run(
        {"weightKg": "1000", "targetAltitudeKm": "10",
         "tempMinC": "", "tempMaxC": ""},
        history=[HistoricalRecord("2023-01-01", 1.2)],
    )

    print(f"Volume at target: {result.lift.volume_target_altitude_m3:.1f} m³")
    print(result.trend.describe())

Units Convention:
----------------
- Altitude: km
- Temperature: °C
- Pressure: kPa
- Density: kg/m³
- Volume: m³
- Weight / lift: kg
"""

from .config import (
    LiftAnalyzerConfig,
    TrendThresholds,
    LiftGas,
    DEFAULT_CONFIG,
    ISA_LAYERS,
    GRAVITY,
    HELIUM_DENSITY,
    HYDROGEN_DENSITY,
    AMBIENT_TEMPERATURE_FLOOR_C,
)
from .errors import (
    LiftAnalysisError,
    InputValidationError,
    ModelRangeError,
    LiftInfeasibleError,
    AtmosphereTemperatureError,
    ValidationError,
    ValidationErrorKind,
)
from .models import (
    AtmosphericLayer,
    AtmosphereSample,
    TemperatureRange,
    AirshipConfig,
    LiftResult,
    AltitudeProfilePoint,
    HistoricalRecord,
    TrendKind,
    TrendClassification,
)
from .calculations import AtmosphericModel, LiftCalculator, TrendAnalyzer
from .validator import Validator, ValidationOutcome
from .pipeline import CalculationPipeline, CalculationResult
from .debugger import CalculationDebugger
from .debug_trace import trace_lift_calculation

__all__ = [
    # Core classes
    "AtmosphericModel",
    "LiftCalculator",
    "TrendAnalyzer",
    "Validator",
    "ValidationOutcome",
    "CalculationPipeline",
    "CalculationResult",
    # Data model
    "AtmosphericLayer",
    "AtmosphereSample",
    "TemperatureRange",
    "AirshipConfig",
    "LiftResult",
    "AltitudeProfilePoint",
    "HistoricalRecord",
    "TrendKind",
    "TrendClassification",
    # Errors
    "LiftAnalysisError",
    "InputValidationError",
    "ModelRangeError",
    "LiftInfeasibleError",
    "AtmosphereTemperatureError",
    "ValidationError",
    "ValidationErrorKind",
    # Config
    "LiftAnalyzerConfig",
    "TrendThresholds",
    "LiftGas",
    "DEFAULT_CONFIG",
    "ISA_LAYERS",
    "GRAVITY",
    "HELIUM_DENSITY",
    "HYDROGEN_DENSITY",
    "AMBIENT_TEMPERATURE_FLOOR_C",
    # Debugger
    "CalculationDebugger",
    "trace_lift_calculation",
]
