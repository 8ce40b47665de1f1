"""
Calculation Pipeline
====================

Runs one lift analysis end to end:

    Validator -> AtmosphericModel -> LiftCalculator -> TrendAnalyzer

and assembles a single immutable CalculationResult.

Failure policy:
- Input problems are collected by the Validator and raised together as
  InputValidationError before any physics runs.
- ModelRangeError and LiftInfeasibleError abort the request as-is.

Usage:
------
    from src.lift_analyzer import CalculationPipeline

    pipeline = CalculationPipeline()
    result = pipeline.run({"weightKg": "1000", "targetAltitudeKm": "10"})
    print(result.summary())
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .config import LiftAnalyzerConfig, DEFAULT_CONFIG
from .errors import InputValidationError
from .models.airship import AirshipConfig, LiftResult, AltitudeProfilePoint
from .models.history import HistoricalRecord, TrendClassification
from .calculations.atmosphere import AtmosphericModel
from .calculations.lift import LiftCalculator
from .calculations.trend import TrendAnalyzer
from .validator import Validator
from .debugger import CalculationDebugger
from .debug_trace import trace_lift_calculation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculationResult:
    """
    Complete output of one lift analysis.

    Attributes:
    ----------
    config : AirshipConfig
        The validated input

    lift : LiftResult
        Volumes, excess lift, ratio and atmosphere table

    trend : TrendClassification
        Trend of the lift-to-weight history

    profile : tuple of AltitudeProfilePoint
        Lift capacity and reserve of the design envelope by altitude

    buoyancy_ceiling_km : float or None
        Altitude where the design envelope's lift equals the weight,
        None if outside the model range

    history : tuple of HistoricalRecord
        The history the trend was computed from
    """
    config: AirshipConfig
    lift: LiftResult
    trend: TrendClassification
    profile: Tuple[AltitudeProfilePoint, ...] = ()
    buoyancy_ceiling_km: Optional[float] = None
    history: Tuple[HistoricalRecord, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "config": self.config.to_dict(),
            "lift": self.lift.to_dict(),
            "trend": self.trend.to_dict(),
            "profile": [p.to_dict() for p in self.profile],
            "buoyancy_ceiling_km": self.buoyancy_ceiling_km,
            "history": [r.to_dict() for r in self.history],
        }

    def summary(self) -> str:
        """Generate a formatted summary string."""
        lift = self.lift
        ceiling = (f"{self.buoyancy_ceiling_km:.2f} km" if self.buoyancy_ceiling_km is not None
                   else "outside model range")
        return (
            f"Lift Analysis: {self.config.weight_kg:g} kg @ "
            f"{self.config.target_altitude_km:g} km ({lift.lift_gas})\n"
            f"{'='*50}\n"
            f"Volume (sea level): {lift.volume_sea_level_m3:.1f} m³\n"
            f"Volume (target): {lift.volume_target_altitude_m3:.1f} m³\n"
            f"Design envelope: {lift.envelope_volume_m3:.1f} m³\n"
            f"{'='*50}\n"
            f"Excess lift (sea level): {lift.excess_lift_sea_level_kg:.1f} kg\n"
            f"Excess lift (target): {lift.excess_lift_target_altitude_kg:.1f} kg\n"
            f"Lift-to-weight ratio: {lift.lift_to_weight_ratio:.3f}\n"
            f"Buoyancy ceiling: {ceiling}\n"
            f"{'='*50}\n"
            f"Trend: {self.trend.describe()} (slope {self.trend.slope:+.4f})\n"
        )


class CalculationPipeline:
    """
    Orchestrates validation, atmosphere, lift and trend calculations.

    Attributes:
    ----------
    config : LiftAnalyzerConfig
        Engine configuration

    Example:
    -------
        pipeline = CalculationPipeline(LiftAnalyzerConfig(design_lift_reserve=0.1))

        history = [HistoricalRecord("2023-01-01", 1.2), HistoricalRecord("2023-02-01", 1.3)]
        result = pipeline.run(form_fields, history)
    """

    def __init__(self, config: Optional[LiftAnalyzerConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG

        is_valid, error = self.config.validate()
        if not is_valid:
            raise ValueError(f"Invalid configuration: {error}")

        self.validator = Validator(self.config)
        self.atmosphere = AtmosphericModel(self.config)
        self.lift_calculator = LiftCalculator(self.config, self.atmosphere)
        self.trend_analyzer = TrendAnalyzer(self.config)

    def validate(self, raw_input: Mapping[str, Any]) -> AirshipConfig:
        """
        Validate raw input.

        Raises:
        ------
        InputValidationError
            With every field error found.
        """
        outcome = self.validator.validate(raw_input)
        if not outcome.is_valid:
            logger.info("Input rejected with %d validation error(s)", len(outcome.errors))
            raise InputValidationError(outcome.errors)
        return outcome.config

    def run(
        self,
        raw_input: Mapping[str, Any],
        history: Sequence[HistoricalRecord] = ()
    ) -> CalculationResult:
        """Validate raw form input, then calculate."""
        return self.calculate(self.validate(raw_input), history)

    def calculate(
        self,
        airship: AirshipConfig,
        history: Sequence[HistoricalRecord] = ()
    ) -> CalculationResult:
        """
        Calculate lift figures for a validated configuration.

        Raises:
        ------
        ModelRangeError
            If the target altitude is outside the atmosphere model.

        LiftInfeasibleError
            If sea level or the target altitude has no net buoyancy.
        """
        logger.info(
            "Calculating lift: %g kg @ %g km", airship.weight_kg, airship.target_altitude_km
        )
        temp_range = airship.temperature_range

        sea_level = self.atmosphere.compute_properties(0.0, temp_range)
        target = self.atmosphere.compute_properties(airship.target_altitude_km, temp_range)

        table_altitudes = set(self.config.chart_altitudes_km)
        table_altitudes.update((0.0, airship.target_altitude_km))
        samples = self.atmosphere.sample_altitudes(table_altitudes, temp_range)

        lift = self.lift_calculator.compute_lift(airship.weight_kg, sea_level, target, samples)

        history = tuple(history)
        trend = self.trend_analyzer.classify(history, lift.lift_to_weight_ratio)

        profile = self.lift_calculator.altitude_profile(
            airship.weight_kg, lift.envelope_volume_m3, table_altitudes, temp_range
        )
        ceiling = self.lift_calculator.find_buoyancy_ceiling(
            airship.weight_kg, lift.envelope_volume_m3, temp_range
        )

        logger.info(
            "Lift ratio %.3f, trend %s", lift.lift_to_weight_ratio, trend.kind.value
        )
        return CalculationResult(
            config=airship,
            lift=lift,
            trend=trend,
            profile=profile,
            buoyancy_ceiling_km=ceiling,
            history=history,
        )

    def trace(self, airship: AirshipConfig) -> CalculationDebugger:
        """Step-by-step calculation details for a validated configuration."""
        return trace_lift_calculation(airship, self.config)
