"""
Buoyant Lift Calculations
=========================

Envelope volume, lift capacity and excess lift for a lighter-than-air
craft. The lift balance used throughout is

    L = (ρ_air - ρ_gas) × g × V
    V_required = W / ((ρ_air - ρ_gas) × g)
    Excess Lift = L - W

so an envelope of exactly V_required has zero excess lift.

The module exposes pure functions plus the LiftCalculator class, which
binds them to a lifting gas and an atmosphere model.
"""

import logging
import math
from typing import Iterable, Optional, Tuple

from scipy import optimize

from ..config import LiftAnalyzerConfig, DEFAULT_CONFIG, GRAVITY
from ..errors import LiftInfeasibleError
from ..models.atmosphere import AtmosphereSample, TemperatureRange
from ..models.airship import LiftResult, AltitudeProfilePoint
from .atmosphere import AtmosphericModel

logger = logging.getLogger(__name__)


# =============================================================================
# Pure Functions
# =============================================================================

def compute_required_volume(
    weight_kg: float,
    sample: AtmosphereSample,
    lift_gas_density_kg_m3: float
) -> float:
    """
    Envelope volume for neutral buoyancy.

    V = W / ((ρ_air - ρ_gas) × g)

    Parameters:
    ----------
    weight_kg : float
        Total weight (kg)

    sample : AtmosphereSample
        Atmosphere at the altitude of interest

    lift_gas_density_kg_m3 : float
        Lifting gas density (kg/m³)

    Returns:
    -------
    float
        Required volume (m³)

    Raises:
    ------
    LiftInfeasibleError
        If the air is not denser than the lifting gas, or the volume
        is not finite.
    """
    if weight_kg <= 0:
        raise ValueError(f"Weight must be positive, got {weight_kg}")

    net_density = sample.density_kg_m3 - lift_gas_density_kg_m3
    if net_density <= 0:
        raise LiftInfeasibleError(sample.altitude_km, -net_density)

    volume = weight_kg / (net_density * GRAVITY)
    if not math.isfinite(volume):
        raise LiftInfeasibleError(sample.altitude_km, 0.0, reason="volume is not finite")

    return volume


def compute_lift_capacity(
    volume_m3: float,
    sample: AtmosphereSample,
    lift_gas_density_kg_m3: float
) -> float:
    """
    Gross buoyant lift of an envelope (kg).

    L = (ρ_air - ρ_gas) × g × V
    """
    return (sample.density_kg_m3 - lift_gas_density_kg_m3) * GRAVITY * volume_m3


def compute_excess_lift(
    volume_m3: float,
    sample: AtmosphereSample,
    lift_gas_density_kg_m3: float,
    weight_kg: float
) -> float:
    """
    Lift left over after carrying the weight (kg).

    Positive = net lift margin; negative = the envelope cannot reach
    neutral buoyancy at this altitude.
    """
    return compute_lift_capacity(volume_m3, sample, lift_gas_density_kg_m3) - weight_kg


def compute_lift_to_weight_ratio(excess_lift_kg: float, weight_kg: float) -> float:
    """Total lift / weight. Values above 1 mean positive buoyancy."""
    if weight_kg <= 0:
        raise ValueError(f"Weight must be positive, got {weight_kg}")
    return (excess_lift_kg + weight_kg) / weight_kg


# =============================================================================
# Calculator
# =============================================================================

class LiftCalculator:
    """
    Buoyancy solver bound to a lifting gas and an atmosphere model.

    Attributes:
    ----------
    config : LiftAnalyzerConfig
        Configuration settings

    atmosphere : AtmosphericModel
        Atmosphere used for profiles and the ceiling search

    lift_gas_density_kg_m3 : float
        Lifting gas density (kg/m³)

    Example:
    -------
        calculator = LiftCalculator()
        sample = calculator.atmosphere.compute_properties(10.0)
        volume = calculator.required_volume(1000.0, sample)  # ~434 m³
    """

    def __init__(
        self,
        config: Optional[LiftAnalyzerConfig] = None,
        atmosphere: Optional[AtmosphericModel] = None
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        self.atmosphere = atmosphere if atmosphere is not None else AtmosphericModel(self.config)
        self.lift_gas_density_kg_m3 = self.config.get_lift_gas_density()

    def required_volume(self, weight_kg: float, sample: AtmosphereSample) -> float:
        """Neutral-buoyancy volume at the sample altitude (m³)."""
        return compute_required_volume(weight_kg, sample, self.lift_gas_density_kg_m3)

    def excess_lift(self, volume_m3: float, sample: AtmosphereSample, weight_kg: float) -> float:
        """Excess lift of an envelope at the sample altitude (kg)."""
        return compute_excess_lift(volume_m3, sample, self.lift_gas_density_kg_m3, weight_kg)

    def design_envelope_volume(self, volume_target_m3: float) -> float:
        """Envelope volume including the configured lift reserve (m³)."""
        return volume_target_m3 * (1.0 + self.config.design_lift_reserve)

    # -------------------------------------------------------------------------
    # Envelope Sizing
    # -------------------------------------------------------------------------

    def compute_lift(
        self,
        weight_kg: float,
        sea_level: AtmosphereSample,
        target: AtmosphereSample,
        atmosphere_samples: Tuple[AtmosphereSample, ...] = ()
    ) -> LiftResult:
        """
        Size the envelope and evaluate its lift margin.

        Volumes are solved for neutral buoyancy at sea level and at the
        target altitude. The design envelope is the target volume plus
        the configured reserve; excess lift at both altitudes and the
        lift-to-weight ratio at the target are evaluated for it.

        Raises:
        ------
        LiftInfeasibleError
            If either altitude has no net buoyancy.
        """
        volume_sea_level = self.required_volume(weight_kg, sea_level)
        volume_target = self.required_volume(weight_kg, target)
        envelope = self.design_envelope_volume(volume_target)

        excess_sea_level = self.excess_lift(envelope, sea_level, weight_kg)
        excess_target = self.excess_lift(envelope, target, weight_kg)
        ratio = compute_lift_to_weight_ratio(excess_target, weight_kg)

        logger.debug(
            "Envelope %.2f m³: excess %.2f kg @ 0 km, %.2f kg @ %.2f km",
            envelope, excess_sea_level, excess_target, target.altitude_km
        )

        return LiftResult(
            volume_sea_level_m3=volume_sea_level,
            volume_target_altitude_m3=volume_target,
            excess_lift_sea_level_kg=excess_sea_level,
            excess_lift_target_altitude_kg=excess_target,
            lift_to_weight_ratio=ratio,
            atmosphere_samples=tuple(atmosphere_samples),
            envelope_volume_m3=envelope,
            lift_gas=self.config.get_lift_gas_label(),
            lift_gas_density_kg_m3=self.lift_gas_density_kg_m3,
        )

    # -------------------------------------------------------------------------
    # Altitude Sweeps
    # -------------------------------------------------------------------------

    def altitude_profile(
        self,
        weight_kg: float,
        envelope_volume_m3: float,
        altitudes_km: Iterable[float],
        temp_override: Optional[TemperatureRange] = None
    ) -> Tuple[AltitudeProfilePoint, ...]:
        """
        Lift capacity and reserve of a fixed envelope across altitudes.

        Altitudes where no net buoyancy exists get required_volume_m3 = None
        instead of an error, so the whole sweep is always returned.
        """
        points = []
        for sample in self.atmosphere.sample_altitudes(altitudes_km, temp_override):
            try:
                required = self.required_volume(weight_kg, sample)
            except LiftInfeasibleError:
                required = None

            capacity = compute_lift_capacity(
                envelope_volume_m3, sample, self.lift_gas_density_kg_m3
            )
            points.append(AltitudeProfilePoint(
                altitude_km=sample.altitude_km,
                required_volume_m3=required,
                lift_capacity_kg=capacity,
                lift_reserve_kg=capacity - weight_kg,
            ))
        return tuple(points)

    def find_buoyancy_ceiling(
        self,
        weight_kg: float,
        envelope_volume_m3: float,
        temp_override: Optional[TemperatureRange] = None
    ) -> Optional[float]:
        """
        Altitude at which a fixed envelope's lift equals the weight (km).

        Returns None when there is no crossing inside the model range:
        either the envelope cannot lift the weight at sea level, or it
        still has excess lift at the model ceiling.
        """
        def lift_residual(altitude_km: float) -> float:
            sample = self.atmosphere.compute_properties(altitude_km, temp_override)
            return compute_excess_lift(
                envelope_volume_m3, sample, self.lift_gas_density_kg_m3, weight_kg
            )

        ceiling = self.atmosphere.ceiling_km
        residual_low = lift_residual(0.0)
        residual_high = lift_residual(ceiling)

        if residual_low < 0 or residual_high > 0:
            return None
        if residual_low == 0:
            return 0.0
        if residual_high == 0:
            return ceiling

        result = optimize.root_scalar(
            lift_residual,
            bracket=(0.0, ceiling),
            method="brentq",
            xtol=self.config.root_finding_tolerance,
        )
        return float(result.root)
