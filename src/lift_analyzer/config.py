"""
Lift Analyzer Configuration Module
==================================

This module contains configuration settings and physical constants for
the atmosphere model, the buoyancy solver and the trend classifier.

Physical Constants:
------------------
- GRAVITY: Standard gravitational acceleration (9.80665 m/s²)
- GAS_CONSTANT_AIR: Specific gas constant for dry air (287.05287 J/(kg·K))
- ISA_LAYERS: International Standard Atmosphere layer table (0-51 km)

Usage:
------
    from src.lift_analyzer.config import LiftAnalyzerConfig

    config = LiftAnalyzerConfig(model_ceiling_km=15.0)
    gas_density = config.get_lift_gas_density()
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .models.atmosphere import AtmosphericLayer, validate_layer_table


# =============================================================================
# Physical Constants
# =============================================================================

# Standard gravitational acceleration (m/s²)
GRAVITY = 9.80665

# Specific gas constant for dry air (J/(kg·K)), ISA value
GAS_CONSTANT_AIR = 287.05287

# Ratio of specific heats for air
GAMMA_AIR = 1.4

# ISA sea level conditions
ISA_TEMPERATURE_SEA_LEVEL_C = 15.0
ISA_PRESSURE_SEA_LEVEL_KPA = 101.325
AIR_DENSITY_SEA_LEVEL = 1.225

# Mean Earth radius used for geopotential altitude (km)
EARTH_RADIUS_KM = 6356.766

# Lifting gas densities at ISA sea level (kg/m³)
HELIUM_DENSITY = 0.1785
HYDROGEN_DENSITY = 0.0899

# Lowest accepted ambient temperature bound (°C). Much colder bounds let the
# blended profile cool faster, relative to its absolute temperature, than
# pressure falls, so density would rise with altitude.
AMBIENT_TEMPERATURE_FLOOR_C = -100.0


# =============================================================================
# ISA Layer Table
# =============================================================================

# Layer bases are geopotential altitudes; base pressures are the
# published ISA values
ISA_LAYERS: Tuple[AtmosphericLayer, ...] = (
    AtmosphericLayer("troposphere", 0.0, 15.0, -6.5, 101.325),
    AtmosphericLayer("tropopause", 11.0, -56.5, 0.0, 22.632),
    AtmosphericLayer("stratosphere", 20.0, -56.5, 1.0, 5.4748),
    AtmosphericLayer("upper stratosphere", 32.0, -44.5, 2.8, 0.86802),
    AtmosphericLayer("stratopause", 47.0, -2.5, 0.0, 0.11091),
)

# Top of the last layer in the table (km)
ISA_TABLE_TOP_KM = 51.0


class LiftGas(Enum):
    """Lifting gases with their sea-level densities (kg/m³)."""
    HELIUM = "helium"
    HYDROGEN = "hydrogen"

    @property
    def density_kg_m3(self) -> float:
        return HELIUM_DENSITY if self is LiftGas.HELIUM else HYDROGEN_DENSITY


@dataclass(frozen=True)
class TrendThresholds:
    """
    Thresholds for lift-to-weight trend classification.

    Attributes:
    ----------
    declining_slope : float
        Slope below which the trend is classified as declining.

    ceiling_ratio : float
        Current ratio below which the airship is near its ceiling.

    optimal_ratio_min, optimal_ratio_max : float
        Inclusive band of ratios considered an optimal lift reserve.

    flat_slope : float
        Absolute slope within which the trend is considered flat.
    """
    declining_slope: float = -0.02
    ceiling_ratio: float = 1.05
    optimal_ratio_min: float = 1.1
    optimal_ratio_max: float = 1.3
    flat_slope: float = 0.02


@dataclass
class LiftAnalyzerConfig:
    """
    Configuration settings for the Lift Analyzer module.

    Attributes:
    ----------
    model_ceiling_km : float
        Highest altitude the atmosphere model will answer for (km).
        Default 20 km. May be raised up to the top of the layer table.

    altitude_is_geometric : bool
        Treat input altitudes as geometric (height above sea level) and
        convert them to geopotential altitude for the layer table.
        False = inputs are already geopotential.

    lift_gas : LiftGas
        Lifting gas used for buoyancy calculations. Default helium.

    lift_gas_density_kg_m3 : float, optional
        Explicit lifting gas density (kg/m³). Overrides the density of
        lift_gas when set.

    design_lift_reserve : float
        Fractional volume margin added to the envelope sized for the
        target altitude. 0.2 = envelope 20% larger than neutral buoyancy.

    root_finding_tolerance : float
        Convergence tolerance of the buoyancy ceiling search (km).

    chart_altitudes_km : tuple of float
        Altitudes sampled for the atmosphere table and altitude profile.

    trend : TrendThresholds
        Trend classification thresholds.

    layers : tuple of AtmosphericLayer
        Atmosphere layer table, ordered by base altitude.
    """

    # -------------------------------------------------------------------------
    # Atmosphere Model
    # -------------------------------------------------------------------------

    model_ceiling_km: float = 20.0
    altitude_is_geometric: bool = True
    layers: Tuple[AtmosphericLayer, ...] = ISA_LAYERS
    layer_table_top_km: float = ISA_TABLE_TOP_KM

    # -------------------------------------------------------------------------
    # Lifting Gas
    # -------------------------------------------------------------------------

    lift_gas: LiftGas = LiftGas.HELIUM
    lift_gas_density_kg_m3: Optional[float] = None

    # -------------------------------------------------------------------------
    # Envelope Sizing
    # -------------------------------------------------------------------------

    # Typical: 0.1-0.3 to leave margin for ballast and climb
    design_lift_reserve: float = 0.2

    # Absolute tolerance for the buoyancy ceiling root search (km)
    root_finding_tolerance: float = 1e-6

    # -------------------------------------------------------------------------
    # Output Tables
    # -------------------------------------------------------------------------

    chart_altitudes_km: Tuple[float, ...] = (0.0, 5.0, 10.0, 15.0, 20.0)

    # -------------------------------------------------------------------------
    # Trend Analysis
    # -------------------------------------------------------------------------

    trend: TrendThresholds = field(default_factory=TrendThresholds)

    def get_lift_gas_density(self) -> float:
        """Return the lifting gas density in effect (kg/m³)."""
        if self.lift_gas_density_kg_m3 is not None:
            return self.lift_gas_density_kg_m3
        return self.lift_gas.density_kg_m3

    def get_lift_gas_label(self) -> str:
        """Short label of the lifting gas for reports."""
        if self.lift_gas_density_kg_m3 is not None:
            return "custom"
        return self.lift_gas.value

    def validate(self) -> Tuple[bool, str]:
        """
        Validate configuration parameters.

        Returns:
        -------
        Tuple[bool, str]
            (is_valid, error_message)
        """
        errors = []

        try:
            validate_layer_table(self.layers)
        except ValueError as e:
            errors.append(str(e))

        if not 0 < self.model_ceiling_km <= self.layer_table_top_km:
            errors.append(
                f"Model ceiling must be within (0, {self.layer_table_top_km}] km"
            )
        if self.layers and self.layers[-1].base_altitude_km >= self.layer_table_top_km:
            errors.append("Layer table top must be above the last layer base")
        if self.get_lift_gas_density() <= 0:
            errors.append("Lifting gas density must be positive")
        if self.design_lift_reserve < 0:
            errors.append("Design lift reserve cannot be negative")
        for altitude in self.chart_altitudes_km:
            if not 0 <= altitude <= self.model_ceiling_km:
                errors.append(
                    f"Chart altitude {altitude} km outside 0-{self.model_ceiling_km} km"
                )
                break

        thresholds = self.trend
        if thresholds.optimal_ratio_min > thresholds.optimal_ratio_max:
            errors.append("Optimal ratio band is inverted")
        if thresholds.flat_slope < 0:
            errors.append("Flat slope tolerance cannot be negative")

        if errors:
            return False, "; ".join(errors)
        return True, ""


# =============================================================================
# Default Configuration Instance
# =============================================================================

DEFAULT_CONFIG = LiftAnalyzerConfig()
