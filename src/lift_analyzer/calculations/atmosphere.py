"""
Atmospheric Model
=================

Multi-layer International Standard Atmosphere (ISA) model.

For each layer the model computes:
    H = r0 × z / (r0 + z)                      (geopotential altitude)
    T = T_b + L × (H - H_b)
    p = p_b × (T / T_b)^(-g0 / (L × R))        (L ≠ 0)
    p = p_b × exp(-g0 × (H - H_b) / (R × T_b))  (L = 0, isothermal)
    ρ = p / (R × T)

Pressure always follows the standard temperature profile. A user
temperature range only changes the temperature used in the ideal-gas
relation, the same way an ISA temperature offset does, and the result is
clamped to the range between sea level and the range's span top.

Usage:
------
    from src.lift_analyzer.calculations.atmosphere import AtmosphericModel

    model = AtmosphericModel()
    sample = model.compute_properties(10.0)
    print(f"{sample.density_kg_m3:.4f} kg/m³")  # ~0.4135
"""

import logging
import math
from typing import Iterable, Optional, Tuple

import numpy as np

from ..config import (
    LiftAnalyzerConfig,
    DEFAULT_CONFIG,
    GRAVITY,
    GAS_CONSTANT_AIR,
    GAMMA_AIR,
    EARTH_RADIUS_KM,
)
from ..errors import ModelRangeError, AtmosphereTemperatureError
from ..models.atmosphere import (
    AtmosphericLayer,
    AtmosphereSample,
    TemperatureRange,
    KELVIN_OFFSET,
    validate_layer_table,
)

logger = logging.getLogger(__name__)


class AtmosphericModel:
    """
    Standard atmosphere calculator.

    Attributes:
    ----------
    config : LiftAnalyzerConfig
        Configuration holding the layer table and model ceiling

    Example:
    -------
        model = AtmosphericModel()

        # Sea level, standard day
        model.compute_properties(0.0).density_kg_m3  # 1.225 kg/m³

        # Warm day pinned between 5 and 25 °C from 0 to 10 km
        rng = TemperatureRange(min_c=5.0, max_c=25.0, span_km=10.0)
        model.compute_properties(5.0, rng)
    """

    def __init__(self, config: Optional[LiftAnalyzerConfig] = None):
        self.config = config if config is not None else DEFAULT_CONFIG
        validate_layer_table(self.config.layers)
        if self.config.model_ceiling_km > self.config.layer_table_top_km:
            raise ValueError(
                f"Model ceiling {self.config.model_ceiling_km} km is above the "
                f"layer table top ({self.config.layer_table_top_km} km)"
            )

    @property
    def ceiling_km(self) -> float:
        """Highest supported altitude (km)."""
        return self.config.model_ceiling_km

    # =========================================================================
    # Layer Lookup
    # =========================================================================

    def check_altitude(self, altitude_km: float) -> None:
        """Raise ModelRangeError unless 0 <= altitude_km <= ceiling."""
        if not math.isfinite(altitude_km) or altitude_km < 0 or altitude_km > self.ceiling_km:
            raise ModelRangeError(altitude_km, self.ceiling_km)

    def geopotential_km(self, altitude_km: float) -> float:
        """Geopotential altitude used by the layer table (km)."""
        if not self.config.altitude_is_geometric:
            return altitude_km
        return EARTH_RADIUS_KM * altitude_km / (EARTH_RADIUS_KM + altitude_km)

    def _layer_at(self, geopotential_km: float) -> AtmosphericLayer:
        layers = self.config.layers
        for layer, upper in zip(layers, layers[1:]):
            if layer.base_altitude_km <= geopotential_km < upper.base_altitude_km:
                return layer
        return layers[-1]

    def find_layer(self, altitude_km: float) -> AtmosphericLayer:
        """
        Return the layer whose [base, next base) interval contains the altitude.

        The last layer extends to the top of the table.
        """
        return self._layer_at(self.geopotential_km(altitude_km))

    # =========================================================================
    # Temperature
    # =========================================================================

    def nominal_temperature_c(self, altitude_km: float) -> float:
        """Standard (ISA) temperature at altitude (°C)."""
        height_km = self.geopotential_km(altitude_km)
        layer = self._layer_at(height_km)
        return layer.base_temperature_c + layer.lapse_rate_c_per_km * (
            height_km - layer.base_altitude_km
        )

    def temperature_offset_c(self, altitude_km: float, temp_range: TemperatureRange) -> float:
        """
        Offset applied to the nominal temperature for a user range.

        The offset moves linearly from the value that brings the sea-level
        temperature into the range to the value that brings the span-top
        temperature into the range. Above the span the span-top offset holds.
        """
        t_low = self.nominal_temperature_c(0.0)
        t_high = self.nominal_temperature_c(temp_range.span_km)
        offset_low = temp_range.clamp(t_low) - t_low
        offset_high = temp_range.clamp(t_high) - t_high

        if temp_range.span_km <= 0:
            fraction = 0.0
        else:
            fraction = min(max(altitude_km / temp_range.span_km, 0.0), 1.0)

        return offset_low + fraction * (offset_high - offset_low)

    def temperature_c(
        self,
        altitude_km: float,
        temp_override: Optional[TemperatureRange] = None
    ) -> float:
        """Ambient temperature at altitude, including any user range (°C)."""
        temperature = self.nominal_temperature_c(altitude_km)
        if temp_override is not None:
            temperature += self.temperature_offset_c(altitude_km, temp_override)
            # Between sea level and the span top the range is a hard bound
            if altitude_km <= temp_override.span_km:
                temperature = temp_override.clamp(temperature)
        return temperature

    # =========================================================================
    # Pressure and Density
    # =========================================================================

    def pressure_kpa(self, altitude_km: float) -> float:
        """Static pressure at altitude from the barometric formula (kPa)."""
        height_km = self.geopotential_km(altitude_km)
        layer = self._layer_at(height_km)
        height_m = (height_km - layer.base_altitude_km) * 1000.0
        base_temp_k = layer.base_temperature_k

        if layer.is_isothermal:
            return layer.base_pressure_kpa * math.exp(
                -GRAVITY * height_m / (GAS_CONSTANT_AIR * base_temp_k)
            )

        lapse_k_per_m = layer.lapse_rate_c_per_km / 1000.0
        temp_k = base_temp_k + lapse_k_per_m * height_m
        exponent = -GRAVITY / (lapse_k_per_m * GAS_CONSTANT_AIR)
        return layer.base_pressure_kpa * (temp_k / base_temp_k) ** exponent

    def compute_properties(
        self,
        altitude_km: float,
        temp_override: Optional[TemperatureRange] = None
    ) -> AtmosphereSample:
        """
        Compute density, temperature and pressure at an altitude.

        Parameters:
        ----------
        altitude_km : float
            Altitude above sea level (km)

        temp_override : TemperatureRange, optional
            User temperature range blended over the nominal profile

        Returns:
        -------
        AtmosphereSample

        Raises:
        ------
        ModelRangeError
            If the altitude is negative, above the model ceiling or not finite.

        AtmosphereTemperatureError
            If the temperature range puts the air at or below absolute zero.
        """
        self.check_altitude(altitude_km)

        temperature_c = self.temperature_c(altitude_km, temp_override)
        temperature_k = temperature_c + KELVIN_OFFSET
        if temperature_k <= 0:
            raise AtmosphereTemperatureError(altitude_km, temperature_c)

        pressure_kpa = self.pressure_kpa(altitude_km)

        # Ideal gas law: ρ = p / (R × T)
        density = pressure_kpa * 1000.0 / (GAS_CONSTANT_AIR * temperature_k)

        return AtmosphereSample(
            altitude_km=float(altitude_km),
            density_kg_m3=density,
            temperature_c=temperature_c,
            pressure_kpa=pressure_kpa,
        )

    def speed_of_sound(
        self,
        altitude_km: float,
        temp_override: Optional[TemperatureRange] = None
    ) -> float:
        """
        Speed of sound at altitude (m/s).

        a = sqrt(γ × R × T)
        """
        sample = self.compute_properties(altitude_km, temp_override)
        return math.sqrt(GAMMA_AIR * GAS_CONSTANT_AIR * sample.temperature_k)

    # =========================================================================
    # Tables
    # =========================================================================

    def sample_altitudes(
        self,
        altitudes_km: Iterable[float],
        temp_override: Optional[TemperatureRange] = None
    ) -> Tuple[AtmosphereSample, ...]:
        """Sample the atmosphere at each altitude, sorted and de-duplicated."""
        unique = sorted({float(a) for a in altitudes_km})
        return tuple(self.compute_properties(a, temp_override) for a in unique)

    def standard_table(
        self,
        step_km: float = 5.0,
        temp_override: Optional[TemperatureRange] = None
    ) -> Tuple[AtmosphereSample, ...]:
        """
        Atmosphere table on an evenly spaced grid from sea level to the ceiling.

        The ceiling is always included, even when it is not a multiple
        of step_km.
        """
        if step_km <= 0:
            raise ValueError(f"Step must be positive, got {step_km}")
        num_points = int(math.floor(self.ceiling_km / step_km + 1e-9)) + 1
        grid = np.linspace(0.0, step_km * (num_points - 1), num_points)
        altitudes = list(np.minimum(grid, self.ceiling_km))
        altitudes.append(self.ceiling_km)
        logger.debug("Building atmosphere table with %d points", len(altitudes))
        return self.sample_altitudes(altitudes, temp_override)
